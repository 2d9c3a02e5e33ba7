"""Structured output for ``-o`` / ``--output``.

Renders raw backend objects as JSON, YAML, bare names or a kubectl-style
``jsonpath=<template>``, bypassing the human table and description
renderers entirely.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Mapping

import yaml

from runops.cli.common.jsonpath import parse_template, render_template
from runops.core.errors import UnsupportedOutputFormat
from runops.core.kinds import ResourceKind

OUTPUT_FORMATS = ("json", "yaml", "name", "jsonpath=<template>")
_JSONPATH_PREFIX = "jsonpath="


def _jsonpath_template(fmt: str) -> str | None:
    if fmt.lower().startswith(_JSONPATH_PREFIX):
        return fmt[len(_JSONPATH_PREFIX) :]
    return None


def validate_output_format(output: str | None) -> str | None:
    """Normalize ``output`` and reject formats the printer cannot render."""
    if not output:
        return None
    fmt = output.strip()
    template = _jsonpath_template(fmt)
    if template is not None:
        if not template:
            raise UnsupportedOutputFormat("jsonpath output requires a template")
        parse_template(template)
        return f"{_JSONPATH_PREFIX}{template}"

    fmt = fmt.lower()
    if fmt not in OUTPUT_FORMATS:
        raise UnsupportedOutputFormat(
            f"Unsupported output format '{output}' "
            f"(allowed: {', '.join(OUTPUT_FORMATS)})"
        )
    return fmt


def _object_name(kind: ResourceKind, obj: Mapping[str, Any]) -> str:
    name = (obj.get("metadata") or {}).get("name", "")
    return f"{kind.plural}.{kind.group}/{name}"


def format_object(kind: ResourceKind, obj: Mapping[str, Any], output: str) -> str:
    """Render a single object in a structured format."""
    fmt = validate_output_format(output)
    template = _jsonpath_template(fmt)
    if template is not None:
        return render_template(template, dict(obj)).rstrip("\n")
    if fmt == "name":
        return _object_name(kind, obj)
    if fmt == "yaml":
        return yaml.safe_dump(dict(obj), sort_keys=False).rstrip("\n")
    return json.dumps(obj, indent=4)


def format_list(kind: ResourceKind, objects: Iterable[Mapping[str, Any]], output: str) -> str:
    """Render a list of objects wrapped in a ``List`` envelope."""
    items = list(objects)
    fmt = validate_output_format(output)
    if fmt == "name":
        return "\n".join(_object_name(kind, obj) for obj in items)
    payload = {"apiVersion": "v1", "kind": "List", "items": items}
    template = _jsonpath_template(fmt)
    if template is not None:
        return render_template(template, payload).rstrip("\n")
    if fmt == "yaml":
        return yaml.safe_dump(payload, sort_keys=False).rstrip("\n")
    return json.dumps(payload, indent=4)
