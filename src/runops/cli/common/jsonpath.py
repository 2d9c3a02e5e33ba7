"""kubectl-style ``jsonpath=`` output templates.

A template mixes plain text with ``{...}`` actions:

- ``{.metadata.name}`` prints the values matched by a JSONPath expression,
  relative to the current object (``{@}`` is the object itself),
- ``{range .items[*]}...{end}`` repeats its body for every match,
- ``{"\\n"}`` prints a quoted string literal with escapes decoded.

Expressions are evaluated with jsonpath-ng; this module only handles the
template layer around them.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Union

from jsonpath_ng import JSONPath
from jsonpath_ng.exceptions import JsonPathLexerError, JsonPathParserError
from jsonpath_ng.ext import parse as jsonpath_parse

from runops._logging import get_logger
from runops.core.errors import UnsupportedOutputFormat

logger = get_logger(__name__)


@dataclass(frozen=True)
class _Text:
    value: str


@dataclass(frozen=True)
class _Field:
    expression: str


@dataclass
class _Range:
    expression: str
    body: list[_Node] = field(default_factory=list)


_Node = Union[_Text, _Field, _Range]


def _closing_brace(template: str, start: int) -> int:
    """Return the index of the ``}`` closing the action opened at ``start``."""
    in_quote = False
    i = start + 1
    while i < len(template):
        ch = template[i]
        if in_quote and ch == "\\":
            i += 2
            continue
        if ch == '"':
            in_quote = not in_quote
        elif ch == "}" and not in_quote:
            return i
        i += 1
    raise UnsupportedOutputFormat(f"Unclosed action in jsonpath template: {template!r}")


def _tokenize(template: str) -> list[tuple[str, str]]:
    tokens: list[tuple[str, str]] = []
    pos = 0
    while pos < len(template):
        start = template.find("{", pos)
        if start < 0:
            tokens.append(("text", template[pos:]))
            break
        if start > pos:
            tokens.append(("text", template[pos:start]))
        end = _closing_brace(template, start)
        tokens.append(("action", template[start + 1 : end].strip()))
        pos = end + 1
    return tokens


@lru_cache(maxsize=64)
def _compile(expression: str) -> JSONPath:
    if expression.startswith("@"):
        expression = f"${expression[1:]}"
    path = f"${expression}" if expression.startswith((".", "[")) else expression
    try:
        return jsonpath_parse(path)
    except (JsonPathLexerError, JsonPathParserError) as exc:
        raise UnsupportedOutputFormat(
            f"Invalid jsonpath expression '{expression}': {exc}"
        ) from exc


def _literal(action: str) -> str:
    try:
        return json.loads(action)
    except ValueError as exc:
        raise UnsupportedOutputFormat(f"Invalid string literal {action}") from exc


def parse_template(template: str) -> list[_Node]:
    """
    Parse a jsonpath template into a node tree.

    A template without any ``{`` is treated as a single expression, the way
    kubectl relaxes ``jsonpath=.metadata.name``.

    Raises:
        UnsupportedOutputFormat: On unbalanced braces, unmatched
            ``{range}``/``{end}``, bad literals or invalid expressions.
    """
    if "{" not in template:
        template = f"{{{template}}}"

    root: list[_Node] = []
    stack: list[list[_Node]] = [root]
    for kind, value in _tokenize(template):
        current = stack[-1]
        if kind == "text":
            current.append(_Text(value))
        elif value.startswith('"'):
            current.append(_Text(_literal(value)))
        elif value == "end":
            if len(stack) == 1:
                raise UnsupportedOutputFormat("Unexpected {end} in jsonpath template")
            stack.pop()
        elif value.startswith("range "):
            expression = value[len("range ") :].strip()
            _compile(expression)
            node = _Range(expression)
            current.append(node)
            stack.append(node.body)
        else:
            if value not in ("@", "$"):
                _compile(value)
            current.append(_Field(value))

    if len(stack) != 1:
        raise UnsupportedOutputFormat("Missing {end} in jsonpath template")
    return root


def _find(expression: str, data: Any) -> list[Any]:
    if expression in ("@", "$"):
        return [data]
    return [match.value for match in _compile(expression).find(data)]


def _format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def _render(nodes: list[_Node], data: Any, parts: list[str]) -> None:
    for node in nodes:
        if isinstance(node, _Text):
            parts.append(node.value)
        elif isinstance(node, _Range):
            for item in _find(node.expression, data):
                _render(node.body, item, parts)
        else:
            parts.append(" ".join(_format_value(v) for v in _find(node.expression, data)))


def render_template(template: str, data: Any) -> str:
    """Render ``template`` against ``data`` and return the produced text."""
    nodes = parse_template(template)
    parts: list[str] = []
    _render(nodes, data, parts)
    logger.debug("rendered jsonpath template %r", template)
    return "".join(parts)
