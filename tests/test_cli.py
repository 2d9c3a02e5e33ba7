from __future__ import annotations

import json
from datetime import timedelta

import pytest
from typer.testing import CliRunner

from conftest import NOW, FakeAdapter, make_record
from runops.cli.cli import app
from runops.cli.common.context import AppContext
from runops.core.config import Settings
from runops.core.errors import BackendError

runner = CliRunner()


class _PromptStub:
    def __init__(self, answer):
        self.answer = answer
        self.calls = []

    def __call__(self, kind, candidates, *, fuzzy):
        self.calls.append(([c.name for c in candidates], fuzzy))
        return self.answer


def _ctx(adapter, *, settings=None, prompt=None, namespace="foo") -> AppContext:
    return AppContext(
        namespace=namespace,
        settings=settings or Settings(),
        adapter=adapter,
        prompt=prompt or _PromptStub(None),
        clock=lambda: NOW,
    )


def _invoke(appctx: AppContext, *args: str):
    return runner.invoke(app, list(args), obj=appctx)


@pytest.fixture
def adapter(mixed_records):
    return FakeAdapter(mixed_records, namespaces={"foo", "bar", "random"})


def test_list_nonexistent_namespace_fails(adapter):
    result = _invoke(_ctx(adapter), "eventlistener", "list", "-n", "default")

    assert result.exit_code == 1
    assert "Namespace 'default' not found" in result.output


def test_list_empty_namespace_prints_only_empty_message(adapter):
    result = _invoke(_ctx(adapter), "eventlistener", "list", "-n", "random")

    assert result.exit_code == 0
    assert result.output == "No EventListeners found\n"


def test_list_empty_namespace_no_headers_prints_only_empty_message(adapter):
    result = _invoke(_ctx(adapter), "el", "list", "-n", "random", "--no-headers")

    assert result.exit_code == 0
    assert result.output == "No EventListeners found\n"


def test_list_defaults_to_context_namespace(adapter):
    result = _invoke(_ctx(adapter, namespace="foo"), "eventlistener", "list")

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0].split() == ["NAME", "URL", "AGE", "CONDITIONS"]
    assert [line.split()[0] for line in lines[1:]] == ["tb5", "tb2", "tb1", "tb3", "tb4"]


def test_list_all_namespaces_sorted_newest_first(adapter):
    result = _invoke(_ctx(adapter), "eventlistener", "list", "--all-namespaces")

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0].split() == ["NAME", "NAMESPACE", "URL", "AGE", "CONDITIONS"]
    assert [line.split()[0] for line in lines[1:]] == ["tb5", "tb2", "tb0", "tb1", "tb3", "tb4"]
    assert lines[1].split() == ["tb5", "foo", "10s", "Unknown"]
    assert lines[3].split() == [
        "tb0",
        "bar",
        "http://tb0-listener.default.svc.cluster.local",
        "2m",
        "True",
    ]
    assert lines[-1].split() == ["tb4", "foo", "---"]


def test_list_no_headers_all_namespaces(adapter):
    result = _invoke(_ctx(adapter), "eventlistener", "list", "--no-headers", "-A")

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert len(lines) == 6
    assert lines[0].split()[:2] == ["tb5", "foo"]


def test_list_namespace_and_all_namespaces_are_exclusive(adapter):
    result = _invoke(_ctx(adapter), "eventlistener", "list", "-n", "foo", "-A")

    assert result.exit_code == 2
    assert adapter.list_calls == []


def test_list_structured_output_bypasses_table(adapter):
    result = _invoke(_ctx(adapter), "eventlistener", "list", "-n", "bar", "-o", "json")

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert [item["metadata"]["name"] for item in payload["items"]] == ["tb0"]


def test_list_jsonpath_output_prints_names_newest_first(adapter):
    result = _invoke(
        _ctx(adapter),
        "eventlistener",
        "list",
        "-n",
        "foo",
        "-o",
        'jsonpath={range .items[*]}{.metadata.name}{"\\n"}{end}',
    )

    assert result.exit_code == 0
    assert result.output == "tb5\ntb2\ntb1\ntb3\ntb4\n"


def test_list_unknown_output_format(adapter):
    result = _invoke(_ctx(adapter), "eventlistener", "list", "-o", "wide")

    assert result.exit_code == 2
    assert "Unsupported output format" in result.output


def test_list_backend_error_exits_1():
    failing = FakeAdapter([], namespaces={"foo"}, fail_with=BackendError("connection refused"))

    result = _invoke(_ctx(failing), "pipelinerun", "list")

    assert result.exit_code == 1
    assert "connection refused" in result.output


def test_describe_explicit_name_wins_over_last_and_fzf(adapter):
    prompt = _PromptStub("tb2")

    result = _invoke(
        _ctx(adapter, prompt=prompt),
        "eventlistener",
        "describe",
        "tb3",
        "--last",
        "--fzf",
    )

    assert result.exit_code == 0
    assert "EventListener tb3" in result.output
    assert prompt.calls == []
    assert adapter.list_calls == []
    assert adapter.get_calls == [("foo", "tb3")]


def test_describe_last_targets_newest_record(adapter):
    result = _invoke(_ctx(adapter), "eventlistener", "describe", "--last")

    assert result.exit_code == 0
    assert "EventListener tb5" in result.output
    assert adapter.get_calls == [("foo", "tb5")]


def test_describe_last_with_no_records_is_success():
    empty = FakeAdapter([], namespaces={"foo"})

    result = _invoke(_ctx(empty), "pr", "describe", "--last")

    assert result.exit_code == 0
    assert "No PipelineRuns present in namespace foo" in result.output
    assert empty.get_calls == []


def test_describe_without_candidates_fails():
    empty = FakeAdapter([], namespaces={"foo"})

    result = _invoke(_ctx(empty), "pr", "describe")

    assert result.exit_code == 1
    assert "No PipelineRuns found" in result.output


def test_describe_single_record_without_prompt():
    single = FakeAdapter([make_record("pr-1", "foo", age=timedelta(minutes=4))], namespaces={"foo"})
    prompt = _PromptStub("never")

    result = _invoke(_ctx(single, prompt=prompt), "pipelinerun", "describe")

    assert result.exit_code == 0
    assert "PipelineRun pr-1" in result.output
    assert prompt.calls == []


def test_describe_prompts_with_limit_and_fuzzy_from_settings(adapter):
    prompt = _PromptStub("tb1")

    result = _invoke(
        _ctx(adapter, prompt=prompt, settings=Settings(use_fzf=True, describe_limit=3)),
        "eventlistener",
        "describe",
    )

    assert result.exit_code == 0
    assert adapter.list_calls == [("foo", None)]
    assert prompt.calls == [(["tb5", "tb2", "tb1"], True)]
    assert "EventListener tb1" in result.output


def test_describe_limit_flag_overrides_settings(adapter):
    prompt = _PromptStub("tb5")

    result = _invoke(
        _ctx(adapter, prompt=prompt, settings=Settings(describe_limit=3)),
        "eventlistener",
        "describe",
        "--limit",
        "10",
    )

    assert result.exit_code == 0
    assert prompt.calls[0] == (["tb5", "tb2", "tb1", "tb3", "tb4"], False)


def test_describe_prompt_abort_fails(adapter):
    result = _invoke(_ctx(adapter, prompt=_PromptStub(None)), "eventlistener", "describe")

    assert result.exit_code == 1
    assert "No EventListener selected" in result.output


def test_describe_invalid_limit_fails(adapter):
    result = _invoke(_ctx(adapter), "eventlistener", "describe", "--limit", "0")

    assert result.exit_code == 1
    assert "must be a positive number" in result.output


def test_describe_output_delegates_to_printer(adapter):
    result = _invoke(_ctx(adapter), "eventlistener", "describe", "tb0", "-n", "bar", "-o", "yaml")

    assert result.exit_code == 0
    assert "name: tb0" in result.output
    assert "EventListener tb0" not in result.output
