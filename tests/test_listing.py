from datetime import timedelta

import pytest

from conftest import FakeAdapter, make_record
from runops.core.errors import BackendError, NamespaceNotFound
from runops.core.kinds import EVENT_LISTENER
from runops.core.listing import ListQuery, list_resources, listed_rows, sort_newest_first


def test_list_resources_rejects_unknown_namespace(mixed_records):
    adapter = FakeAdapter(mixed_records, namespaces={"foo", "bar"})

    with pytest.raises(NamespaceNotFound, match="default"):
        list_resources(adapter, EVENT_LISTENER, ListQuery(namespace="default"))

    assert adapter.list_calls == []


def test_list_resources_all_namespaces_skips_namespace_check(mixed_records):
    adapter = FakeAdapter(mixed_records, namespaces=())

    records = list_resources(
        adapter,
        EVENT_LISTENER,
        ListQuery(namespace="ignored", all_namespaces=True),
    )

    assert adapter.list_calls == [(None, None)]
    assert len(records) == len(mixed_records)


def test_list_resources_sorts_newest_first_with_undated_last(mixed_records):
    adapter = FakeAdapter(mixed_records, namespaces={"foo", "bar"})

    records = list_resources(adapter, EVENT_LISTENER, ListQuery(all_namespaces=True))

    assert [r.name for r in records] == ["tb5", "tb2", "tb0", "tb1", "tb3", "tb4"]


def test_list_resources_passes_limit_to_backend(mixed_records):
    adapter = FakeAdapter(mixed_records, namespaces={"foo"})

    list_resources(adapter, EVENT_LISTENER, ListQuery(namespace="foo", limit=2))

    assert adapter.list_calls == [("foo", 2)]


def test_list_resources_empty_namespace_is_not_an_error():
    adapter = FakeAdapter([], namespaces={"random"})

    assert list_resources(adapter, EVENT_LISTENER, ListQuery(namespace="random")) == []


def test_list_resources_propagates_backend_errors():
    adapter = FakeAdapter([], namespaces={"foo"}, fail_with=BackendError("boom"))

    with pytest.raises(BackendError, match="boom"):
        list_resources(adapter, EVENT_LISTENER, ListQuery(namespace="foo"))


def test_sort_newest_first_keeps_backend_order_among_undated():
    records = [
        make_record("u1", age=None),
        make_record("old", age=timedelta(days=2)),
        make_record("u2", age=None),
        make_record("new", age=timedelta(seconds=1)),
        make_record("u3", age=None),
    ]

    assert [r.name for r in sort_newest_first(records)] == ["new", "old", "u1", "u2", "u3"]


def test_sort_newest_first_strictly_decreasing(mixed_records):
    dated = [r for r in sort_newest_first(mixed_records) if r.created_at is not None]

    assert all(a.created_at >= b.created_at for a, b in zip(dated, dated[1:]))


def test_listed_rows_keep_order_and_compute_age_status(mixed_records, now):
    rows = listed_rows(mixed_records, now)

    assert [r.name for r in rows] == [r.name for r in mixed_records]
    by_name = {r.name: r for r in rows}
    assert by_name["tb0"].age == "2m"
    assert by_name["tb0"].url == "http://tb0-listener.default.svc.cluster.local"
    assert by_name["tb3"].age == "8d"
    assert by_name["tb3"].status == "False"
    assert by_name["tb4"].age == "---"
    assert by_name["tb4"].status == ""
    assert by_name["tb4"].url == ""
