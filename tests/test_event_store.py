"""Tests for the in-memory event store."""

import pytest
from datetime import date

from optiplan.core import EventStore
from optiplan.domain import DuplicateEventError, EventDataError, EventSource, EventType


def _external(make_event, title, **kwargs):
    return make_event(title, type=EventType.EXTERNAL, source=EventSource.EXTERNAL, **kwargs)


# ---------------------------------------------------------------------------
# Inserts
# ---------------------------------------------------------------------------


class TestAdd:
    def test_add_and_get(self, store, make_event):
        event = make_event("Focus")
        assert store.add(event) is event
        assert store.get(event.id) is event
        assert event.id in store
        assert len(store) == 1

    def test_duplicate_id_rejected(self, store, make_event):
        event = make_event("Focus")
        store.add(event)
        with pytest.raises(DuplicateEventError):
            store.add(event)
        assert len(store) == 1

    def test_add_many_keeps_order(self, store, make_event):
        batch = [make_event(f"E{i}") for i in range(3)]
        store.add_many(batch)
        assert [event.title for event in store.events()] == ["E0", "E1", "E2"]

    def test_add_many_is_all_or_nothing(self, store, make_event):
        existing = make_event("Existing")
        store.add(existing)
        version = store.version
        with pytest.raises(DuplicateEventError):
            store.add_many([make_event("New"), existing])
        assert [event.title for event in store] == ["Existing"]
        assert store.version == version

    def test_add_many_empty_is_noop(self, store):
        assert store.add_many([]) == []
        assert store.version == 0

    def test_constructor_seeds(self, make_event):
        store = EventStore([make_event("A"), make_event("B")])
        assert len(store) == 2


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


class TestQueries:
    def test_events_for_day_filters_and_keeps_insertion_order(self, store, make_event, today):
        d2 = date(2026, 10, 20)
        late = make_event("Late", start=(16, 0), end=(17, 0))
        other = make_event("Other day", day=d2)
        early = make_event("Early", start=(8, 0), end=(8, 30))
        store.add_many([late, other, early])

        assert [event.title for event in store.events_for_day(today)] == ["Late", "Early"]
        assert [event.title for event in store.events_for_day(d2)] == ["Other day"]

    def test_events_in_month(self, store, make_event):
        store.add_many([make_event("Oct"), make_event("Nov", day=date(2026, 11, 2))])
        assert [event.title for event in store.events_in_month(2026, 10)] == ["Oct"]

    def test_count_by_source(self, store, make_event):
        store.add_many([make_event("Local"), _external(make_event, "Remote")])
        assert store.count() == 2
        assert store.count(EventSource.LOCAL) == 1
        assert store.count(EventSource.EXTERNAL) == 1

    def test_snapshot_is_projection(self, store, make_event):
        store.add(make_event("Focus", description="private"))
        snapshot = store.snapshot()
        assert isinstance(snapshot, tuple)
        assert snapshot[0] == {
            "title": "Focus",
            "start": "2026-10-19T09:00:00",
            "end": "2026-10-19T10:00:00",
            "type": "work",
        }


# ---------------------------------------------------------------------------
# External replacement
# ---------------------------------------------------------------------------


class TestReplaceExternal:
    def test_replaces_only_external(self, store, make_event):
        local_a = make_event("Local A")
        old_remote = _external(make_event, "Old remote")
        local_b = make_event("Local B")
        store.add_many([local_a, old_remote, local_b])

        fresh = [_external(make_event, "New 1"), _external(make_event, "New 2")]
        store.replace_external(fresh)

        assert [event.title for event in store if event.source == EventSource.LOCAL] == ["Local A", "Local B"]
        assert [event.title for event in store if event.source == EventSource.EXTERNAL] == ["New 1", "New 2"]
        assert old_remote.id not in store

    def test_rejects_local_members_and_leaves_store_unchanged(self, store, make_event):
        old_remote = _external(make_event, "Old remote")
        store.add(old_remote)
        version = store.version
        with pytest.raises(EventDataError):
            store.replace_external([_external(make_event, "Fine"), make_event("Sneaky local")])
        assert store.events() == (old_remote,)
        assert store.version == version

    def test_listener_sees_single_consistent_state(self, store, make_event):
        store.add_many([make_event("Local"), _external(make_event, "Old")])
        observed = []

        def listener(version):
            observed.append((version, [event.title for event in store]))

        store.subscribe(listener)
        store.replace_external([_external(make_event, "New 1"), _external(make_event, "New 2")])

        assert len(observed) == 1
        version, titles = observed[0]
        assert version == store.version
        assert titles == ["Local", "New 1", "New 2"]

    def test_empty_batch_clears_external(self, store, make_event):
        store.add_many([make_event("Local"), _external(make_event, "Old")])
        store.replace_external([])
        assert store.count(EventSource.EXTERNAL) == 0
        assert store.count(EventSource.LOCAL) == 1


# ---------------------------------------------------------------------------
# Observers
# ---------------------------------------------------------------------------


class TestSubscribe:
    def test_version_bumps_once_per_mutation(self, store, make_event):
        calls = []
        store.subscribe(calls.append)
        store.add_many([make_event("A"), make_event("B")])
        store.add(make_event("C"))
        assert calls == [1, 2]

    def test_unsubscribe(self, store, make_event):
        calls = []
        unsubscribe = store.subscribe(calls.append)
        unsubscribe()
        store.add(make_event("A"))
        assert calls == []
