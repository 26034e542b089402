"""Search analytics recorder: background writes and popular-term aggregation."""

import asyncio
from datetime import timedelta

from app.application.dtos.search_query import SearchQueryRecord
from app.application.services.search_analytics import (
    SearchAnalyticsRecorder,
    aggregate_terms,
)
from tests.support import NOW, InMemorySearchQueryStore


def _recorder(store: InMemorySearchQueryStore, **kwargs) -> SearchAnalyticsRecorder:
    return SearchAnalyticsRecorder(store.scope, clock=lambda: NOW, **kwargs)


def _row(query: str, searched_at) -> SearchQueryRecord:
    return SearchQueryRecord(
        id=f"q-{query}-{searched_at.timestamp()}",
        query=query,
        search_type="Global",
        result_count=1,
        search_duration=timedelta(milliseconds=5),
        searched_at=searched_at,
        user_id=None,
    )


async def _record_all(recorder: SearchAnalyticsRecorder, *queries: str) -> None:
    for q in queries:
        recorder.record(q, "Global", 1, timedelta(milliseconds=10))
    await recorder.aclose()


async def test_most_frequent_term_ranks_first() -> None:
    store = InMemorySearchQueryStore()
    recorder = _recorder(store)

    await _record_all(recorder, "tech", "Tech", "  TECH ", "agenda")

    assert await recorder.get_popular_search_terms(2) == ["tech", "agenda"]


async def test_popular_terms_count_zero_is_empty() -> None:
    store = InMemorySearchQueryStore()
    recorder = _recorder(store)
    await _record_all(recorder, "tech")

    assert await recorder.get_popular_search_terms(0) == []


async def test_record_stores_trimmed_query_and_metadata() -> None:
    store = InMemorySearchQueryStore()
    recorder = _recorder(store)

    recorder.record("  team standup ", "Meeting", 4, timedelta(milliseconds=12), "u-1")
    await recorder.aclose()

    assert len(store.rows) == 1
    row = store.rows[0]
    assert row.query == "team standup"
    assert row.search_type == "Meeting"
    assert row.result_count == 4
    assert row.searched_at == NOW
    assert row.user_id == "u-1"


async def test_blank_queries_are_not_recorded() -> None:
    store = InMemorySearchQueryStore()
    recorder = _recorder(store)

    recorder.record("", "Global", 0, timedelta(0))
    recorder.record("   ", "Global", 0, timedelta(0))

    assert recorder.pending_count == 0
    await recorder.aclose()
    assert store.rows == []


async def test_record_returns_before_write_completes() -> None:
    store = InMemorySearchQueryStore(append_delay=0.05)
    recorder = _recorder(store)

    recorder.record("tech", "Global", 1, timedelta(0))

    assert recorder.pending_count == 1
    assert store.rows == []
    await recorder.aclose()
    assert len(store.rows) == 1
    assert recorder.pending_count == 0


async def test_failed_write_is_swallowed() -> None:
    store = InMemorySearchQueryStore(fail_appends=True)
    recorder = _recorder(store)

    recorder.record("tech", "Global", 1, timedelta(0))
    await recorder.aclose()

    assert store.rows == []
    assert recorder.pending_count == 0


async def test_slow_write_times_out() -> None:
    store = InMemorySearchQueryStore(append_delay=1.0)
    recorder = _recorder(store, write_timeout=0.02)

    recorder.record("tech", "Global", 1, timedelta(0))
    await recorder.aclose(grace=2.0)

    assert store.rows == []


async def test_aclose_cancels_writes_past_grace() -> None:
    store = InMemorySearchQueryStore(append_delay=5.0)
    recorder = _recorder(store, write_timeout=10.0)

    recorder.record("tech", "Global", 1, timedelta(0))
    await recorder.aclose(grace=0.02)
    await asyncio.sleep(0.01)

    assert store.rows == []
    assert recorder.pending_count == 0


async def test_lookback_window_excludes_old_history() -> None:
    store = InMemorySearchQueryStore()
    store.rows.extend(
        [
            _row("legacy", NOW - timedelta(days=60)),
            _row("legacy", NOW - timedelta(days=61)),
            _row("fresh", NOW - timedelta(days=1)),
        ]
    )
    recorder = _recorder(store, lookback_days=30)

    assert await recorder.get_popular_search_terms(5) == ["fresh"]


async def test_query_frequencies_filter_by_fragment() -> None:
    store = InMemorySearchQueryStore()
    recorder = _recorder(store)
    await _record_all(recorder, "team standup", "Team Standup", "tech", "steam")

    assert await recorder.get_query_frequencies("TEAM", 10) == [
        ("team standup", 2),
        ("steam", 1),
    ]
    assert await recorder.get_query_frequencies("team", 1) == [("team standup", 2)]
    assert await recorder.get_query_frequencies("  ", 10) == []


def test_aggregate_terms_orders_by_count_then_recency_then_text() -> None:
    rows = [
        _row("b", NOW),
        _row("alpha", NOW - timedelta(days=3)),
        _row("beta", NOW - timedelta(days=1)),
        _row("gamma", NOW - timedelta(days=1)),
        _row("alpha", NOW - timedelta(days=2)),
    ]

    ranked = aggregate_terms(rows)

    assert [tf.term for tf in ranked] == ["alpha", "beta", "gamma"]
    assert ranked[0].count == 2
    assert ranked[0].last_used == NOW - timedelta(days=2)
