from taixiu.analytics.history import HistoryStore


def test_ingest_sorts_ascending(make_rounds):
    h = HistoryStore()
    rounds = make_rounds("TXT")
    assert h.ingest([rounds[2], rounds[0], rounds[1]]) == 3
    assert [r.session for r in h] == [1, 2, 3]


def test_ingest_skips_duplicates(make_rounds):
    h = HistoryStore()
    h.ingest(make_rounds("TXT"))
    assert h.ingest(make_rounds("TTX", start=2)) == 1
    sessions = [r.session for r in h]
    assert sessions == [1, 2, 3, 4]
    # existing record is kept, not replaced
    assert h.rounds[1].symbol == "X"


def test_ingest_duplicates_within_batch(make_rounds):
    h = HistoryStore()
    r = make_rounds("T")[0]
    assert h.ingest([r, r]) == 1
    assert len(h) == 1


def test_capacity_keeps_most_recent(make_rounds):
    h = HistoryStore(capacity=5)
    assert h.ingest(make_rounds("TTXXTTXX")) == 5
    assert [r.session for r in h] == [4, 5, 6, 7, 8]
    h.ingest(make_rounds("T", start=9))
    assert [r.session for r in h] == [5, 6, 7, 8, 9]


def test_old_rounds_fall_out_of_full_window(make_rounds):
    h = HistoryStore(capacity=3)
    h.ingest(make_rounds("TTT", start=5))
    assert h.ingest(make_rounds("X", start=1)) == 0
    assert [r.session for r in h] == [5, 6, 7]


def test_invariants_after_many_batches(make_rounds):
    h = HistoryStore(capacity=20)
    for start in (1, 10, 5, 30, 25, 12):
        h.ingest(make_rounds("TXTTXXTXTX", start=start))
        sessions = [r.session for r in h]
        assert sessions == sorted(set(sessions))
        assert len(h) <= 20


def test_result_of_and_tail(make_rounds):
    h = HistoryStore()
    h.ingest(make_rounds("TX"))
    assert h.result_of(2).symbol == "X"
    assert h.result_of(99) is None
    assert [r.session for r in h.tail(1)] == [2]
    assert h.tail(0) == []
