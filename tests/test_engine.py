import random
import threading

from taixiu.analytics.patterns import PatternMemory
from taixiu.core.types import Outcome
from taixiu.engine import PredictionEngine

T, X = Outcome.TAI, Outcome.XIU


def _engine(**kw):
    return PredictionEngine(rng=random.Random(7), **kw)


def test_empty_history():
    eng = _engine()
    res = eng.predict()
    assert res.confidence == 0.5
    assert res.prediction in (T, X)
    assert res.explanation == "no data"
    assert res.round is None
    assert len(eng.ledger) == 0


def test_seven_tai_predicts_break(make_rounds):
    eng = _engine()
    res = eng.cycle(make_rounds("T" * 7, totals=[11, 18, 11, 18, 11, 18, 11]))
    assert res.votes["composite"] is X
    assert res.votes["bridge"] is X
    assert res.votes["markov"] is T
    assert res.votes["pattern"] is T
    assert res.prediction is X
    assert abs(res.confidence - 0.85) < 1e-9
    assert "long streak" in res.explanation
    assert res.round.session == 7 and res.round.symbol == "T"


def test_alternating_hits_first_rule(make_rounds):
    res = _engine().cycle(make_rounds("TXTX"))
    assert res.votes["composite"] is T
    assert "alternating 1T1X" in res.explanation


def test_three_rounds_still_predicts(make_rounds):
    res = _engine().cycle(make_rounds("TXT"))
    for name in ("trend", "short", "mean", "switch", "bridge", "pattern"):
        assert res.votes[name] is None
    assert res.prediction in (T, X)
    assert 0.52 <= res.confidence <= 0.98


def test_ledger_entry_per_session(make_rounds):
    eng = _engine()
    rounds = make_rounds("TXTTXXTXTT")
    eng.ingest(rounds)
    eng.predict()
    eng.predict()
    assert eng.ledger.sessions() == [10]
    entry = eng.ledger.entries[10]
    assert entry["final"] in (T, X)
    assert set(entry) == {"trend", "short", "mean", "switch", "bridge", "markov", "composite", "pattern", "final"}


def test_ingest_rebuilds_patterns(make_rounds):
    eng = _engine()
    eng.ingest(make_rounds("TTXTT"))
    assert eng.pattern_table()[3]["TTX"] == {"T": 1, "X": 0}
    eng.ingest(make_rounds("X", start=6))
    assert eng.pattern_table()[5] == {"TTXTT": {"T": 0, "X": 1}}


def test_seeded_engines_agree(make_rounds):
    rounds = make_rounds("TXXTXTTTXXTXTXXTTXT")
    a, b = _engine(), _engine()
    ra, rb = a.cycle(rounds), b.cycle(rounds)
    assert (ra.prediction, ra.confidence, ra.explanation) == (rb.prediction, rb.confidence, rb.explanation)


def test_confidence_bounds(make_rounds):
    rng = random.Random(11)
    eng = _engine()
    session = 1
    for _ in range(80):
        eng.ingest(make_rounds(rng.choice("TX"), start=session))
        session += 1
        res = eng.predict()
        assert 0.52 <= res.confidence <= 0.98
        assert res.prediction in (T, X)


def test_ledger_is_bounded_by_history(make_rounds):
    eng = _engine(max_history=5)
    for s in range(1, 11):
        eng.cycle(make_rounds("TX"[s % 2], start=s))
    assert len(eng.history) == 5
    assert eng.ledger.sessions() == [6, 7, 8, 9, 10]


def test_read_accessors_return_copies(make_rounds):
    eng = _engine()
    eng.ingest(make_rounds("TTXTTX"))
    table = eng.pattern_table()
    table[3].clear()
    assert eng.pattern_table()[3]
    tail = eng.history_tail(2)
    assert [r["session"] for r in tail] == [5, 6]
    tail[0]["session"] = 99
    assert eng.history.rounds[4].session == 5


def test_streaks_and_stats(make_rounds):
    eng = _engine()
    eng.ingest(make_rounds("TTXXXT"))
    assert eng.streaks() == [("T", 2), ("X", 3), ("T", 1)]
    assert eng.markov_stats().last_label == "T"


def test_concurrent_cycles_do_not_interleave(make_rounds):
    seq = "TXXTTXTXXTTTXTXXTXTTXXTTTXTXXTXTTXXTXTTXTXXTTXTT"
    eng = _engine(max_history=30)
    n_threads = 8
    barrier = threading.Barrier(n_threads)
    results = []

    def worker(i):
        start = i * 5 + 1
        batch = make_rounds(seq[start - 1:start + 9], start=start)
        barrier.wait()
        for _ in range(5):
            results.append(eng.cycle(batch))

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(n_threads)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    sessions = [r.session for r in eng.history]
    assert sessions == sorted(set(sessions))
    assert len(sessions) == 30
    assert sessions[-1] == 45
    assert "".join(r.symbol for r in eng.history) == seq[15:45]

    fresh = PatternMemory()
    fresh.rebuild(eng.history.symbols())
    assert eng.pattern_table() == fresh.snapshot()

    assert len(results) == n_threads * 5
    predicted = {res.round.session for res in results}
    ledger_sessions = eng.ledger.sessions()
    assert ledger_sessions == sorted(s for s in predicted if s >= sessions[0])
    for s in ledger_sessions:
        assert eng.ledger.entries[s]["final"] in (T, X)
