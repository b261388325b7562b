# Hợp nhất các mô-đun để ra dự đoán cuối
from __future__ import annotations
import random
import threading
from typing import Dict, Iterable, List, Optional

from taixiu.analytics.history import HistoryStore
from taixiu.analytics.markov import MarkovEngine, MarkovStats
from taixiu.analytics.patterns import PatternMemory, runs
from taixiu.analytics.performance import PredictionLedger, evaluate_performance
from taixiu.analytics.streaks import detect_streak_and_break, is_noisy
from taixiu.core.log import get_logger
from taixiu.core.types import Outcome, PredictionResult, Round
from taixiu.predictors.bridge import smart_bridge_break
from taixiu.predictors.heuristics import mean_deviation, recent_switch, short_pattern, trend_and_prob
from taixiu.predictors.rules import composite_rules

logger = get_logger(__name__)

BASE_WEIGHTS: Dict[str, float] = {
    "trend": 0.18,
    "short": 0.18,
    "mean": 0.22,
    "switch": 0.18,
    "bridge": 0.14,
    "markov": 0.10,
    "composite": 0.20,
}
MOMENTUM = 0.15
NOISE_DAMPING = 0.75
BIAS_BONUS = 0.2


def _r2(x: float) -> float:
    return round(x, 2)


class PredictionEngine:
    """Ensemble predictor over a bounded round history.

    Owns the history, the n-gram pattern memory and the prediction ledger.
    Every public method holds the engine lock, so a full cycle (ingest,
    rebuild, predict, ledger write) is never interleaved with another one.
    """

    def __init__(self, max_history: int = 300, perf_lookback: int = 15,
                 rng: Optional[random.Random] = None):
        self.history = HistoryStore(capacity=max_history)
        self.patterns = PatternMemory()
        self.markov = MarkovEngine()
        self.ledger = PredictionLedger()
        self.perf_lookback = perf_lookback
        self.rng = rng or random.Random()
        self._lock = threading.RLock()

    # ---------------- Core API ----------------
    def ingest(self, rounds: Iterable[Round]) -> int:
        with self._lock:
            added = self.history.ingest(rounds)
            seq = self.history.symbols()
            self.patterns.rebuild(seq)
            self.markov.build_from(seq)
            logger.debug("history_ingested", added=added, size=len(self.history))
            return added

    def predict(self) -> PredictionResult:
        with self._lock:
            return self._predict()

    def cycle(self, rounds: Iterable[Round]) -> PredictionResult:
        with self._lock:
            self.ingest(rounds)
            return self._predict()

    # ---------------- Read accessors ----------------
    def history_tail(self, n: int = 50) -> List[dict]:
        with self._lock:
            return [r.to_dict() for r in self.history.tail(n)]

    def pattern_table(self) -> dict:
        with self._lock:
            return self.patterns.snapshot()

    def markov_stats(self) -> MarkovStats:
        with self._lock:
            r = self.history.latest()
            return self.markov.stats(r.symbol if r else None)

    def streaks(self, last_n: int = 5) -> List[tuple]:
        with self._lock:
            return [(label, length) for _, _, label, length in runs(self.history.symbols(), k=1)][-last_n:]

    # ---------------- Ensemble ----------------
    def _weight(self, name: str) -> float:
        return BASE_WEIGHTS[name] * evaluate_performance(self.ledger, self.history, name, self.perf_lookback)

    def _predict(self) -> PredictionResult:
        hist = self.history.rounds
        if not hist:
            return PredictionResult(self.rng.choice([Outcome.TAI, Outcome.XIU]), 0.5, "no data")

        cur_session = hist[-1].session
        seq = self.history.symbols()
        info = detect_streak_and_break(hist)

        br = smart_bridge_break(hist, info)
        ai = composite_rules(hist, self.rng)
        mc = self.patterns.lookup(seq, self.rng)
        p_tai, p_xiu = self.markov.probs(seq[-1])
        votes: Dict[str, Optional[Outcome]] = {
            "trend": trend_and_prob(hist, info),
            "short": short_pattern(hist, info),
            "mean": mean_deviation(hist),
            "switch": recent_switch(hist),
            "bridge": br.pred,
            "markov": Outcome.TAI if p_tai > p_xiu else Outcome.XIU,
            "composite": ai.pred,
        }

        score = {Outcome.TAI: 0.0, Outcome.XIU: 0.0}
        for name, pred in votes.items():
            if pred is not None:
                score[pred] += self._weight(name)
        votes["pattern"] = mc.pred
        if mc.pred is not None:
            score[mc.pred] += mc.weight

        # momentum: 5 ván gần nhất
        last5 = [r.result for r in hist[-5:]]
        score[Outcome.TAI if last5.count(Outcome.TAI) > 2 else Outcome.XIU] += MOMENTUM

        if is_noisy(hist):
            score[Outcome.TAI] *= NOISE_DAMPING
            score[Outcome.XIU] *= NOISE_DAMPING

        t15 = sum(1 for r in hist[-15:] if r.result is Outcome.TAI)
        if t15 >= 10:
            score[Outcome.XIU] += BIAS_BONUS
        elif t15 <= 5:
            score[Outcome.TAI] += BIAS_BONUS

        s_tai, s_xiu = score[Outcome.TAI], score[Outcome.XIU]
        pred = Outcome.TAI if s_tai >= s_xiu else Outcome.XIU
        conf = _r2(min(0.98, max(0.52, 0.5 + abs(s_tai - s_xiu))))

        votes["final"] = pred
        self.ledger.record(cur_session, votes)
        self.ledger.prune(hist[0].session)

        explain = " | ".join([
            f"Rules: {ai.reason}",
            f"Bridge: {br.reason} (p={_r2(br.prob)})",
            f"Markov T={_r2(p_tai)} X={_r2(p_xiu)}",
            f"Pattern: {mc.reason}",
            f"Score T={_r2(s_tai)} · X={_r2(s_xiu)}",
        ])
        logger.info("prediction", session=cur_session, prediction=pred.value, confidence=conf)
        latest = hist[-1]
        return PredictionResult(pred, conf, explain, votes, s_tai, s_xiu,
                                Round(latest.session, list(latest.dice), latest.total, latest.result))
