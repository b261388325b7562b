# Các mô hình heuristic đơn giản cho Tài/Xỉu
from __future__ import annotations
from typing import List, Optional

from taixiu.analytics.patterns import most_common_gram
from taixiu.analytics.stats import count_switches, imbalance
from taixiu.analytics.streaks import detect_streak_and_break
from taixiu.core.types import Outcome, Round, StreakInfo

MIN_HISTORY = 4


def _results(hist: List[Round], k: int) -> List[Outcome]:
    return [r.result for r in hist[-k:]]


def _anti_streak(last: Outcome) -> Outcome:
    return last.opposite()


def _break_or_follow(info: StreakInfo, threshold: float = 0.8) -> Outcome:
    return info.current.opposite() if info.break_prob > threshold else info.current


def trend_and_prob(hist: List[Round], info: Optional[StreakInfo] = None) -> Optional[Outcome]:
    """Recency-weighted majority over the last 20 rounds, deferring to the break rule on long runs."""
    if len(hist) < MIN_HISTORY:
        return None
    info = info or detect_streak_and_break(hist)
    if info.streak >= 6:
        return _break_or_follow(info)
    last20 = _results(hist, 20)
    # ván gần nhất có trọng số lớn nhất
    weights = [1.3 ** i for i in range(len(last20))]
    tW = sum(w for w, y in zip(weights, last20) if y is Outcome.TAI)
    xW = sum(w for w, y in zip(weights, last20) if y is Outcome.XIU)
    if abs(tW - xW) / (tW + xW) > 0.3:
        return Outcome.TAI if tW > xW else Outcome.XIU
    return _anti_streak(last20[-1])


def short_pattern(hist: List[Round], info: Optional[StreakInfo] = None) -> Optional[Outcome]:
    if len(hist) < MIN_HISTORY:
        return None
    info = info or detect_streak_and_break(hist)
    if info.streak >= 5:
        return _break_or_follow(info)
    last10 = _results(hist, 10)
    gram, count = most_common_gram(last10, 4)
    last = last10[-1]
    if gram is not None and count >= 3:
        return _anti_streak(last) if gram[-1] != last else last
    return _anti_streak(last)


def mean_deviation(hist: List[Round]) -> Optional[Outcome]:
    """Bets on the side under-represented in the last 15 rounds once the imbalance is large enough."""
    if len(hist) < MIN_HISTORY:
        return None
    last15 = _results(hist, 15)
    if imbalance(last15, Outcome.TAI) < 0.3:
        return _anti_streak(last15[-1])
    t = last15.count(Outcome.TAI)
    return Outcome.TAI if t < len(last15) - t else Outcome.XIU


def recent_switch(hist: List[Round]) -> Optional[Outcome]:
    if len(hist) < MIN_HISTORY:
        return None
    last12 = _results(hist, 12)
    sw = count_switches(last12)
    # both branches resolve the same way
    return _anti_streak(last12[-1]) if sw >= 7 else _anti_streak(last12[-1])
