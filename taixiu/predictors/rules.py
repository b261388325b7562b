from __future__ import annotations
import random
from typing import List, Optional

from taixiu.analytics.stats import mean_var
from taixiu.core.types import Outcome, Round, Vote

T, X = Outcome.TAI, Outcome.XIU

# literal tail patterns, checked in order
TAIL_RULES = [
    ((T, X, T, X), T, "alternating 1T1X"),
    ((X, T, X, T), X, "alternating 1X1T"),
    ((T, T, X, X, T), X, "pattern 2T2X1T"),
    ((X, X, T, T, X), T, "pattern 2X2T1X"),
]

MEAN_LINE = 10.5
VAR_LINE = 8


def composite_rules(hist: List[Round], rng: Optional[random.Random] = None) -> Vote:
    """Ordered rule table over the last 4-10 outcomes and the last 7 totals; first match wins."""
    rng = rng or random
    if len(hist) < 4:
        return Vote(rng.choice([T, X]), "insufficient history")

    results = [r.result for r in hist]
    for pattern, pred, reason in TAIL_RULES:
        if tuple(results[-len(pattern):]) == pattern:
            return Vote(pred, reason)

    last7 = results[-7:]
    if len(hist) >= 10 and all(y is T for y in last7):
        return Vote(X, "long Tài streak")
    if len(hist) >= 10 and all(y is X for y in last7):
        return Vote(T, "long Xỉu streak")

    avg, varc = mean_var([r.total or 0 for r in hist[-7:]])
    if avg > MEAN_LINE and varc > VAR_LINE:
        return Vote(X, f"high totals, large variance ({varc:.2f})")
    if avg > MEAN_LINE:
        return Vote(T, f"high average total ({avg:.2f})")
    if avg < MEAN_LINE and varc > VAR_LINE:
        return Vote(T, f"low totals, large variance ({varc:.2f})")
    if avg < MEAN_LINE:
        return Vote(X, f"low average total ({avg:.2f})")

    t = last7.count(T)
    x = len(last7) - t
    if t > x + 2:
        return Vote(X, "Tài-heavy, rebalancing")
    if x > t + 2:
        return Vote(T, "Xỉu-heavy, rebalancing")
    return Vote(rng.choice([T, X]), "perfectly balanced")
