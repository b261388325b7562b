# Bẻ cầu: đoán đảo chiều sau một chuỗi dài
from __future__ import annotations
from typing import List, Optional

from taixiu.analytics.patterns import most_common_gram
from taixiu.analytics.stats import mean_var
from taixiu.analytics.streaks import detect_streak_and_break
from taixiu.core.types import Round, StreakInfo, Vote

WINDOW = 25
BREAK_THRESHOLD = 0.7


def smart_bridge_break(hist: List[Round], info: Optional[StreakInfo] = None) -> Vote:
    """Adjust the streak break probability with score variance and repeating 4-grams.

    Returns a Vote whose ``prob`` is the adjusted break probability. The vote is
    the opposite of the current outcome when that probability exceeds 0.7,
    otherwise a continuation.
    """
    if len(hist) < 4:
        return Vote(None, "insufficient history", prob=0.0)
    info = info or detect_streak_and_break(hist)
    streak, current = info.streak, info.current
    last25 = [r.result for r in hist[-WINDOW:]]
    _, varc = mean_var([r.total or 0 for r in hist[-WINDOW:]])
    _, common = most_common_gram(last25, 4)
    has_rep = common >= 4

    p = info.break_prob
    if streak >= 7:
        p = min(p + 0.2, 0.95)
        reason = f"long streak ({streak} {current.value})"
    elif streak >= 5 and varc > 9:
        p = min(p + 0.15, 0.90)
        reason = f"high score variance ({varc:.2f})"
    elif has_rep and all(y == current for y in last25[-6:]):
        p = min(p + 0.10, 0.85)
        reason = "strong repeating pattern"
    else:
        p = max(p - 0.10, 0.20)
        reason = "no break signal"

    pred = current.opposite() if p > BREAK_THRESHOLD else current
    return Vote(pred, reason, prob=p)
