from typing import Sequence

from taixiu.analytics.stats import binary_entropy, count_switches, imbalance
from taixiu.core.types import Outcome, Round, StreakInfo

WINDOW = 20
LOW_ENTROPY = 0.8


def current_streak(hist: Sequence[Round]) -> int:
    if not hist:
        return 0
    cur = hist[-1].result
    k = 1
    for i in range(len(hist) - 2, -1, -1):
        if hist[i].result == cur:
            k += 1
        else:
            break
    return k


def break_probability(streak: int, switches: int, imb: float, entropy: float) -> float:
    if streak >= 9:
        p = min(0.70 + switches / 20 + imb * 0.2, 0.95)
    elif streak >= 6:
        p = min(0.45 + switches / 15 + imb * 0.3, 0.90)
    elif streak >= 4 and switches >= 9:
        p = 0.40
    else:
        p = 0.0
    # low-entropy regime
    if entropy < LOW_ENTROPY:
        p += 0.10
    return max(0.0, min(p, 1.0))


def detect_streak_and_break(hist: Sequence[Round]) -> StreakInfo:
    """Length of the current run plus how likely it is to break on the next round."""
    if not hist:
        return StreakInfo(0, None, 0, 0.0, 0.0, 0.0)
    last20 = [r.result for r in hist[-WINDOW:]]
    streak = current_streak(hist)
    switches = count_switches(last20)
    imb = imbalance(last20, Outcome.TAI)
    pT = last20.count(Outcome.TAI) / len(last20)
    entropy = binary_entropy(pT)
    return StreakInfo(
        streak=streak,
        current=hist[-1].result,
        switches=switches,
        imbalance=imb,
        entropy=entropy,
        break_prob=break_probability(streak, switches, imb, entropy),
    )


def is_noisy(hist: Sequence[Round]) -> bool:
    last20 = [r.result for r in hist[-WINDOW:]]
    return count_switches(last20) >= 12 or current_streak(hist) >= 11
