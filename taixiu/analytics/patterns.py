import random
from collections import Counter
from typing import Iterable, Optional, Sequence

from taixiu.core.types import Outcome, Vote

GRAM_SIZES = (3, 4, 5)
MIN_LOOKUP_HISTORY = 6


def runs(labels: Iterable[str], k: int = 3):
    """Segments of equal consecutive labels of length >= k as (start, end, label, length)."""
    labels = list(labels)
    out = []
    if not labels:
        return out
    cur = labels[0]
    start = 0
    for i in range(1, len(labels)):
        if labels[i] == cur:
            continue
        # close segment
        seg_len = i - start
        if seg_len >= k:
            out.append((start, i-1, cur, seg_len))
        cur = labels[i]
        start = i
    # tail
    seg_len = len(labels) - start
    if seg_len >= k:
        out.append((start, len(labels)-1, cur, seg_len))
    return out


def most_common_gram(labels: Sequence, n: int = 4):
    """Most frequent n-gram of ``labels`` and its count, or (None, 0)."""
    grams = Counter(tuple(labels[i:i+n]) for i in range(len(labels) - n + 1))
    if not grams:
        return None, 0
    return grams.most_common(1)[0]


class PatternMemory:
    """n-gram table over the T/X symbol sequence: n -> key -> {"T": count, "X": count}."""

    def __init__(self, sizes: Sequence[int] = GRAM_SIZES):
        self.sizes = tuple(sizes)
        self.table: dict[int, dict[str, dict[str, int]]] = {}

    def rebuild(self, seq: Sequence[str]) -> None:
        self.table = {}
        N = len(seq)
        for n in self.sizes:
            for i in range(N - n):
                key = "".join(seq[i:i+n])
                nxt = seq[i+n]
                row = self.table.setdefault(n, {}).setdefault(key, {"T": 0, "X": 0})
                row[nxt] += 1

    def lookup(self, seq: Sequence[str], rng: Optional[random.Random] = None) -> Vote:
        if len(seq) < MIN_LOOKUP_HISTORY:
            return Vote(None, "insufficient history")
        rng = rng or random
        # longest gram first
        for n in sorted(self.sizes, reverse=True):
            key = "".join(seq[-n:])
            mem = self.table.get(n, {}).get(key)
            if not mem or mem["T"] + mem["X"] == 0:
                continue
            if mem["T"] == mem["X"]:
                sym = rng.choice(["T", "X"])
            else:
                sym = "T" if mem["T"] > mem["X"] else "X"
            conf = max(mem["T"], mem["X"]) / (mem["T"] + mem["X"])
            return Vote(Outcome.from_symbol(sym), f"{n}-gram ({key}→{sym})",
                        weight=0.28 + conf * 0.22)
        return Vote(None, "no n-gram match")

    def snapshot(self) -> dict:
        return {n: {k: dict(v) for k, v in grams.items()} for n, grams in self.table.items()}
