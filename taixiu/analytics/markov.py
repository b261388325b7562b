from dataclasses import dataclass
from typing import Sequence

from taixiu.analytics.stats import binary_entropy, binom_cdf

MIN_HISTORY = 5


@dataclass
class MarkovStats:
    transition: list[list[float]]
    counts: list[list[int]]
    last_label: str | None
    p_value_row: dict[str, float]
    entropy: float


class MarkovEngine:
    """First-order T/X transition counts over the whole history."""

    def __init__(self, alpha: float = 1.0):
        # alpha only smooths the reported matrix in stats(); probs() uses raw counts
        self.a = alpha
        self.n = 0
        self.marginal = {'T': 0, 'X': 0}
        self.C = {'T': {'T': 0, 'X': 0}, 'X': {'T': 0, 'X': 0}}

    def reset(self):
        self.n = 0
        self.marginal = {'T': 0, 'X': 0}
        self.C = {'T': {'T': 0, 'X': 0}, 'X': {'T': 0, 'X': 0}}

    def build_from(self, labels: Sequence[str]):
        self.reset()
        prev = None
        for y in labels:
            if prev is not None:
                self.C[prev][y] += 1
            self.marginal[y] += 1
            self.n += 1
            prev = y

    def probs(self, last: str | None) -> tuple[float, float]:
        if self.n < MIN_HISTORY or last not in ('T', 'X'):
            return 0.5, 0.5
        nT = self.C[last]['T']; nX = self.C[last]['X']
        if nT + nX == 0:
            return 0.5, 0.5
        return nT / (nT + nX), nX / (nT + nX)

    def stats(self, last: str | None) -> MarkovStats:
        def row(i: str) -> float:
            return (self.C[i]['T'] + self.a) / (self.C[i]['T'] + self.C[i]['X'] + 2*self.a)
        pTT = row('T')
        pXT = row('X')
        H = binary_entropy(self.marginal['T'] / self.n) if self.n else 0.0
        # p-values per row vs 0.5
        pvals = {}
        for i in ('T', 'X'):
            t_cnt, x_cnt = self.C[i]['T'], self.C[i]['X']
            n = t_cnt + x_cnt
            k = max(t_cnt, x_cnt)
            if n == 0:
                pvals[i] = 1.0
            else:
                pv = 2 * min(binom_cdf(k, n, 0.5), 1 - binom_cdf(k-1, n, 0.5))
                pvals[i] = max(min(pv, 1.0), 0.0)
        return MarkovStats(
            transition=[[pTT, 1 - pTT], [pXT, 1 - pXT]],
            counts=[[self.C['T']['T'], self.C['T']['X']], [self.C['X']['T'], self.C['X']['X']]],
            last_label=last,
            p_value_row=pvals,
            entropy=H,
        )
