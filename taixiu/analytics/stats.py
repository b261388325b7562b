import math
from math import comb
from typing import Sequence

def binom_cdf(k: int, n: int, p: float) -> float:
    # inclusive CDF: P(X <= k)
    if n <= 0:
        return 1.0
    s = 0.0
    for i in range(0, k+1):
        s += comb(n, i) * (p**i) * ((1-p)**(n-i))
    return min(max(s, 0.0), 1.0)

def binary_entropy(p: float) -> float:
    H = 0.0
    for q in (p, 1 - p):
        if q > 0:
            H -= q * math.log2(q)
    return H

def mean_var(values: Sequence[float]) -> tuple[float, float]:
    # population variance
    n = len(values) or 1
    avg = sum(values) / n
    return avg, sum((v - avg) ** 2 for v in values) / n

def count_switches(labels: Sequence) -> int:
    return sum(1 for a, b in zip(labels, labels[1:]) if a != b)

def imbalance(labels: Sequence, high) -> float:
    if not labels:
        return 0.0
    h = sum(1 for y in labels if y == high)
    return abs(h - (len(labels) - h)) / len(labels)
