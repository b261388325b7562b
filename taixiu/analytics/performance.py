from typing import Optional

from taixiu.analytics.history import HistoryStore
from taixiu.core.types import Outcome

MIN_MULT = 0.6
MAX_MULT = 1.6


class PredictionLedger:
    """Per-session record of every module's vote and the final call."""

    def __init__(self):
        self.entries: dict[int, dict[str, Optional[Outcome]]] = {}

    def __len__(self) -> int:
        return len(self.entries)

    def record(self, session: int, votes: dict[str, Optional[Outcome]]) -> None:
        # overwrite: the latest cycle for a session wins
        self.entries[session] = dict(votes)

    def prune(self, oldest_session: int) -> None:
        for s in [s for s in self.entries if s < oldest_session]:
            del self.entries[s]

    def sessions(self) -> list[int]:
        return sorted(self.entries)


def evaluate_performance(ledger: PredictionLedger, history: HistoryStore,
                         name: str, lookback: int = 15) -> float:
    """Weight multiplier in [0.6, 1.6] from a module's recent ledger accuracy.

    For each consecutive pair of ledger sessions, the vote stored at the earlier
    session is compared with the realized result of that same session.
    """
    keys = ledger.sessions()
    if len(keys) < 2:
        return 1.0
    use = keys[-lookback - 1:]
    correct = total = 0
    for prev in use[:-1]:
        votes = ledger.entries.get(prev)
        actual = history.result_of(prev)
        if votes is None or actual is None:
            continue
        if votes.get(name) == actual:
            correct += 1
        total += 1
    if not total:
        return 1.0
    ratio = 1 + (correct - total / 2) / (total / 2)
    return max(MIN_MULT, min(MAX_MULT, ratio))
