from typing import Iterable

from taixiu.core.types import Round


class HistoryStore:
    """Bounded, deduplicated log of rounds in ascending session order."""

    def __init__(self, capacity: int = 300):
        self.capacity = capacity
        self.rounds: list[Round] = []

    def __len__(self) -> int:
        return len(self.rounds)

    def __iter__(self):
        return iter(self.rounds)

    def ingest(self, rows: Iterable[Round]) -> int:
        """Merge new rounds, skipping sessions already stored. Returns how many were kept."""
        seen = {r.session for r in self.rounds}
        added = []
        for r in rows:
            if r.session in seen:
                continue
            seen.add(r.session)
            added.append(r)
        if not added:
            return 0
        merged = sorted(self.rounds + added, key=lambda r: r.session)
        dropped = max(len(merged) - self.capacity, 0)
        self.rounds = merged[dropped:]
        kept = {r.session for r in self.rounds}
        return sum(1 for r in added if r.session in kept)

    def symbols(self) -> list[str]:
        return [r.symbol for r in self.rounds]

    def latest(self) -> Round | None:
        return self.rounds[-1] if self.rounds else None

    def result_of(self, session: int):
        for r in reversed(self.rounds):
            if r.session == session:
                return r.result
        return None

    def tail(self, n: int) -> list[Round]:
        return self.rounds[-n:] if n > 0 else []
