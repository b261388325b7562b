from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Outcome(str, Enum):
    TAI = "Tài"   # High, total >= 11
    XIU = "Xỉu"   # Low

    @property
    def symbol(self) -> str:
        return "T" if self is Outcome.TAI else "X"

    def opposite(self) -> "Outcome":
        return Outcome.XIU if self is Outcome.TAI else Outcome.TAI

    @classmethod
    def from_total(cls, total: int) -> "Outcome":
        return cls.TAI if total >= 11 else cls.XIU

    @classmethod
    def from_symbol(cls, s: str) -> "Outcome":
        return cls.TAI if s == "T" else cls.XIU


@dataclass
class Round:
    session: int
    dice: list[int] = field(default_factory=lambda: [0, 0, 0])
    total: int = 0
    result: Optional[Outcome] = None

    def __post_init__(self):
        if self.result is None:
            self.result = Outcome.from_total(self.total)

    @property
    def symbol(self) -> str:
        return self.result.symbol

    def to_dict(self) -> dict:
        return {
            "session": self.session,
            "dice": list(self.dice),
            "total": self.total,
            "result": self.result.value,
        }


@dataclass
class Vote:
    """One module's opinion on the next round. ``pred`` is None when the module abstains."""
    pred: Optional[Outcome]
    reason: str = ""
    prob: float = 0.0
    weight: float = 0.0


@dataclass
class StreakInfo:
    streak: int
    current: Optional[Outcome]
    switches: int
    imbalance: float
    entropy: float
    break_prob: float


@dataclass
class PredictionResult:
    prediction: Outcome
    confidence: float
    explanation: str
    votes: dict[str, Optional[Outcome]] = field(default_factory=dict)
    score_tai: float = 0.0
    score_xiu: float = 0.0
    # round the prediction was computed at
    round: Optional[Round] = None
