from pydantic import BaseModel, ConfigDict, Field

from taixiu.core.types import Outcome


class PredictOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    previous_session: int = Field(alias="previousSession")
    next_session: int = Field(alias="nextSession")
    dice: list[int]
    total: int
    outcome: Outcome
    prediction: Outcome
    confidence: float = Field(ge=0.5, le=0.98)
    explanation: str
    pattern_symbol: str = Field(alias="patternSymbol", min_length=1, max_length=1)


class RoundOut(BaseModel):
    session: int
    dice: list[int]
    total: int
    result: Outcome


class StatsOut(BaseModel):
    transition: list[list[float]]
    counts: list[list[int]]
    last_label: str | None
    p_value_row: dict[str, float]
    entropy: float
    streaks: list[tuple[str, int]]


class ErrorOut(BaseModel):
    error: str
    detail: str | None = None
