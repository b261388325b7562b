from typing import Any, Optional

from taixiu.core.errors import DataSourceError
from taixiu.core.types import Outcome, Round


def map_label(token: Any) -> Optional[Outcome]:
    if not isinstance(token, str):
        return None
    t = token.strip().lower()
    if not t:
        return None
    if t in ("tài", "tai", "t", "high", "h"):
        return Outcome.TAI
    if t in ("xỉu", "xiu", "x", "low", "l"):
        return Outcome.XIU
    return None


def _to_int(v: Any) -> int:
    # bool is an int subclass but never a valid session / die
    if isinstance(v, bool) or v is None:
        raise ValueError(f"not a number: {v!r}")
    return int(float(v))


def normalize_round(row: Any) -> Optional[Round]:
    """Coerce one raw source record into a Round, or None if it is unusable."""
    if not isinstance(row, dict) or row.get("session") is None:
        return None
    try:
        session = _to_int(row["session"])
        raw_dice = row.get("dice")
        dice = [_to_int(d) for d in raw_dice] if isinstance(raw_dice, list) else [0, 0, 0]
        raw_total = row.get("total")
        total = _to_int(raw_total) if raw_total is not None else sum(dice)
    except (TypeError, ValueError, OverflowError):
        return None
    result = map_label(row.get("result")) or Outcome.from_total(total)
    return Round(session=session, dice=dice, total=total, result=result)


def normalize_batch(payload: Any) -> list[Round]:
    """Normalize a whole source payload.

    The batch itself must be a non-empty list; records inside it that cannot be
    normalized are dropped.
    """
    if not isinstance(payload, list) or not payload:
        raise DataSourceError("source did not return a valid list of rounds",
                              detail=f"got {type(payload).__name__}")
    rounds = []
    for row in payload:
        r = normalize_round(row)
        if r is not None:
            rounds.append(r)
    return sorted(rounds, key=lambda r: r.session)
