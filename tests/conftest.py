import pytest

from taixiu.core.types import Outcome, Round


@pytest.fixture
def make_rounds():
    """Build rounds from a T/X string; totals default to 12 for Tài and 9 for Xỉu."""
    def _make(symbols, totals=None, start=1):
        out = []
        for i, s in enumerate(symbols):
            total = totals[i] if totals else (12 if s == "T" else 9)
            out.append(Round(session=start + i, dice=[0, 0, 0], total=total,
                             result=Outcome.from_symbol(s)))
        return out
    return _make
