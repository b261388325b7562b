from typing import Optional

from taixiu.config import settings
from taixiu.core.log import get_logger
from taixiu.core.types import PredictionResult, Round
from taixiu.core.validation import normalize_batch
from taixiu.engine import PredictionEngine
from taixiu.source import fetch_rounds

logger = get_logger(__name__)

ENGINE = PredictionEngine(max_history=settings.max_history, perf_lookback=settings.perf_lookback)


def run_cycle(engine: Optional[PredictionEngine] = None) -> PredictionResult:
    """Fetch the source, ingest it and predict the next round.

    Raises DataSourceError before touching engine state if the fetch or the
    payload is bad. ``result.round`` is None when there is still no history.
    """
    engine = engine or ENGINE
    payload = fetch_rounds(settings.source_url, timeout=settings.source_timeout)
    rounds = normalize_batch(payload)
    if len(rounds) < len(payload):
        logger.debug("records_dropped", dropped=len(payload) - len(rounds))
    return engine.cycle(rounds)


def prediction_payload(result: PredictionResult) -> dict:
    latest: Round = result.round
    return {
        'previous_session': latest.session,
        'next_session': latest.session + 1,
        'dice': latest.dice,
        'total': latest.total,
        'outcome': latest.result,
        'prediction': result.prediction,
        'confidence': result.confidence,
        'explanation': result.explanation,
        'pattern_symbol': latest.symbol,
    }


def get_history(limit: int = 50, engine: Optional[PredictionEngine] = None):
    return (engine or ENGINE).history_tail(limit)


def get_patterns(engine: Optional[PredictionEngine] = None):
    return (engine or ENGINE).pattern_table()


def get_stats(engine: Optional[PredictionEngine] = None):
    engine = engine or ENGINE
    stats = engine.markov_stats()
    return {
        'transition': stats.transition,
        'counts': stats.counts,
        'last_label': stats.last_label,
        'p_value_row': stats.p_value_row,
        'entropy': stats.entropy,
        'streaks': engine.streaks(),
    }
