from fastapi import APIRouter, Depends, HTTPException, Header, Query
from fastapi.responses import JSONResponse

from taixiu.api.schemas import ErrorOut, PredictOut, RoundOut, StatsOut
from taixiu.config import settings
from taixiu.core.errors import DataSourceError
from taixiu.core.log import get_logger
from taixiu.services import get_history, get_patterns, get_stats, prediction_payload, run_cycle

router = APIRouter()
logger = get_logger(__name__)


def _auth(api_key_header: str | None = Header(default=None, alias="X-API-Key")):
    if settings.api_key and api_key_header != settings.api_key:
        raise HTTPException(status_code=401, detail="Invalid API key")

@router.get('/api/custom', response_model=PredictOut,
            responses={500: {'model': ErrorOut}, 502: {'model': ErrorOut}})
def custom(ok=Depends(_auth)):
    try:
        result = run_cycle()
    except DataSourceError as e:
        logger.warning("source_failed", error=e.message, detail=e.detail)
        return JSONResponse({'error': e.message, 'detail': e.detail}, status_code=502)
    if result.round is None:
        return JSONResponse({'error': 'no history data'}, status_code=500)
    return prediction_payload(result)

@router.get('/debug/history', response_model=list[RoundOut])
def debug_history(limit: int = Query(default=settings.debug_history_limit, ge=1, le=1000)):
    return get_history(limit)

@router.get('/debug/pattern')
def debug_pattern():
    return get_patterns()

@router.get('/debug/stats', response_model=StatsOut)
def debug_stats():
    return get_stats()
