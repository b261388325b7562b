from typing import Any

import requests

from taixiu.core.errors import DataSourceError
from taixiu.core.log import get_logger

logger = get_logger(__name__)


def fetch_rounds(url: str, timeout: float = 10.0) -> Any:
    """GET the raw round history from the upstream source and return the decoded JSON."""
    try:
        r = requests.get(url, timeout=timeout, headers={"Cache-Control": "no-store"})
        r.raise_for_status()
    except requests.exceptions.Timeout as e:
        raise DataSourceError("source request timed out", detail=str(e)) from e
    except requests.exceptions.RequestException as e:
        raise DataSourceError("source request failed", detail=str(e)) from e
    # requests' JSONDecodeError is both a ValueError and a RequestException
    try:
        data = r.json()
    except ValueError as e:
        raise DataSourceError("source returned invalid JSON", detail=str(e)) from e
    logger.debug("source_fetched", url=url, rows=len(data) if isinstance(data, list) else None)
    return data
