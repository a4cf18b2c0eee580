# src/api/http.py
import logging
from typing import Any

import requests
from requests.exceptions import RequestException

from src.api.errors import NetworkFailure, NetworkTimeout
from src.config import HTTP_TIMEOUT_S, USER_AGENT
from src.utils import report_error

logger = logging.getLogger("weatherdashboard")


def http_get_json(
    url: str,
    params: dict[str, Any] | None = None,
    timeout: float = HTTP_TIMEOUT_S,
) -> dict[str, Any]:
    """GET ``url`` and return the decoded JSON object.

    Raises NetworkTimeout when the timeout expires and NetworkFailure for any
    other transport, status or decoding problem. No retries.
    """
    headers = {"User-Agent": USER_AGENT}
    try:
        resp = requests.get(url, params=params, timeout=timeout, headers=headers)
        resp.raise_for_status()
        data = resp.json()
    except requests.Timeout as e:
        report_error(f"http_get_json: {url}", e)
        raise NetworkTimeout(f"{url} timed out after {timeout}s") from e
    except (RequestException, ValueError) as e:
        # ValueError: rikkinäinen JSON
        report_error(f"http_get_json: {url}", e)
        raise NetworkFailure(f"{url}: {type(e).__name__}: {e}") from e

    if not isinstance(data, dict):
        raise NetworkFailure(f"{url}: expected a JSON object, got {type(data).__name__}")

    logger.debug("GET %s %s -> %s", url, params, resp.status_code)
    return data
