"""Shared HTTP access for all upstream APIs (Wikidata, Wikipedia, LLM)."""

from typing import Any, Dict, Optional

import requests

from .errors import NetworkError, UpstreamError
from .logger import get_logger

USER_AGENT = "WikidataSmartSummary/1.0"
REQUEST_TIMEOUT = 15
LLM_TIMEOUT = 60


def build_url(url: str, params: Optional[Dict[str, Any]] = None) -> str:
    """Return ``url`` with ``params`` encoded into its query string."""
    if not params:
        return url
    return requests.Request("GET", url, params=params).prepare().url


def fetch_json(url: str, params: Optional[Dict[str, Any]] = None, source: str = "wikidata") -> Any:
    """GET a JSON document with standardized error handling and logging.

    One attempt only. Always sends the fixed User-Agent header.

    Args:
        url: Endpoint URL
        params: Optional query parameters
        source: Upstream name for logging and metrics

    Returns:
        Decoded JSON body

    Raises:
        UpstreamError: On a non-success HTTP status
        NetworkError: On timeout, connection failure or an undecodable body
    """
    logger = get_logger()
    full_url = build_url(url, params)
    logger.record_upstream_call(source)
    logger.debug("GET", source=source, url=full_url)
    try:
        resp = requests.get(full_url, headers={"User-Agent": USER_AGENT}, timeout=REQUEST_TIMEOUT)
        resp.raise_for_status()
        data = resp.json()
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        logger.record_error(f"HTTPError_{status}")
        logger.warning(f"{source.capitalize()} request failed", url=full_url, status=status)
        raise UpstreamError(status, full_url) from e
    except requests.exceptions.Timeout as e:
        logger.record_error("Timeout")
        logger.warning(f"{source.capitalize()} request timed out", url=full_url)
        raise NetworkError(full_url, "request timed out") from e
    except requests.exceptions.RequestException as e:
        logger.record_error("RequestException")
        logger.error(f"{source.capitalize()} request error", url=full_url, error=str(e))
        raise NetworkError(full_url, str(e)) from e
    except ValueError as e:
        logger.record_error("InvalidJSON")
        logger.error(f"{source.capitalize()} returned invalid JSON", url=full_url)
        raise NetworkError(full_url, f"invalid JSON body: {e}") from e

    logger.record_upstream_success(source)
    return data


def post_json(
    url: str,
    payload: Dict[str, Any],
    headers: Optional[Dict[str, str]] = None,
    source: str = "llm",
) -> Any:
    """POST a JSON payload and return the decoded JSON reply.

    An ``error`` object in the reply body is treated like a failed status;
    its ``message`` becomes the error message.
    """
    logger = get_logger()
    all_headers = {"User-Agent": USER_AGENT, "Content-Type": "application/json"}
    all_headers.update(headers or {})
    logger.record_upstream_call(source)
    try:
        resp = requests.post(url, json=payload, headers=all_headers, timeout=LLM_TIMEOUT)
    except requests.exceptions.Timeout as e:
        logger.record_error("Timeout")
        logger.warning(f"{source.capitalize()} request timed out", url=url)
        raise NetworkError(url, "request timed out") from e
    except requests.exceptions.RequestException as e:
        logger.record_error("RequestException")
        logger.error(f"{source.capitalize()} request error", url=url, error=str(e))
        raise NetworkError(url, str(e)) from e

    try:
        data = resp.json()
    except ValueError:
        data = None

    error = data.get("error") if isinstance(data, dict) else None
    if not resp.ok or error:
        message = None
        if isinstance(error, dict):
            message = error.get("message")
        elif isinstance(error, str):
            message = error
        logger.record_error(f"HTTPError_{resp.status_code}")
        logger.error(f"{source.capitalize()} API error", url=url, status=resp.status_code, error=message)
        raise UpstreamError(resp.status_code, url, message or f"{source.capitalize()} request failed ({resp.status_code})")

    if data is None:
        logger.record_error("InvalidJSON")
        raise NetworkError(url, "invalid JSON body")

    logger.record_upstream_success(source)
    return data
