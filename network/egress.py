"""
External egress information module.

Queries ipinfo.io for the public IPv4 address, ISP and country seen for
traffic leaving through the default route. Used by --egress only.

Failures never abort the command: the caller gets an EgressInfo with
ERR markers instead.
"""

import time
from typing import Any, Optional

import requests

from logging_config import get_logger
from models import EgressInfo
from config import (
    IPINFO_URL,
    TIMEOUT_SECONDS,
    RETRY_ATTEMPTS,
    RETRY_BACKOFF_FACTOR
)
from utils.system import is_valid_ipv4, sanitize_for_log
from enums import DataMarker

logger = get_logger(__name__)


def validate_api_response(data: Any) -> bool:
    """
    Validate API response structure and content.

    Args:
        data: Decoded JSON response from ipinfo.io

    Returns:
        True if response carries a valid IPv4 address
    """
    if not isinstance(data, dict) or "ip" not in data:
        logger.error("API response missing 'ip' field")
        return False

    if not is_valid_ipv4(data.get("ip", "")):
        logger.error("Invalid IPv4 from API: %s", sanitize_for_log(data.get("ip")))
        return False

    return True


def get_with_retry(url: str, timeout: int) -> Optional[requests.Response]:
    """
    Execute HTTP GET with exponential backoff retry.

    Retry strategy:
    - Attempts: RETRY_ATTEMPTS
    - Delay: RETRY_BACKOFF_FACTOR * 2**attempt (1s, 2s, ...)
    - Retry on: connection errors, timeouts, 5xx responses

    Args:
        url: URL to fetch
        timeout: Request timeout in seconds

    Returns:
        Last response received, or None if no response was received
    """
    for attempt in range(RETRY_ATTEMPTS):
        last_attempt = attempt == RETRY_ATTEMPTS - 1
        delay = RETRY_BACKOFF_FACTOR * (2 ** attempt)

        try:
            response = requests.get(url, timeout=timeout)
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            if last_attempt:
                logger.warning("All %d attempts failed: %s", RETRY_ATTEMPTS, type(e).__name__)
                return None
            logger.debug("Request failed: %s, retrying in %ss (attempt %d/%d)",
                         type(e).__name__, delay, attempt + 1, RETRY_ATTEMPTS)
            time.sleep(delay)
            continue
        except requests.exceptions.RequestException as e:
            logger.error("Request error: %s", sanitize_for_log(str(e)))
            return None

        if 500 <= response.status_code < 600 and not last_attempt:
            logger.debug("Server error %d, retrying in %ss (attempt %d/%d)",
                         response.status_code, delay, attempt + 1, RETRY_ATTEMPTS)
            time.sleep(delay)
            continue

        return response

    return None


def get_egress_info() -> EgressInfo:
    """
    Query egress information from ipinfo.io.

    Returns:
        EgressInfo with raw external IPv4, ISP and country.
        On failure, all fields are DataMarker.ERROR.
    """
    logger.info("Connecting to %s...", IPINFO_URL)

    response = get_with_retry(IPINFO_URL, TIMEOUT_SECONDS)

    if response is None:
        logger.error("Failed to connect to ipinfo.io (all retries exhausted)")
        return EgressInfo.create_error()

    if response.status_code != 200:
        logger.error("ipinfo.io returned status %d", response.status_code)
        return EgressInfo.create_error()

    try:
        data = response.json()
    except ValueError as e:
        logger.error("Failed to parse response: %s", sanitize_for_log(str(e)))
        return EgressInfo.create_error()

    if not validate_api_response(data):
        return EgressInfo.create_error()

    egress = EgressInfo(
        external_ip=data["ip"],
        isp=data.get("org", DataMarker.ERROR),
        country=data.get("country", DataMarker.ERROR),
    )
    logger.debug("External IPv4: %s", egress.external_ip)
    logger.debug("ISP: %s", sanitize_for_log(egress.isp))
    logger.debug("Country: %s", egress.country)
    return egress
