"""HTTP transport used by the provider to fetch response bodies."""

from typing import Protocol

import requests
from geopy.exc import (
    GeocoderAuthenticationFailure,
    GeocoderQuotaExceeded,
    GeocoderServiceError,
    GeocoderTimedOut,
    GeocoderUnavailable,
)

from geonorm.core.config import settings
from geonorm.core.exceptions import InvalidServerResponse
from geonorm.core.logging import get_logger, redact_url

logger = get_logger().bind(module="http_transport")


class HttpTransport(Protocol):
    """Anything that can GET a URL and return the body as text."""

    def get_text(self, url: str) -> str: ...


class RequestsTransport:
    """``requests`` based transport, one attempt per call."""

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float | None = None,
        user_agent: str | None = None,
    ):
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else settings.LOCATIONIQ_TIMEOUT
        self.headers = {"User-Agent": user_agent or settings.LOCATIONIQ_USER_AGENT}

    def get_text(self, url: str) -> str:
        """Fetch ``url`` and return the response body.

        Raises:
            GeocoderTimedOut: If the request timed out
            GeocoderAuthenticationFailure: On HTTP 401 and 403
            GeocoderQuotaExceeded: On HTTP 429
            GeocoderUnavailable: On connection failures and HTTP 5xx
            GeocoderServiceError: On any other request failure
            InvalidServerResponse: If the body is empty
        """
        safe_url = redact_url(url)
        try:
            response = self.session.get(url, headers=self.headers, timeout=self.timeout)
        except requests.Timeout as e:
            logger.warning("request_timed_out", url=safe_url, error=redact_url(str(e)))
            raise GeocoderTimedOut(f"Service timed out: {safe_url}") from e
        except requests.ConnectionError as e:
            logger.warning("request_connection_failed", url=safe_url, error=redact_url(str(e)))
            raise GeocoderUnavailable(f"Service not available: {safe_url}") from e
        except requests.RequestException as e:
            logger.error("request_failed", url=safe_url, error=redact_url(str(e)))
            raise GeocoderServiceError(redact_url(str(e))) from e

        status = response.status_code
        if status in (401, 403):
            raise GeocoderAuthenticationFailure(f"HTTP {status} for {safe_url}")
        if status == 429:
            raise GeocoderQuotaExceeded(f"HTTP {status} for {safe_url}")
        if status >= 500:
            raise GeocoderUnavailable(f"HTTP {status} for {safe_url}")
        # LocationIQ answers reverse lookups with no match using 404 and an
        # <error> document, which the parser turns into an empty result.
        if status >= 400 and status != 404:
            raise GeocoderServiceError(f"HTTP {status} for {safe_url}")

        body = response.text
        if not body:
            raise InvalidServerResponse.create(safe_url)

        logger.debug("request_completed", url=safe_url, status=status)
        return body
