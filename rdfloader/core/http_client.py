"""
HTTP request helpers for fetching RDF documents.

This module provides the request/response handling used by the loader when
a graph is loaded from an HTTP(S) URL, with consistent error mapping and
logging.

Classes:
    RequestHandler: Executes requests and maps transport failures
    ResponseHandler: Checks status codes and reads negotiation headers
"""

import logging
from typing import Any, Literal, Optional

import requests

from ..constants import HTTPConfig
from .errors import NotFoundError, StreamError

logger = logging.getLogger(__name__)

# Type aliases
HttpMethod = Literal["GET", "HEAD"]


class RequestHandler:
    """Centralized HTTP request handling with error handling.

    Handles:
    - Optional timeouts (none by default; the call blocks until the
      server answers or the connection fails)
    - Connection error handling
    - Consistent logging format

    Example:
        >>> handler = RequestHandler(default_timeout=10)
        >>> response = handler.execute(
        ...     "GET", url, "Load graph",
        ...     headers=headers, stream=True
        ... )
    """

    def __init__(self, default_timeout: Optional[float] = None):
        """Initialize the request handler.

        Args:
            default_timeout: Default request timeout in seconds, or None
                to wait indefinitely.
        """
        self._default_timeout = default_timeout

    @property
    def default_timeout(self) -> Optional[float]:
        return self._default_timeout

    def execute(
        self,
        method: HttpMethod,
        url: str,
        operation_name: str,
        timeout: Optional[float] = None,
        **kwargs: Any
    ) -> requests.Response:
        """Execute an HTTP request with error handling.

        Args:
            method: HTTP method
            url: URL to request
            operation_name: Description of operation (for logging)
            timeout: Request timeout in seconds (uses default if not specified)
            **kwargs: Additional arguments to pass to requests

        Returns:
            Response object

        Raises:
            StreamError: On any transport failure
        """
        timeout = timeout if timeout is not None else self._default_timeout

        try:
            logger.debug(f"{operation_name}: {method} {url}")
            response = requests.request(method, url, timeout=timeout, **kwargs)
            return response

        except requests.exceptions.Timeout as e:
            logger.error(f"{operation_name}: Request timeout after {timeout}s")
            raise StreamError(f"{operation_name} timed out after {timeout} seconds") from e

        except requests.exceptions.ConnectionError as e:
            logger.error(f"{operation_name}: Connection error: {e}")
            raise StreamError(f"{operation_name} failed to connect to {url}: {e}") from e

        except requests.exceptions.RequestException as e:
            logger.error(f"{operation_name}: Request error: {e}")
            raise StreamError(f"{operation_name} request failed: {e}") from e


class ResponseHandler:
    """Checks responses and exposes the content negotiation headers.

    Example:
        >>> ResponseHandler.check(response, "Load graph")
        >>> ResponseHandler.content_type(response)
        'text/turtle; charset=utf-8'
    """

    @staticmethod
    def check(response: requests.Response, operation_name: str = "Request") -> None:
        """Raise on non-success status codes.

        Raises:
            NotFoundError: On 404 and 410
            StreamError: On any other non-2xx status
        """
        status = response.status_code
        if 200 <= status < 300:
            return

        reason = getattr(response, 'reason', '') or ''
        if status in HTTPConfig.NOT_FOUND_STATUS_CODES:
            logger.warning(f"{operation_name}: {response.url} not found (HTTP {status})")
            raise NotFoundError(f"File not found: {response.url} (HTTP {status} {reason})".rstrip())

        logger.error(f"{operation_name}: {response.url} returned HTTP {status}")
        raise StreamError(f"{operation_name} failed: HTTP {status} {reason}".rstrip())

    @staticmethod
    def content_type(response: requests.Response) -> Optional[str]:
        """Return the declared Content-Type, or None if absent or blank."""
        value = response.headers.get('Content-Type')
        if value is None or not value.strip():
            return None
        return value

    @staticmethod
    def is_gzip_encoded(response: requests.Response) -> bool:
        """Return True if the response declares Content-Encoding: gzip."""
        encoding = response.headers.get('Content-Encoding')
        return encoding is not None and encoding.strip().lower() == HTTPConfig.GZIP_ENCODING
