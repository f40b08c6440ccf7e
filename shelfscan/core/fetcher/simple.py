"""HTTP fetcher built on requests."""

import logging
import time

import requests

from shelfscan.core.fetcher.base import DocumentFetcher
from shelfscan.exceptions import FetchError
from shelfscan.models.results import FetchResult
from shelfscan.utils.headers import build_headers


class SimpleFetcher(DocumentFetcher):
    """Fetches documents over HTTP(S) with browser-like headers.

    Attributes:
        timeout: Seconds to wait for the server before giving up
        user_agent: User agent override, or None for the default agent
        session: Requests session reused across fetches
        logger: Logger instance

    """

    def __init__(
        self,
        timeout: float = 30,
        user_agent: str | None = None,
        session: requests.Session | None = None,
    ):
        """Initialize the simple fetcher.

        Args:
            timeout: Request timeout in seconds. Defaults to 30.
            user_agent: User agent to send. Defaults to None (desktop Chrome).
            session: Session to use. Defaults to None (a new requests.Session).

        """
        self.timeout = timeout
        self.user_agent = user_agent
        self.session = session or requests.Session()
        self.logger = logging.getLogger(__name__)

    def fetch(self, url: str) -> FetchResult:
        """Fetch a document with a single GET request.

        Args:
            url: Absolute URL to fetch

        Returns:
            FetchResult with the raw response body

        Raises:
            FetchError: On connection errors, timeouts or non-2xx responses

        """
        start_time = time.time()
        self.logger.debug(f'GET {url} (timeout={self.timeout}s)')

        try:
            response = self.session.get(
                url,
                headers=build_headers(user_agent=self.user_agent),
                timeout=self.timeout,
                allow_redirects=True,
            )
        except requests.exceptions.Timeout:
            raise FetchError(url, f'timed out after {self.timeout}s') from None
        except requests.exceptions.RequestException as e:
            raise FetchError(url, f'{type(e).__name__}: {e}') from None

        status_code = response.status_code
        if not 200 <= status_code < 300:
            raise FetchError(url, f'HTTP {status_code} {response.reason or ""}'.strip(), status_code=status_code)

        fetch_time = time.time() - start_time
        result = FetchResult(
            url=url,
            content=response.content,
            status_code=status_code,
            content_type=response.headers.get('Content-Type'),
            encoding=_declared_charset(response),
            fetch_time=fetch_time,
        )
        self.logger.info(f'Fetched {result.size:,} bytes from {url} in {fetch_time:.2f}s')
        return result

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()


def _declared_charset(response: requests.Response) -> str | None:
    """Return the charset from Content-Type, ignoring requests' ISO-8859-1 default for text/*."""
    content_type = response.headers.get('Content-Type', '')
    if 'charset=' not in content_type.lower():
        return None
    return response.encoding
