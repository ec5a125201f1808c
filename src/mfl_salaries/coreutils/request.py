import time
import logging
import requests
from requests.adapters import HTTPAdapter
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3
RETRY_BACKOFF = 1.5  # seconds, multiplied by the attempt number


class FetchError(Exception):
    """Raised when a request keeps failing after the whole attempt budget"""

    def __init__(self, url: str, message: str, attempts: int = MAX_ATTEMPTS):
        self.url = url
        self.message = message
        self.attempts = attempts
        super().__init__(f"Failed after {attempts} attempts: {url} - {message}")


class UpstreamDataError(Exception):
    """The response body itself carries an error marker"""


def new_session() -> requests.Session:
    """Create a new requests session.

    Retries are driven by fetch_json so the adapter itself never retries.
    """
    session = requests.Session()
    adapter = HTTPAdapter(max_retries=0)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    # Set default headers
    session.headers.update(
        {"User-Agent": "mfl-salaries/1.0", "Accept": "application/json"}
    )

    return session


def fetch_json(
    session: requests.Session,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    max_attempts: int = MAX_ATTEMPTS,
    backoff_seconds: float = RETRY_BACKOFF,
    timeout: int = 30,
    sleep: Callable[[float], None] = time.sleep,
) -> Any:
    """Fetch a URL and return its parsed JSON body, retrying with linear backoff.

    Args:
        session: HTTP session to use
        url: URL to fetch
        params: Optional query parameters
        max_attempts: Total number of attempts before giving up
        backoff_seconds: Base delay; attempt k waits k * backoff_seconds
        timeout: Request timeout in seconds
        sleep: Sleep function (injectable for tests)

    Returns:
        Parsed JSON response

    Raises:
        FetchError: When every attempt failed. Carries the URL and the
            message of the last failure.
    """
    last_message = "no attempts made"

    for attempt in range(1, max_attempts + 1):
        try:
            start = time.time()
            response = session.get(url, params=params, timeout=timeout)
            if not response.ok:
                raise requests.HTTPError(
                    f"HTTP {response.status_code}: {response.reason}"
                )

            data = response.json()
            if isinstance(data, dict) and data.get("error"):
                raise UpstreamDataError(f"MFL error: {data['error']}")

            logger.debug(f"Fetched from {url}: {time.time() - start:.2f} seconds")
            return data

        except (requests.RequestException, ValueError, UpstreamDataError) as e:
            last_message = str(e)
            if attempt == max_attempts:
                break

            wait_time = backoff_seconds * attempt
            logger.warning(
                f"  Retry {attempt}/{max_attempts} in {wait_time:g}s ({last_message})"
            )
            sleep(wait_time)

    raise FetchError(url, last_message, attempts=max_attempts)
