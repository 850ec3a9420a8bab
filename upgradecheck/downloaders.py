"""HTTP session and retry helpers shared by the registry and fetcher.

All network I/O goes through a ``requests.Session`` built here, so tests
can hand a ``MagicMock`` session to any stage.
"""

import requests
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from . import __version__

USER_AGENT = f"upgradecheck/{__version__}"

# Only transport-level failures are worth another attempt; a 4xx/5xx answer
# is reported as-is.
TRANSIENT_ERRORS = (requests.ConnectionError, requests.Timeout)


def requests_session() -> requests.Session:
    """Create a requests session with the tool's default headers.

    Returns:
        Configured ``requests.Session``.
    """
    s = requests.Session()
    s.headers.update(
        {
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
        }
    )
    return s


def retrying(retries: int) -> Retrying:
    """Build a tenacity controller allowing ``retries`` extra attempts.

    With ``retries=0`` the wrapped call runs exactly once and any exception
    propagates unchanged.

    Usage::

        response = retrying(2)(session.get, url, timeout=(10, 120))
    """
    return Retrying(
        stop=stop_after_attempt(retries + 1),
        wait=wait_exponential(multiplier=1, min=1, max=30),
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        reraise=True,
    )
