"""Report artifact loader.

Usage:
    loader = ReportLoader(root="report")                      # local directory
    loader = ReportLoader(root="https://ci.example.com/report", timeout=5)
    text   = loader.fetch("junit/overview-summary.html")      # raises on failure
    text   = loader.load("junit/overview-summary.html")       # None on failure
"""

import logging
from pathlib import Path
from urllib.parse import urljoin

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ReportError(Exception):
    """Base exception for all report reading and parsing errors."""


class ResourceUnavailable(ReportError):
    """Raised when a report artifact is missing or cannot be read."""


class NetworkError(ResourceUnavailable):
    """Raised on connection timeout or unreachable report server."""


class ExtractionMismatch(ReportError):
    """Raised when a report does not have the expected content shape."""


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

def is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


class ReportLoader:
    """Reads report artifacts relative to a directory or an HTTP(S) base URL."""

    def __init__(self, root: str = ".", timeout: float = DEFAULT_TIMEOUT) -> None:
        self.root = root
        self._timeout = timeout
        self._session = requests.Session() if is_url(root) else None

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def resolve(self, path: str) -> str:
        """Return the absolute location of *path*.

        URLs and absolute filesystem paths are returned unchanged.
        """
        if is_url(path) or Path(path).is_absolute():
            return path
        if is_url(self.root):
            return urljoin(self.root.rstrip("/") + "/", path)
        return str(Path(self.root) / path)

    def fetch(self, path: str) -> str:
        """Return the full text of the report at *path*.

        Raises:
            ResourceUnavailable: file missing, unreadable or HTTP error status
            NetworkError:        timeout or connection failure
        """
        location = self.resolve(path)
        if is_url(location):
            return self._request(location)
        return self._read_file(location)

    def load(self, path: str) -> str | None:
        """Like ``fetch()`` but returns None instead of raising."""
        try:
            return self.fetch(path)
        except ResourceUnavailable as exc:
            logger.warning("Report unavailable: %s", exc)
            return None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _read_file(self, location: str) -> str:
        path = Path(location)
        if not path.is_file():
            raise ResourceUnavailable(f"Report not found: '{location}'")
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise ResourceUnavailable(f"Unable to read '{location}': {exc}") from exc

    def _request(self, url: str) -> str:
        session = self._session or requests
        try:
            response = session.get(url, timeout=self._timeout)
        except requests.exceptions.Timeout as exc:
            raise NetworkError(
                f"Request timed out after {self._timeout}s while fetching '{url}'"
            ) from exc
        except requests.exceptions.ConnectionError as exc:
            raise NetworkError(f"Unable to reach report server for '{url}'") from exc
        except requests.exceptions.RequestException as exc:
            raise ResourceUnavailable(f"Unable to fetch '{url}': {exc}") from exc

        if response.status_code == 404:
            raise ResourceUnavailable(f"Report not found: {url}")
        if not response.ok:
            raise ResourceUnavailable(
                f"Unexpected response {response.status_code} from {url}"
            )
        return response.text
