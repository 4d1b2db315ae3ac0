import logging
import requests
from typing import Any, Optional
from core.settings import Settings

logger = logging.getLogger(__name__)


class UpstreamStatusError(Exception):
    """CFBD answered with a non-2xx HTTP status."""

    def __init__(self, status: int, url: str = ""):
        super().__init__(f"CFBD API error: {status}")
        self.status = status
        self.url = url


class CbbApiClient:
    """
    Thin client for the CFBD basketball API.
    One authorized, timeout-bounded GET per call; no retries.
    """

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.baseUrl = settings.baseUrl.rstrip("/")
        self.timeout = settings.upstreamTimeoutSec
        self.apiKey = settings.cbbdApiKey
        self.session = session or requests.Session()

    @property
    def configured(self) -> bool:
        return bool(self.apiKey)

    def fetch(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        """
        GET {baseUrl}{path} and return the decoded JSON body.

        Raises:
            UpstreamStatusError: non-2xx status.
            requests.RequestException: timeout or transport failure.
            ValueError: body is not JSON.
        """
        url = f"{self.baseUrl}{path}"
        logger.info("Fetching: %s %s", url, params or {})
        resp = self.session.get(
            url,
            params=params,
            headers={
                "Authorization": f"Bearer {self.apiKey}",
                "Accept": "application/json",
            },
            timeout=self.timeout,
        )
        if not resp.ok:
            logger.warning("CFBD %s -> HTTP %s", path, resp.status_code)
            raise UpstreamStatusError(resp.status_code, url)
        return resp.json()


def seasonParams(team: str, year: int) -> dict[str, Any]:
    """Query string shared by every CFBD endpoint used here."""
    return {"team": team, "season": year}
