"""
Time Server Client
A simple HTTP client for calling the Time Server.

Usage:
    from timeserver.client import TimeClient

    client = TimeClient()
    client.iso_datetime(outtz="Europe/Warsaw")
    # Returns: {"iso_datetime": "2024-01-01 13:00:00.5 +0100 CET"}
"""

import httpx
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://127.0.0.1:8888"


class TimeClient:
    """Client for the Time Server."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 2.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Base URL of the time server
            timeout: Request timeout in seconds
            transport: Optional httpx transport, mostly for tests
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.transport = transport

    def _request(self, method: str, path: str, **kwargs) -> Optional[Any]:
        url = f"{self.base_url}{path}"
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.request(method, url, **kwargs)
                response.raise_for_status()
                return response.json()

        except httpx.TimeoutException:
            logger.warning(f"Time server timeout for {method} {path}")
            return None
        except httpx.HTTPStatusError as e:
            logger.warning(
                f"Time server HTTP error {e.response.status_code}: {e.response.text.strip()}"
            )
            return None
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Time server error: {e}")
            return None

    def iso_datetime(self, outtz: Optional[str] = None) -> Optional[Dict[str, str]]:
        """
        Current time in the server's default textual form.

        Returns:
            {"iso_datetime": "..."} or {"error_message": "..."} for an
            unknown timezone, None if the service is unavailable
        """
        params = {"outtz": outtz} if outtz else None
        return self._request("GET", "/now/iso/", params=params)

    def unix_timestamp(self) -> Optional[int]:
        """Current unix timestamp, or None if the service is unavailable."""
        result = self._request("GET", "/now/unix/")
        if result is None:
            return None
        return result.get("unix_timestamp")

    def datetime_parsed(
        self,
        outtz: Optional[str] = None,
        date: bool = False,
        time: bool = False,
        tz: bool = False,
    ) -> Optional[Dict[str, Any]]:
        """
        Current time broken into date/time/tz sections.

        Only the flagged sections are returned; no flags means all of them.
        """
        params = {}
        if outtz:
            params["outtz"] = outtz
        for name, enabled in (("date", date), ("time", time), ("tz", tz)):
            if enabled:
                params[name] = "1"
        return self._request("GET", "/now/parsed/", params=params)

    def convert_timezone(
        self,
        datetime_string: str,
        from_timezone: str,
        to_timezone: str,
    ) -> Optional[str]:
        """
        Convert a YYYY-MM-DDTHH:MM:SS datetime between timezones.

        Returns:
            The converted datetime string, or None if the server rejected
            the request or is unavailable
        """
        body = {
            "from_timezone": from_timezone,
            "to_timezone": to_timezone,
            "datetime_string": datetime_string,
        }
        result = self._request("POST", "/convert/timezone/", json=body)
        if result is None:
            return None
        return result.get("DatetimeString")

    def list_timezones(self) -> Optional[List[str]]:
        return self._request("GET", "/convert/listtimezones/")

    def health_check(self) -> bool:
        """
        Check if the service is responding.

        Returns:
            True if the documentation page answers 200
        """
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.get(f"{self.base_url}/")
                return response.status_code == 200
        except httpx.HTTPError:
            return False

