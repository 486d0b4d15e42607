"""Local time for the caller's IP address (ipgeolocation.io)."""
from typing import Any, Dict

from allie.services.providers.base import HTTPProvider


class TimezoneProvider(HTTPProvider):
    name = "ipgeolocation"

    def __init__(self, api_key: str, url: str = "https://api.ipgeolocation.io/timezone", timeout: float = 10.0):
        super().__init__(timeout=timeout)
        self.api_key = api_key
        self.url = url

    def lookup(self) -> Dict[str, Any]:
        """Payload with ``date_time_txt``, ``timezone`` and ``geo`` (city, country_name)."""
        return self._get_json(self.url, params={"apiKey": self.api_key})
