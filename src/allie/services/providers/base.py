"""Shared plumbing for the third-party HTTP providers."""
from typing import Any, Dict, Optional

import httpx

from allie.core.errors import ProviderError
from allie.core.logging import logger


class HTTPProvider:
    """Base class for providers reached with a single GET request."""

    name = "provider"

    def __init__(self, timeout: float = 10.0):
        self.timeout = timeout

    def _get_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """GET a URL and decode its JSON body, raising ProviderError on any failure."""
        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.get(url, params=params, headers=headers)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"[{self.name}] HTTP {e.response.status_code} from {url}")
            raise ProviderError(f"{self.name} returned HTTP {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"[{self.name}] request to {url} failed: {e}")
            raise ProviderError(f"{self.name} request failed: {e}") from e


class RapidAPIProvider(HTTPProvider):
    """Provider hosted on RapidAPI; every call carries the key and host headers."""

    def __init__(self, api_key: str, host: str, timeout: float = 10.0):
        super().__init__(timeout=timeout)
        self.api_key = api_key
        self.host = host

    @property
    def base_url(self) -> str:
        return f"https://{self.host}"

    def _headers(self) -> Dict[str, str]:
        return {
            "X-RapidAPI-Key": self.api_key,
            "X-RapidAPI-Host": self.host,
        }
