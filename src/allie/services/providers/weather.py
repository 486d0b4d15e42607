"""Current weather by city (OpenWeather data served through RapidAPI)."""
from typing import Any, Dict

from allie.services.providers.base import RapidAPIProvider


class WeatherProvider(RapidAPIProvider):
    """Looks up current conditions for a US city in imperial units."""

    name = "weather"

    def current(self, city: str, country: str = "US") -> Dict[str, Any]:
        """Raw provider payload for a city (``name``, ``sys``, ``main``, ``wind``, ``weather``)."""
        return self._get_json(
            f"{self.base_url}/city/{city}/{country}",
            params={"units": "imperial"},
            headers=self._headers(),
        )
