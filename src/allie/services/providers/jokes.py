"""Dad jokes (API Ninjas through RapidAPI)."""
from typing import List

from allie.services.providers.base import RapidAPIProvider


class JokeProvider(RapidAPIProvider):
    name = "dad-jokes"

    def dad_jokes(self) -> List[str]:
        data = self._get_json(f"{self.base_url}/v1/dadjokes", headers=self._headers())
        if not isinstance(data, list):
            return []
        return [item["joke"] for item in data if isinstance(item, dict) and item.get("joke")]
