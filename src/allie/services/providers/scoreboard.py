"""NBA scoreboard by date (RapidAPI)."""
from typing import Any, Dict, List

from allie.core.errors import ProviderError
from allie.services.providers.base import RapidAPIProvider


class ScoreboardProvider(RapidAPIProvider):
    name = "nba-scoreboard"

    def events(self, date_token: str) -> List[Dict[str, Any]]:
        """Game events for a ``YYYYMMDD`` date; an empty list when none are scheduled."""
        data = self._get_json(
            f"{self.base_url}/nba-scoreboard-by-date",
            params={"date": date_token},
            headers=self._headers(),
        )
        if not isinstance(data, dict):
            raise ProviderError("nba-scoreboard returned an unexpected payload")
        events = (data.get("response") or {}).get("Events") or []
        if not isinstance(events, list):
            raise ProviderError("nba-scoreboard returned an unexpected payload")
        return events
