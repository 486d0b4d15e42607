"""NBA scoreboard intent handler.

Games for the requested day are grouped into three buckets (live, final,
scheduled) from the provider's status code and rendered as one titled
section per non-empty bucket.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytz

from allie.core.errors import ProviderError
from allie.core.logging import logger
from allie.services.chat.handlers.base import IntentHandler, ChatContext, ChatResponse
from allie.services.intent.router import IntentKind
from allie.services.providers.scoreboard import ScoreboardProvider

EASTERN = pytz.timezone("America/New_York")

STATUS_IN_PROGRESS = "STATUS_IN_PROGRESS"
STATUS_FINAL = "STATUS_FINAL"
STATUS_SCHEDULED = "STATUS_SCHEDULED"

LIVE = "live"
FINAL = "final"
SCHEDULED = "scheduled"

SECTION_TITLES = [
    (LIVE, "🔴 LIVE NOW"),
    (FINAL, "🏁 FINAL SCORES"),
    (SCHEDULED, "🕒 UPCOMING GAMES"),
]

FAILURE_MESSAGE = "Failed to fetch NBA live scores."


def nba_date(offset_days: int = 0, now: Optional[datetime] = None) -> Tuple[str, str]:
    """US Eastern date shifted by ``offset_days``: (``YYYYMMDD``, ``Month D, YYYY``)."""
    eastern_now = (now or datetime.now(pytz.utc)).astimezone(EASTERN)
    day = eastern_now.date() + timedelta(days=offset_days)
    return day.strftime("%Y%m%d"), f"{day.strftime('%B')} {day.day}, {day.year}"


@dataclass
class GameEvent:
    """One game reshaped for display."""
    away_name: str
    away_score: str
    home_name: str
    home_score: str
    status: str
    period: str = ""
    clock: str = ""

    @property
    def bucket(self) -> str:
        if self.status == STATUS_IN_PROGRESS:
            return LIVE
        if self.status == STATUS_FINAL:
            return FINAL
        return SCHEDULED

    def line(self) -> str:
        text = f"{self.away_name} {self.away_score} - {self.home_score} {self.home_name}"
        if self.bucket == LIVE:
            return f"{text} (LIVE 🔴 Q{self.period} {self.clock})"
        if self.bucket == FINAL:
            return f"{text} (Final)"
        return f"{text} (Scheduled)"

    @classmethod
    def from_event(cls, event: Dict[str, Any]) -> "GameEvent":
        competitions = event.get("competitions") or {}
        # The provider sends a single competition object; tolerate a list too
        if isinstance(competitions, list):
            competitions = competitions[0] if competitions else {}
        competitors = competitions.get("competitors") or []
        home = next((c for c in competitors if c.get("homeAway") == "home"), {})
        away = next((c for c in competitors if c.get("homeAway") == "away"), {})
        status = event.get("status") or {}

        def score(side: Dict[str, Any]) -> str:
            value = side.get("score")
            return "0" if value is None else str(value)

        return cls(
            away_name=(away.get("team") or {}).get("displayName") or "Away Team",
            away_score=score(away),
            home_name=(home.get("team") or {}).get("displayName") or "Home Team",
            home_score=score(home),
            status=(status.get("type") or {}).get("name") or STATUS_SCHEDULED,
            period=str(status.get("period") or ""),
            clock=status.get("displayClock") or "",
        )


def bucket_games(games: List[GameEvent]) -> Dict[str, List[GameEvent]]:
    buckets: Dict[str, List[GameEvent]] = {LIVE: [], FINAL: [], SCHEDULED: []}
    for game in games:
        buckets[game.bucket].append(game)
    return buckets


def format_scoreboard(events: List[Dict[str, Any]]) -> str:
    """Render provider events as live/final/upcoming sections, skipping empty ones."""
    buckets = bucket_games([GameEvent.from_event(e) for e in events])

    sections = []
    for bucket, title in SECTION_TITLES:
        games = buckets[bucket]
        if games:
            lines = "\n".join(game.line() for game in games)
            sections.append(f"{title} ({len(games)}):\n{lines}")

    return "\n\n".join(sections).strip()


class SportsScheduleHandler(IntentHandler):
    """Handle sports_schedule intent - NBA scores and schedule for a day."""

    intents = [IntentKind.SPORTS_SCHEDULE]

    def __init__(
        self,
        provider: ScoreboardProvider,
        clock: Callable[[], datetime] = lambda: datetime.now(pytz.utc),
    ):
        self.provider = provider
        self.clock = clock

    def handle(self, context: ChatContext) -> ChatResponse:
        return self._success_response(context, self.scoreboard(context.intent.date_offset_days))

    def scoreboard(self, offset_days: int = 0) -> str:
        date_token, readable_date = nba_date(offset_days, now=self.clock())
        try:
            events = self.provider.events(date_token)
            if not events:
                return f"No NBA games found for {readable_date}."
            games = format_scoreboard(events)
        except (ProviderError, AttributeError, KeyError, TypeError) as e:
            logger.error(f"NBA scoreboard failed for {date_token}: {e}")
            return FAILURE_MESSAGE

        return f"NBA games for {readable_date}:\n\n{games}"
