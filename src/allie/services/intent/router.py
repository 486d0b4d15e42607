"""Intent Router - classifies prompts with an ordered list of regex rules.

Rules are evaluated in priority order (time, weather, name, joke, sports) and
the first one that matches wins. Anything unmatched is free-form chat.
"""
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from allie.core.logging import logger


class IntentKind(str, Enum):
    TIME = "time"
    WEATHER = "weather"
    NAME = "name"
    JOKE = "joke"
    SPORTS_SCHEDULE = "sports_schedule"
    CHAT = "chat"


@dataclass
class Intent:
    """Classified intent plus the parameters captured from the prompt."""
    kind: IntentKind
    params: Dict[str, Any] = field(default_factory=dict)

    @property
    def city(self) -> Optional[str]:
        return self.params.get("city")

    @property
    def date_offset_days(self) -> int:
        return self.params.get("date_offset_days", 0)


# An extractor returns captured params when its rule applies, or None to fall through
Extractor = Callable[[str], Optional[Dict[str, Any]]]


@dataclass
class IntentRule:
    """One entry of the ordered rule list."""
    kind: IntentKind
    extract: Extractor

    def match(self, text: str) -> Optional[Intent]:
        params = self.extract(text)
        if params is None:
            return None
        return Intent(kind=self.kind, params=params)


TIME_PATTERN = re.compile(
    r"what('| i)?s the time|what('| i)?s the date|current time|current date|local time",
    re.IGNORECASE,
)
WEATHER_PATTERN = re.compile(
    r"(?:weather|temperature|degrees|hot|cold|warm|rain|raining|snow|snowing) in ([a-zA-Z\s,]+)",
    re.IGNORECASE,
)
NAME_PATTERN = re.compile(r"what('| i)?s your name|who are you|tell me about yourself", re.IGNORECASE)
JOKE_PATTERN = re.compile(r"tell me a joke|dad joke|make me laugh|joke|say something funny", re.IGNORECASE)
NBA_PATTERN = re.compile(
    r"nba schedule|nba games|nba scores|nba today|nba yesterday|nba right now"
    r"|who's winning right now|nba playoffs|nba \d+ days? ago",
    re.IGNORECASE,
)
DAYS_AGO_PATTERN = re.compile(r"(\d+)\s+days?\s+ago", re.IGNORECASE)
YESTERDAY_PATTERN = re.compile(r"\byesterday\b", re.IGNORECASE)


def _flag(pattern: re.Pattern) -> Extractor:
    """Extractor for rules that carry no parameters."""
    def extract(text: str) -> Optional[Dict[str, Any]]:
        return {} if pattern.search(text) else None
    return extract


def extract_city(text: str) -> Optional[str]:
    """Return the location following a weather keyword, or None if blank."""
    match = WEATHER_PATTERN.search(text)
    if not match:
        return None
    city = match.group(1).strip().strip(",").strip()
    return city or None


def _extract_weather(text: str) -> Optional[Dict[str, Any]]:
    city = extract_city(text)
    if city is None:
        return None
    return {"city": city}


def detect_nba_date_offset(text: str) -> int:
    """Day offset relative to today: "N days ago" -> -N, "yesterday" -> -1, else 0."""
    days_ago = DAYS_AGO_PATTERN.search(text)
    if days_ago:
        return -int(days_ago.group(1))
    if YESTERDAY_PATTERN.search(text):
        return -1
    return 0


def _extract_sports(text: str) -> Optional[Dict[str, Any]]:
    if not NBA_PATTERN.search(text):
        return None
    return {"date_offset_days": detect_nba_date_offset(text)}


DEFAULT_RULES: List[IntentRule] = [
    IntentRule(IntentKind.TIME, _flag(TIME_PATTERN)),
    IntentRule(IntentKind.WEATHER, _extract_weather),
    IntentRule(IntentKind.NAME, _flag(NAME_PATTERN)),
    IntentRule(IntentKind.JOKE, _flag(JOKE_PATTERN)),
    IntentRule(IntentKind.SPORTS_SCHEDULE, _extract_sports),
]


class IntentRouter:
    """Routes user prompts to an intent using the first matching rule."""

    def __init__(self, rules: Optional[List[IntentRule]] = None):
        self.rules = list(rules) if rules is not None else list(DEFAULT_RULES)

    def route(self, message: str) -> Intent:
        """Classify a prompt. Pure text inspection, no side effects."""
        text = message or ""
        for rule in self.rules:
            intent = rule.match(text)
            if intent is not None:
                logger.debug(f"[IntentRouter] '{text[:50]}' -> {intent.kind.value} {intent.params}")
                return intent

        logger.debug(f"[IntentRouter] '{text[:50]}' -> chat (no rule matched)")
        return Intent(kind=IntentKind.CHAT)
