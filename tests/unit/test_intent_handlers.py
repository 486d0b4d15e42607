"""Unit tests for individual intent handlers."""
import pytest
from unittest.mock import Mock
from datetime import datetime

import pytz

from allie.core.errors import ErrorKind, ProviderError
from allie.services.chat.handlers.base import ChatContext, ChatResponse
from allie.services.intent.router import Intent, IntentKind


def _context(kind, message="", params=None, history=None, personality=None):
    return ChatContext(
        message=message,
        intent=Intent(kind=kind, params=params or {}),
        history=history or [],
        personality=personality,
    )


# ============================================================================
# Weather Handler Tests
# ============================================================================

@pytest.mark.unit
class TestWeatherHandler:
    """Tests for WeatherHandler."""

    @pytest.fixture
    def provider(self, sample_weather_payload):
        provider = Mock()
        provider.current.return_value = sample_weather_payload
        return provider

    @pytest.fixture
    def handler(self, provider):
        from allie.services.chat.handlers.weather import WeatherHandler
        return WeatherHandler(provider)

    def test_weather_sentence(self, handler, provider):
        """Test the formatted sentence for a successful lookup."""
        response = handler.handle(_context(IntentKind.WEATHER, params={"city": "Chicago"}))

        assert response.ok is True
        assert response.intent == IntentKind.WEATHER
        assert response.answer == (
            "The current weather in Chicago, US is broken clouds with a temperature of 54.3°F, "
            "humidity of 61% and wind speed of 12.1 mph."
        )
        provider.current.assert_called_once_with("Chicago")

    def test_city_is_normalized_before_lookup(self, handler, provider):
        """Test that only the first word of the location is sent upstream."""
        handler.handle(_context(IntentKind.WEATHER, params={"city": "Chicago, Illinois"}))

        provider.current.assert_called_once_with("Chicago")

    def test_provider_failure_apologizes(self, handler, provider):
        """Test that a provider error becomes an apology naming the city."""
        provider.current.side_effect = ProviderError("boom")

        response = handler.handle(_context(IntentKind.WEATHER, params={"city": "Atlantis"}))

        assert response.ok is True
        assert response.answer == 'Sorry, I couldn\'t retrieve the weather for "Atlantis".'

    def test_malformed_payload_apologizes(self, handler, provider):
        """Test that a payload missing fields is treated as a failure."""
        provider.current.return_value = {"name": "Chicago"}

        response = handler.handle(_context(IntentKind.WEATHER, params={"city": "Chicago"}))

        assert "couldn't retrieve the weather" in response.answer


@pytest.mark.unit
class TestNormalizeCity:

    @pytest.mark.parametrize("raw,expected", [
        ("Chicago", "Chicago"),
        ("Chicago, Illinois", "Chicago"),
        ("  New York  ", "New"),
        (",", ""),
    ])
    def test_normalize(self, raw, expected):
        from allie.services.chat.handlers.weather import normalize_city
        assert normalize_city(raw) == expected


# ============================================================================
# Sports Handler Tests
# ============================================================================

# 03:00 UTC on July 5th is still July 4th in New York
FIXED_NOW = datetime(2025, 7, 5, 3, 0, tzinfo=pytz.utc)


@pytest.mark.unit
class TestNBADate:

    def test_uses_eastern_date(self):
        from allie.services.chat.handlers.sports import nba_date
        assert nba_date(0, now=FIXED_NOW) == ("20250704", "July 4, 2025")

    def test_offset_days(self):
        from allie.services.chat.handlers.sports import nba_date
        assert nba_date(-2, now=FIXED_NOW) == ("20250702", "July 2, 2025")

    def test_offset_crosses_month(self):
        from allie.services.chat.handlers.sports import nba_date
        now = datetime(2025, 3, 1, 17, 0, tzinfo=pytz.utc)
        assert nba_date(-1, now=now) == ("20250228", "February 28, 2025")


@pytest.mark.unit
class TestFormatScoreboard:

    def test_sections_and_counts(self, make_game):
        from allie.services.chat.handlers.sports import format_scoreboard

        events = [
            make_game("STATUS_IN_PROGRESS"),
            make_game("STATUS_FINAL", away="Miami Heat", home="Chicago Bulls"),
            make_game("STATUS_FINAL", away="Utah Jazz", home="Denver Nuggets"),
            make_game("STATUS_SCHEDULED", away_score="0", home_score="0"),
        ]

        text = format_scoreboard(events)

        assert "🔴 LIVE NOW (1):" in text
        assert "🏁 FINAL SCORES (2):" in text
        assert "🕒 UPCOMING GAMES (1):" in text
        assert "Boston Celtics 101 - 99 New York Knicks (LIVE 🔴 Q4 2:31)" in text
        assert "Miami Heat 101 - 99 Chicago Bulls (Final)" in text
        assert "Boston Celtics 0 - 0 New York Knicks (Scheduled)" in text
        assert text.index("LIVE NOW") < text.index("FINAL SCORES") < text.index("UPCOMING GAMES")

    def test_empty_sections_are_skipped(self, make_game):
        from allie.services.chat.handlers.sports import format_scoreboard

        text = format_scoreboard([make_game("STATUS_FINAL")])

        assert text == "🏁 FINAL SCORES (1):\nBoston Celtics 101 - 99 New York Knicks (Final)"

    def test_unknown_status_is_upcoming(self, make_game):
        from allie.services.chat.handlers.sports import format_scoreboard

        text = format_scoreboard([make_game("STATUS_POSTPONED")])

        assert text.startswith("🕒 UPCOMING GAMES (1):")

    def test_missing_fields_use_defaults(self):
        from allie.services.chat.handlers.sports import GameEvent

        game = GameEvent.from_event({})

        assert game.line() == "Away Team 0 - 0 Home Team (Scheduled)"


@pytest.mark.unit
class TestSportsScheduleHandler:
    """Tests for SportsScheduleHandler."""

    @pytest.fixture
    def provider(self):
        return Mock()

    @pytest.fixture
    def handler(self, provider):
        from allie.services.chat.handlers.sports import SportsScheduleHandler
        return SportsScheduleHandler(provider, clock=lambda: FIXED_NOW)

    def test_games_for_today(self, handler, provider, make_game):
        provider.events.return_value = [make_game("STATUS_FINAL")]

        response = handler.handle(_context(IntentKind.SPORTS_SCHEDULE, params={"date_offset_days": 0}))

        assert response.ok is True
        assert response.answer.startswith("NBA games for July 4, 2025:\n\n🏁 FINAL SCORES (1):")
        provider.events.assert_called_once_with("20250704")

    def test_yesterday_requests_previous_day(self, handler, provider, make_game):
        provider.events.return_value = [make_game("STATUS_FINAL")]

        handler.handle(_context(IntentKind.SPORTS_SCHEDULE, params={"date_offset_days": -1}))

        provider.events.assert_called_once_with("20250703")

    def test_no_games(self, handler, provider):
        """Test that an empty day has no section headers."""
        provider.events.return_value = []

        response = handler.handle(_context(IntentKind.SPORTS_SCHEDULE))

        assert response.answer == "No NBA games found for July 4, 2025."

    def test_provider_failure(self, handler, provider):
        from allie.services.chat.handlers.sports import FAILURE_MESSAGE
        provider.events.side_effect = ProviderError("timeout")

        response = handler.handle(_context(IntentKind.SPORTS_SCHEDULE))

        assert response.ok is True
        assert response.answer == FAILURE_MESSAGE == "Failed to fetch NBA live scores."


# ============================================================================
# Time / Name / Joke Handler Tests
# ============================================================================

@pytest.mark.unit
class TestTimeQueryHandler:

    def test_local_time_sentence(self, sample_timezone_payload):
        from allie.services.chat.handlers.info import TimeQueryHandler
        provider = Mock()
        provider.lookup.return_value = sample_timezone_payload

        response = TimeQueryHandler(provider).handle(_context(IntentKind.TIME))

        assert response.answer == (
            "The current local time is Saturday, July 05, 2025 10:15:02 in "
            "Chicago, United States (America/Chicago)."
        )

    def test_lookup_failure(self):
        from allie.services.chat.handlers.info import TimeQueryHandler, TIME_FAILURE_MESSAGE
        provider = Mock()
        provider.lookup.side_effect = ProviderError("no key")

        response = TimeQueryHandler(provider).handle(_context(IntentKind.TIME))

        assert response.ok is True
        assert response.answer == TIME_FAILURE_MESSAGE


@pytest.mark.unit
class TestNameHandler:

    def test_introduction(self):
        from allie.services.chat.handlers.info import NameHandler

        response = NameHandler().handle(_context(IntentKind.NAME))

        assert response.answer.startswith("My name is Allie")
        assert "Artificial Language Learning & Interaction Engine" in response.answer


@pytest.mark.unit
class TestJokeHandler:

    @pytest.fixture
    def provider(self):
        return Mock()

    def test_first_joke_returned(self, provider):
        from allie.services.chat.handlers.info import JokeHandler
        provider.dad_jokes.return_value = ["I'm reading a book about anti-gravity.", "Another one"]

        response = JokeHandler(provider).handle(_context(IntentKind.JOKE))

        assert response.answer == "I'm reading a book about anti-gravity."

    def test_no_jokes(self, provider):
        from allie.services.chat.handlers.info import JokeHandler, NO_JOKE_MESSAGE
        provider.dad_jokes.return_value = []

        response = JokeHandler(provider).handle(_context(IntentKind.JOKE))

        assert response.answer == NO_JOKE_MESSAGE

    def test_provider_failure(self, provider):
        from allie.services.chat.handlers.info import JokeHandler, JOKE_FAILURE_MESSAGE
        provider.dad_jokes.side_effect = ProviderError("403")

        response = JokeHandler(provider).handle(_context(IntentKind.JOKE))

        assert response.ok is True
        assert response.answer == JOKE_FAILURE_MESSAGE


# ============================================================================
# General Handler Tests
# ============================================================================

@pytest.mark.unit
class TestGeneralHandler:
    """Tests for GeneralHandler."""

    @pytest.fixture
    def handler(self, llm_service):
        from allie.services.chat.handlers.general import GeneralHandler
        return GeneralHandler(llm_service)

    def _sent_messages(self, mock_openai_client):
        return mock_openai_client.chat.completions.create.call_args.kwargs["messages"]

    def test_friendly_is_default(self, handler, mock_openai_client):
        from allie.services.chat.handlers.general import PERSONALITY_PROMPTS

        response = handler.handle(_context(IntentKind.CHAT, message="hi"))

        assert response.ok is True
        assert response.answer == "Test response"
        messages = self._sent_messages(mock_openai_client)
        assert messages[0] == {"role": "system", "content": PERSONALITY_PROMPTS["friendly"]}
        assert messages[-1] == {"role": "user", "content": "hi"}

    def test_personality_selects_system_prompt(self, handler, mock_openai_client):
        from allie.services.chat.handlers.general import PERSONALITY_PROMPTS

        handler.handle(_context(IntentKind.CHAT, message="hi", personality="sassy"))

        assert self._sent_messages(mock_openai_client)[0]["content"] == PERSONALITY_PROMPTS["sassy"]

    def test_unknown_personality_falls_back_to_friendly(self, handler, mock_openai_client):
        from allie.services.chat.handlers.general import PERSONALITY_PROMPTS

        handler.handle(_context(IntentKind.CHAT, message="hi", personality="grumpy"))

        assert self._sent_messages(mock_openai_client)[0]["content"] == PERSONALITY_PROMPTS["friendly"]

    def test_history_is_forwarded_in_order(self, handler, mock_openai_client):
        history = [
            {"role": "user", "content": "My name is Sam"},
            {"role": "assistant", "content": "Nice to meet you, Sam"},
        ]

        handler.handle(_context(IntentKind.CHAT, message="What's my name?", history=history))

        messages = self._sent_messages(mock_openai_client)
        assert messages[1:3] == history
        assert messages[3] == {"role": "user", "content": "What's my name?"}

    def test_model_and_temperature(self, handler, mock_openai_client):
        handler.handle(_context(IntentKind.CHAT, message="hi"))

        kwargs = mock_openai_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4"
        assert kwargs["temperature"] == 0.8

    def test_llm_failure_is_upstream_error(self, handler, mock_openai_client):
        mock_openai_client.chat.completions.create.side_effect = RuntimeError("rate limited")

        response = handler.handle(_context(IntentKind.CHAT, message="hi"))

        assert response.ok is False
        assert response.error_kind == ErrorKind.UPSTREAM
        assert response.to_dict() == {"error": "Smart AI failed"}


@pytest.mark.unit
class TestChatResponse:

    def test_success_envelope(self):
        assert ChatResponse.success("hello").to_dict() == {"result": "hello"}

    def test_failure_envelope(self):
        response = ChatResponse.failure(ErrorKind.INTERNAL, "nope")
        assert response.ok is False
        assert response.to_dict() == {"error": "nope"}
