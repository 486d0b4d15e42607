"""Third-party data providers used by the intent handlers."""
from allie.services.providers.base import HTTPProvider, RapidAPIProvider
from allie.services.providers.weather import WeatherProvider
from allie.services.providers.scoreboard import ScoreboardProvider
from allie.services.providers.jokes import JokeProvider
from allie.services.providers.timezone import TimezoneProvider

__all__ = [
    'HTTPProvider',
    'RapidAPIProvider',
    'WeatherProvider',
    'ScoreboardProvider',
    'JokeProvider',
    'TimezoneProvider',
]
