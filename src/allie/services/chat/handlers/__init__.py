"""Chat intent handlers."""
from allie.services.chat.handlers.base import IntentHandler, ChatResponse, ChatContext
from allie.services.chat.handlers.general import GeneralHandler
from allie.services.chat.handlers.info import JokeHandler, NameHandler, TimeQueryHandler
from allie.services.chat.handlers.sports import SportsScheduleHandler
from allie.services.chat.handlers.weather import WeatherHandler

__all__ = [
    # Base classes
    'IntentHandler',
    'ChatResponse',
    'ChatContext',
    # Handlers
    'GeneralHandler',
    'JokeHandler',
    'NameHandler',
    'SportsScheduleHandler',
    'TimeQueryHandler',
    'WeatherHandler',
]
