"""Weather intent handler."""
from typing import Any, Dict

from allie.core.errors import ProviderError
from allie.core.logging import logger
from allie.services.chat.handlers.base import IntentHandler, ChatContext, ChatResponse
from allie.services.intent.router import IntentKind
from allie.services.providers.weather import WeatherProvider


def normalize_city(city: str) -> str:
    """Drop commas and keep the first word: "Chicago, Illinois" -> "Chicago"."""
    parts = city.replace(",", "").split()
    return parts[0] if parts else ""


def format_weather(data: Dict[str, Any]) -> str:
    """Build the weather sentence; raises KeyError/TypeError on a malformed payload."""
    description = data["weather"][0]["description"]
    temp = float(data["main"]["temp"])
    humidity = data["main"]["humidity"]
    wind_speed = float(data["wind"]["speed"])
    return (
        f"The current weather in {data['name']}, {data['sys']['country']} is {description} "
        f"with a temperature of {temp:.1f}°F, humidity of {humidity}% "
        f"and wind speed of {wind_speed:.1f} mph."
    )


class WeatherHandler(IntentHandler):
    """Handle weather intent - current conditions for a named city."""

    intents = [IntentKind.WEATHER]

    def __init__(self, provider: WeatherProvider):
        self.provider = provider

    def handle(self, context: ChatContext) -> ChatResponse:
        city = context.intent.city or ""
        return self._success_response(context, self.describe(city))

    def describe(self, city: str) -> str:
        """Weather sentence for a city, or an apology naming it."""
        try:
            formatted_city = normalize_city(city)
            if not formatted_city:
                raise ProviderError("empty city")
            data = self.provider.current(formatted_city)
            return format_weather(data)
        except (ProviderError, KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"Weather lookup failed for '{city}': {e}")
            return f'Sorry, I couldn\'t retrieve the weather for "{city}".'
