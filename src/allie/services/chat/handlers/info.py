"""Small intent handlers - local time, assistant identity, dad jokes."""
from allie.core.errors import ProviderError
from allie.core.logging import logger
from allie.services.chat.handlers.base import IntentHandler, ChatContext, ChatResponse
from allie.services.intent.router import IntentKind
from allie.services.providers.jokes import JokeProvider
from allie.services.providers.timezone import TimezoneProvider

ASSISTANT_INTRODUCTION = (
    "My name is Allie, short for Artificial Language Learning & Interaction Engine. "
    "I’m here to help you with whatever you need!"
)
NO_JOKE_MESSAGE = "Couldn't find a dad joke right now, sorry!"
JOKE_FAILURE_MESSAGE = "Failed to fetch a dad joke."
TIME_FAILURE_MESSAGE = "Sorry, I couldn't fetch the current local time."


class TimeQueryHandler(IntentHandler):
    """Handle time intent - current local time for the caller's IP."""

    intents = [IntentKind.TIME]

    def __init__(self, provider: TimezoneProvider):
        self.provider = provider

    def handle(self, context: ChatContext) -> ChatResponse:
        try:
            data = self.provider.lookup()
            geo = data["geo"]
            answer = (
                f"The current local time is {data['date_time_txt']} in "
                f"{geo['city']}, {geo['country_name']} ({data['timezone']})."
            )
        except (ProviderError, KeyError, TypeError) as e:
            logger.error(f"Local time lookup failed: {e}")
            answer = TIME_FAILURE_MESSAGE
        return self._success_response(context, answer)


class NameHandler(IntentHandler):
    """Handle name intent - who the assistant is."""

    intents = [IntentKind.NAME]

    def handle(self, context: ChatContext) -> ChatResponse:
        return self._success_response(context, ASSISTANT_INTRODUCTION)


class JokeHandler(IntentHandler):
    """Handle joke intent."""

    intents = [IntentKind.JOKE]

    def __init__(self, provider: JokeProvider):
        self.provider = provider

    def handle(self, context: ChatContext) -> ChatResponse:
        try:
            jokes = self.provider.dad_jokes()
            answer = jokes[0] if jokes else NO_JOKE_MESSAGE
        except ProviderError as e:
            logger.error(f"Dad joke lookup failed: {e}")
            answer = JOKE_FAILURE_MESSAGE
        return self._success_response(context, answer)
