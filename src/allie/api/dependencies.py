"""Service container built once at startup and handed to routes via Depends."""
from dataclasses import dataclass

from fastapi import Request

from allie.core.config import Settings
from allie.core.logging import logger
from allie.services.chat.handlers import (
    GeneralHandler,
    JokeHandler,
    NameHandler,
    SportsScheduleHandler,
    TimeQueryHandler,
    WeatherHandler,
)
from allie.services.chat.orchestrator import ChatOrchestrator, HandlerRegistry
from allie.services.intent.router import IntentRouter
from allie.services.llm import LLMService
from allie.services.providers import JokeProvider, ScoreboardProvider, TimezoneProvider, WeatherProvider
from allie.services.schedule import ScheduleService, ScheduleStore, firestore_client_factory
from allie.services.transcription import TranscriptionService


@dataclass
class Services:
    """Everything a request handler needs; no module-level singletons."""
    llm: LLMService
    weather: WeatherProvider
    orchestrator: ChatOrchestrator
    transcription: TranscriptionService
    schedule: ScheduleService


def build_services(settings: Settings) -> Services:
    """Wire providers, handlers and stores from configuration."""
    timeout = settings.http.timeout
    rapid = settings.rapidapi

    llm = LLMService(settings.openai)
    weather = WeatherProvider(rapid.key, rapid.weather_host, timeout=timeout)
    scoreboard = ScoreboardProvider(rapid.key, rapid.nba_host, timeout=timeout)
    jokes = JokeProvider(rapid.key, rapid.jokes_host, timeout=timeout)
    local_time = TimezoneProvider(settings.ipgeolocation.api_key, settings.ipgeolocation.url, timeout=timeout)

    registry = HandlerRegistry()
    registry.register(TimeQueryHandler(local_time))
    registry.register(WeatherHandler(weather))
    registry.register(NameHandler())
    registry.register(JokeHandler(jokes))
    registry.register(SportsScheduleHandler(scoreboard))
    registry.register(GeneralHandler(llm))
    logger.info(f"Intent handlers: {registry.list_handlers()}")

    store = ScheduleStore(
        firestore_client_factory(settings.firebase),
        collection=settings.firebase.collection,
    )

    return Services(
        llm=llm,
        weather=weather,
        orchestrator=ChatOrchestrator(IntentRouter(), registry),
        transcription=TranscriptionService(llm, settings.uploads.directory, settings.uploads.audio_extension),
        schedule=ScheduleService(store),
    )


def get_services(request: Request) -> Services:
    return request.app.state.services
