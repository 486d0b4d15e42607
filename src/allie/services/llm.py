"""LLM service."""
from pathlib import Path
from typing import List, Optional, Dict

from openai import OpenAI

from allie.core.config import OpenAIConfig
from allie.core.errors import LLMServiceError
from allie.core.logging import logger


class LLMService:
    """Service for language model completions and speech-to-text."""

    def __init__(self, config: OpenAIConfig, client: Optional[OpenAI] = None):
        """Initialize LLM client."""
        self.config = config
        self.client = client or OpenAI(
            api_key=config.api_key or "not-configured",
            base_url=config.base_url,
        )
        logger.info(f"LLM client initialized: model={config.chat_model}")

    def complete(self, messages: List[Dict[str, str]]) -> str:
        """Send a prepared message list to the chat completion API and return the trimmed reply."""
        try:
            resp = self.client.chat.completions.create(
                model=self.config.chat_model,
                messages=messages,
                temperature=self.config.temperature,
            )
            return (resp.choices[0].message.content or "").strip()
        except Exception as e:
            logger.error(f"LLM call failed: {e}")
            raise LLMServiceError(f"LLM service unavailable: {e}") from e

    def transcribe(self, audio_path: Path) -> str:
        """Transcribe an audio file; the provider infers the format from its extension."""
        try:
            with open(audio_path, "rb") as audio_file:
                transcription = self.client.audio.transcriptions.create(
                    model=self.config.transcription_model,
                    file=audio_file,
                )
            return transcription.text
        except Exception as e:
            logger.error(f"Transcription failed: {e}")
            raise LLMServiceError(f"Transcription service unavailable: {e}") from e

    def health_check(self) -> str:
        """Check LLM service health."""
        try:
            self.client.models.list()
            return "healthy"
        except Exception as e:
            logger.error(f"LLM health check failed: {e}")
            return f"unhealthy: {str(e)}"
