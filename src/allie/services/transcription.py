"""Audio transcription for uploaded voice clips."""
import os
import shutil
import uuid
from pathlib import Path
from typing import BinaryIO

from allie.core.logging import logger
from allie.services.llm import LLMService


class TranscriptionService:
    """Stores an upload under the uploads directory, transcribes it, and always removes it."""

    def __init__(self, llm: LLMService, upload_dir: Path, audio_extension: str = ".mp3"):
        self.llm = llm
        self.upload_dir = Path(upload_dir)
        self.audio_extension = audio_extension

    def _save_upload(self, stream: BinaryIO) -> Path:
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        path = self.upload_dir / uuid.uuid4().hex
        try:
            with open(path, "wb") as f:
                shutil.copyfileobj(stream, f)
        except OSError:
            path.unlink(missing_ok=True)
            raise
        return path

    def transcribe_upload(self, stream: BinaryIO) -> str:
        """
        Transcribe an uploaded audio stream.

        The stored copy is renamed to carry an audio extension because the
        speech-to-text API infers the format from the file name.

        Raises:
            LLMServiceError: the transcription call failed
            OSError: the upload could not be stored
        """
        upload_path = self._save_upload(stream)
        audio_path = upload_path.with_name(upload_path.name + self.audio_extension)

        try:
            os.rename(upload_path, audio_path)
        except OSError:
            upload_path.unlink(missing_ok=True)
            raise

        try:
            text = self.llm.transcribe(audio_path)
            logger.info(f"Transcription complete: {text[:100]}")
            return text
        finally:
            audio_path.unlink(missing_ok=True)
