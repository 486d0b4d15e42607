"""
Application configuration with layered loading.

Configuration precedence (highest to lowest):
1. Environment variables
2. config.yml values
3. Default values defined here

API keys and Firebase credentials normally come from the environment
(or a .env file); config.yml is handy for non-secret tuning.
"""
import os
import logging
from pathlib import Path
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field
from dotenv import load_dotenv

# Load .env file first (lowest priority, will be overridden by config.yml and env vars)
load_dotenv()

logger = logging.getLogger(__name__)


def _find_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / "pyproject.toml").exists() or (parent / "config.example.yml").exists():
            return parent
    return Path(os.getenv("ALLIE_ROOT", os.getcwd()))


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    """Load configuration from YAML file if it exists."""
    if not config_path.exists():
        logger.debug(f"Config file not found: {config_path}")
        return {}

    try:
        import yaml
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f) or {}
        logger.info(f"Loaded configuration from {config_path}")
        return config
    except Exception as e:
        logger.error(f"Error loading config file {config_path}: {e}")
        return {}


def _get_nested(d: Dict, *keys, default=None):
    """Safely get a nested dictionary value."""
    for key in keys:
        if isinstance(d, dict):
            d = d.get(key, default)
        else:
            return default
    return d if d is not None else default


def _env_or_yaml(env_key: str, yaml_config: Dict, *yaml_keys, default=None):
    """Get value from environment variable, falling back to YAML config, then default."""
    env_value = os.getenv(env_key)
    if env_value is not None:
        return env_value

    yaml_value = _get_nested(yaml_config, *yaml_keys)
    if yaml_value is not None:
        return yaml_value

    return default


PROJECT_ROOT = _find_project_root()
YAML_CONFIG = _load_yaml_config(Path(os.getenv("ALLIE_CONFIG_FILE", PROJECT_ROOT / "config.yml")))


class ServerConfig(BaseModel):
    """HTTP server configuration."""
    host: str = _env_or_yaml("HOST", YAML_CONFIG, "server", "host", default="0.0.0.0")
    port: int = int(_env_or_yaml("PORT", YAML_CONFIG, "server", "port", default=5000))
    cors_origins: str = _env_or_yaml("ALLIE_CORS_ORIGINS", YAML_CONFIG, "server", "cors_origins", default="*")

    @property
    def allowed_origins(self) -> list:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


class OpenAIConfig(BaseModel):
    """Language model and speech-to-text configuration."""
    api_key: str = _env_or_yaml("OPENAI_API_KEY", YAML_CONFIG, "openai", "api_key", default="")
    base_url: Optional[str] = _env_or_yaml("OPENAI_BASE_URL", YAML_CONFIG, "openai", "base_url", default=None)
    chat_model: str = _env_or_yaml("OPENAI_CHAT_MODEL", YAML_CONFIG, "openai", "chat_model", default="gpt-4")
    temperature: float = float(_env_or_yaml("OPENAI_TEMPERATURE", YAML_CONFIG, "openai", "temperature", default=0.8))
    transcription_model: str = _env_or_yaml(
        "OPENAI_TRANSCRIPTION_MODEL", YAML_CONFIG, "openai", "transcription_model", default="whisper-1"
    )


class RapidAPIConfig(BaseModel):
    """RapidAPI-hosted providers (weather, NBA scoreboard, dad jokes)."""
    key: str = _env_or_yaml("RAPIDAPI_KEY", YAML_CONFIG, "rapidapi", "key", default="")
    weather_host: str = _get_nested(YAML_CONFIG, "rapidapi", "weather_host", default="open-weather13.p.rapidapi.com")
    nba_host: str = _get_nested(YAML_CONFIG, "rapidapi", "nba_host", default="nba-api-free-data.p.rapidapi.com")
    jokes_host: str = _get_nested(
        YAML_CONFIG, "rapidapi", "jokes_host", default="dad-jokes-by-api-ninjas.p.rapidapi.com"
    )


class IPGeolocationConfig(BaseModel):
    """IP geolocation / timezone provider."""
    api_key: str = _env_or_yaml("IPGEOLOCATION_API_KEY", YAML_CONFIG, "ipgeolocation", "api_key", default="")
    url: str = _get_nested(YAML_CONFIG, "ipgeolocation", "url", default="https://api.ipgeolocation.io/timezone")


class FirebaseConfig(BaseModel):
    """Firestore service-account credentials (schedule store)."""
    project_id: str = _env_or_yaml("FIREBASE_PROJECT_ID", YAML_CONFIG, "firebase", "project_id", default="")
    private_key_id: str = _env_or_yaml("FIREBASE_PRIVATE_KEY_ID", YAML_CONFIG, "firebase", "private_key_id", default="")
    private_key: str = _env_or_yaml("FIREBASE_PRIVATE_KEY", YAML_CONFIG, "firebase", "private_key", default="")
    client_email: str = _env_or_yaml("FIREBASE_CLIENT_EMAIL", YAML_CONFIG, "firebase", "client_email", default="")
    client_id: str = _env_or_yaml("FIREBASE_CLIENT_ID", YAML_CONFIG, "firebase", "client_id", default="")
    token_uri: str = _env_or_yaml(
        "FIREBASE_TOKEN_URI", YAML_CONFIG, "firebase", "token_uri", default="https://oauth2.googleapis.com/token"
    )
    collection: str = _get_nested(YAML_CONFIG, "firebase", "collection", default="schedules")

    @property
    def configured(self) -> bool:
        return bool(self.project_id and self.private_key and self.client_email)

    def service_account_info(self) -> Dict[str, str]:
        """Service account dict in the shape google-auth expects."""
        return {
            "type": "service_account",
            "project_id": self.project_id,
            "private_key_id": self.private_key_id,
            # Keys pasted into env files usually carry literal "\n"
            "private_key": self.private_key.replace("\\n", "\n"),
            "client_email": self.client_email,
            "client_id": self.client_id,
            "token_uri": self.token_uri,
        }


class UploadsConfig(BaseModel):
    """Temporary upload storage for transcription."""
    directory: Path = Path(_env_or_yaml("ALLIE_UPLOADS_PATH", YAML_CONFIG, "uploads", "directory", default="uploads"))
    audio_extension: str = _get_nested(YAML_CONFIG, "uploads", "audio_extension", default=".mp3")


class HTTPConfig(BaseModel):
    """Outbound HTTP client settings."""
    timeout: float = float(_env_or_yaml("ALLIE_HTTP_TIMEOUT", YAML_CONFIG, "http", "timeout", default=10.0))


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = _env_or_yaml("ALLIE_LOG_LEVEL", YAML_CONFIG, "logging", "level", default="INFO")
    format: str = _get_nested(YAML_CONFIG, "logging", "format", default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


class Settings(BaseModel):
    """
    Application settings with layered configuration.

    Configuration is loaded from (in order of precedence):
    1. Environment variables
    2. config.yml
    3. Default values
    """

    server: ServerConfig = Field(default_factory=ServerConfig)
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)
    rapidapi: RapidAPIConfig = Field(default_factory=RapidAPIConfig)
    ipgeolocation: IPGeolocationConfig = Field(default_factory=IPGeolocationConfig)
    firebase: FirebaseConfig = Field(default_factory=FirebaseConfig)
    uploads: UploadsConfig = Field(default_factory=UploadsConfig)
    http: HTTPConfig = Field(default_factory=HTTPConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    class Config:
        arbitrary_types_allowed = True


settings = Settings()


# Environment variable read for each dotted setting; keys absent here are YAML-only
ENV_KEYS: Dict[str, str] = {
    "server.host": "HOST",
    "server.port": "PORT",
    "server.cors_origins": "ALLIE_CORS_ORIGINS",
    "openai.api_key": "OPENAI_API_KEY",
    "openai.base_url": "OPENAI_BASE_URL",
    "openai.chat_model": "OPENAI_CHAT_MODEL",
    "openai.temperature": "OPENAI_TEMPERATURE",
    "openai.transcription_model": "OPENAI_TRANSCRIPTION_MODEL",
    "rapidapi.key": "RAPIDAPI_KEY",
    "ipgeolocation.api_key": "IPGEOLOCATION_API_KEY",
    "firebase.project_id": "FIREBASE_PROJECT_ID",
    "firebase.private_key_id": "FIREBASE_PRIVATE_KEY_ID",
    "firebase.private_key": "FIREBASE_PRIVATE_KEY",
    "firebase.client_email": "FIREBASE_CLIENT_EMAIL",
    "firebase.client_id": "FIREBASE_CLIENT_ID",
    "firebase.token_uri": "FIREBASE_TOKEN_URI",
    "uploads.directory": "ALLIE_UPLOADS_PATH",
    "http.timeout": "ALLIE_HTTP_TIMEOUT",
    "logging.level": "ALLIE_LOG_LEVEL",
}


def get_config_source(key: str) -> str:
    """
    Get the source of a configuration value, e.g. ``get_config_source("http.timeout")``.

    Returns 'env', 'yaml', or 'default'.
    """
    env_key = ENV_KEYS.get(key)
    if env_key is not None and os.getenv(env_key) is not None:
        return "env"

    yaml_value = _get_nested(YAML_CONFIG, *key.split("."))
    if yaml_value is not None:
        return "yaml"

    return "default"
