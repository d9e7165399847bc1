"""Configuration settings for the flashcard bot."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from vocadeck.models.word import GENDER_MODES, TYPE_FILTERS

# Define base directory
BASE_DIR = Path(__file__).parent.parent.parent

# Load environment variables from .env file
env_file = ".env.test" if os.getenv("ENV") == "test" else ".env"
load_dotenv(env_file)


# Define data directories from environment variables
DATA_DIR = Path(os.getenv("DATA_DIR", "./data"))
WORDS_FILE = Path(os.getenv("WORDS_FILE", str(DATA_DIR / "words.json")))
MEDIA_DIR = DATA_DIR / "media"
SPEECH_DIR = MEDIA_DIR / "speech"


def ensure_directories() -> None:
    """Ensure all required directories exist."""
    directories = [
        DATA_DIR,
        MEDIA_DIR,
        SPEECH_DIR,
    ]

    for directory in directories:
        directory.mkdir(parents=True, exist_ok=True)


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name, "").strip()
    return int(value) if value else None


@dataclass
class PathSettings:
    """Path configuration settings."""
    base_dir: Path = BASE_DIR
    data_dir: Path = DATA_DIR
    words_file: Path = WORDS_FILE
    media_dir: Path = MEDIA_DIR
    speech_dir: Path = SPEECH_DIR


@dataclass
class LoggingSettings:
    """Logging configuration settings."""
    level: str = os.getenv("LOG_LEVEL", "INFO")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    dir: Optional[str] = os.getenv("LOG_DIR", None)
    rotation: str = os.getenv("LOG_ROTATION", "midnight")
    interval: int = int(os.getenv("LOG_INTERVAL", "1"))
    backup_count: int = int(os.getenv("LOG_BACKUP_COUNT", "7"))


@dataclass
class BotSettings:
    """Bot configuration settings."""
    token: str = os.getenv("TELEGRAM_BOT_TOKEN", "")

    def validate(self) -> None:
        """Validate settings needed to connect to Telegram."""
        if not self.token:
            raise ValueError("TELEGRAM_BOT_TOKEN is required")


@dataclass
class DeckSettings:
    """Deck and session defaults."""
    default_type_filter: str = os.getenv("DEFAULT_TYPE_FILTER", "all")
    default_gender_mode: str = os.getenv("DEFAULT_GENDER_MODE", "both")
    shuffle_seed: Optional[int] = field(default_factory=lambda: _optional_int("SHUFFLE_SEED"))


@dataclass
class SpeechSettings:
    """Text-to-speech settings."""
    enabled: bool = os.getenv("SPEECH_ENABLED", "true").lower() == "true"
    slow: bool = os.getenv("SPEECH_SLOW", "false").lower() == "true"


@dataclass
class MonitoringSettings:
    """Metrics exporter settings."""
    metrics_port: int = int(os.getenv("METRICS_PORT", "0"))


def get_path_settings() -> PathSettings:
    """Get path settings."""
    return PathSettings()


def get_logging_settings() -> LoggingSettings:
    """Get logging settings."""
    return LoggingSettings()


def get_bot_settings() -> BotSettings:
    """Get bot settings."""
    return BotSettings()


def get_deck_settings() -> DeckSettings:
    """Get deck settings."""
    return DeckSettings()


def get_speech_settings() -> SpeechSettings:
    """Get speech settings."""
    return SpeechSettings()


def get_monitoring_settings() -> MonitoringSettings:
    """Get monitoring settings."""
    return MonitoringSettings()


@dataclass
class Settings:
    """Main settings class that combines all configuration settings."""
    paths: PathSettings = field(default_factory=get_path_settings)
    logging: LoggingSettings = field(default_factory=get_logging_settings)
    bot: BotSettings = field(default_factory=get_bot_settings)
    deck: DeckSettings = field(default_factory=get_deck_settings)
    speech: SpeechSettings = field(default_factory=get_speech_settings)
    monitoring: MonitoringSettings = field(default_factory=get_monitoring_settings)

    def validate(self) -> None:
        """Validate settings and raise ValueError if invalid."""
        if self.deck.default_type_filter not in TYPE_FILTERS:
            raise ValueError(f"DEFAULT_TYPE_FILTER must be one of {', '.join(TYPE_FILTERS)}")

        if self.deck.default_gender_mode not in GENDER_MODES:
            raise ValueError(f"DEFAULT_GENDER_MODE must be one of {', '.join(GENDER_MODES)}")

        if self.monitoring.metrics_port < 0:
            raise ValueError("METRICS_PORT cannot be negative")


# Create global settings instance
settings = Settings()
settings.validate()
