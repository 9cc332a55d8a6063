"""
Configuration management for the Weather AI Bot.
Secrets (bot token, model API key) are read from the environment / .env.
Other params come from the environment and may be overridden by an optional
TOML file pointed to by CONFIG_PATH.
"""

import os
import logging
from pathlib import Path
from typing import List, Any, Optional
from dotenv import load_dotenv
import toml

load_dotenv()

DEFAULT_MODEL = "accounts/sentientfoundation/models/dobby-unhinged-llama-3-3-70b-new"
DEFAULT_BASE_URL = "https://api.fireworks.ai/inference/v1"
DEFAULT_WEBHOOK_PATH = "api/webhook"

BOT_MODES = ("polling", "webhook")


def _bool_from_value(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    return str(v).strip().lower() in ("true", "1", "yes")


class Config:
    """
    Application configuration.
    Keys are loaded from the environment at import time; load_file()
    overwrites the non-secret ones from TOML.
    """

    TELEGRAM_BOT_TOKEN: str = os.getenv("TELEGRAM_BOT_TOKEN", "")
    FIREWORKS_API_KEY: str = os.getenv("FIREWORKS_API_KEY", "")
    FIREWORKS_MODEL: str = os.getenv("FIREWORKS_MODEL", DEFAULT_MODEL) or DEFAULT_MODEL
    FIREWORKS_BASE_URL: str = os.getenv("FIREWORKS_BASE_URL", DEFAULT_BASE_URL) or DEFAULT_BASE_URL
    MODEL_TIMEOUT_SECONDS: float = float(os.getenv("MODEL_TIMEOUT_SECONDS", "60") or "60")
    MODEL_TEMPERATURE: float = float(os.getenv("MODEL_TEMPERATURE", "0.3") or "0.3")
    BOT_MODE: str = (os.getenv("BOT_MODE", "polling") or "polling").lower()
    WEBHOOK_URL: str = os.getenv("WEBHOOK_URL", "")
    WEBHOOK_PATH: str = os.getenv("WEBHOOK_PATH", DEFAULT_WEBHOOK_PATH) or DEFAULT_WEBHOOK_PATH
    PORT: int = int(os.getenv("PORT", "3000") or "3000")
    LOG_LEVEL: str = (os.getenv("LOG_LEVEL", "INFO") or "INFO").upper()
    DEBUG_MODE: bool = _bool_from_value(os.getenv("DEBUG_MODE", "false"))
    CONFIG_PATH: str = os.getenv("CONFIG_PATH", "")

    @classmethod
    def set_runtime_config(cls, config: dict) -> None:
        """Overwrite non-secret keys from a parsed TOML mapping."""
        if "fireworks_model" in config:
            cls.FIREWORKS_MODEL = str(config["fireworks_model"] or DEFAULT_MODEL)
        if "fireworks_base_url" in config:
            cls.FIREWORKS_BASE_URL = str(config["fireworks_base_url"] or DEFAULT_BASE_URL)
        if "model_timeout_seconds" in config:
            cls.MODEL_TIMEOUT_SECONDS = float(config["model_timeout_seconds"] or 60)
        if "model_temperature" in config:
            cls.MODEL_TEMPERATURE = float(config["model_temperature"] or 0)
        if "bot_mode" in config:
            cls.BOT_MODE = str(config["bot_mode"] or "polling").lower()
        if "webhook_url" in config:
            cls.WEBHOOK_URL = str(config["webhook_url"] or "")
        if "webhook_path" in config:
            cls.WEBHOOK_PATH = str(config["webhook_path"] or DEFAULT_WEBHOOK_PATH)
        if "port" in config:
            cls.PORT = int(config["port"] or 3000)
        if "log_level" in config:
            cls.LOG_LEVEL = (str(config["log_level"] or "INFO")).upper()
        if "debug_mode" in config:
            cls.DEBUG_MODE = _bool_from_value(config["debug_mode"])

    @classmethod
    def load_file(cls, path: Optional[str] = None) -> bool:
        """
        Load overrides from a TOML file.

        Args:
            path: File path, defaults to CONFIG_PATH

        Returns:
            True if a file was found and applied
        """
        path = path or cls.CONFIG_PATH
        if not path:
            return False

        config_file = Path(path)
        if not config_file.is_file():
            logging.warning(f"Config file '{path}' not found, using environment only")
            return False

        cls.set_runtime_config(toml.loads(config_file.read_text(encoding="utf-8")))
        return True

    @classmethod
    def webhook_endpoint(cls) -> str:
        """Full public URL Telegram should POST updates to."""
        return f"{cls.WEBHOOK_URL.rstrip('/')}/{cls.WEBHOOK_PATH.strip('/')}"

    @classmethod
    def validate(cls) -> List[str]:
        """
        Validate configuration and return list of errors.
        Returns empty list if configuration is valid.
        """
        errors = []

        if not cls.TELEGRAM_BOT_TOKEN:
            errors.append("TELEGRAM_BOT_TOKEN is required")

        if not cls.FIREWORKS_API_KEY:
            errors.append("FIREWORKS_API_KEY is required")

        if cls.BOT_MODE not in BOT_MODES:
            errors.append(f"BOT_MODE must be one of: {', '.join(BOT_MODES)}")

        if cls.BOT_MODE == "webhook" and not cls.WEBHOOK_URL:
            errors.append("WEBHOOK_URL is required in webhook mode")

        if cls.MODEL_TIMEOUT_SECONDS <= 0:
            errors.append("MODEL_TIMEOUT_SECONDS must be positive")

        if not 0 < cls.PORT < 65536:
            errors.append("PORT must be between 1 and 65535")

        return errors

    @classmethod
    def setup_logging(cls) -> None:
        """Configure logging based on settings."""
        level_name = "DEBUG" if cls.DEBUG_MODE else cls.LOG_LEVEL
        log_level = getattr(logging, level_name, logging.INFO)

        logging.basicConfig(
            level=log_level,
            format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            handlers=[logging.StreamHandler()]
        )

        # Reduce noise from external libraries
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)
        logging.getLogger("telegram").setLevel(logging.WARNING)
        logging.getLogger("aiohttp.access").setLevel(logging.WARNING)
