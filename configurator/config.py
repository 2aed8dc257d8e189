"""
Configuration settings for the Queue Bot Configurator.
"""

import os
from pathlib import Path
from typing import Dict, Optional, Tuple

import yaml
from dotenv import load_dotenv

# Load environment variables (safe - just reads .env file)
load_dotenv()

# Track initialization state for prompt overrides
_initialized = False


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or value.strip() == "":
        return None
    return float(value)


# Config file written for the queue bot
DEFAULT_CONFIG_PATH = os.getenv("CONFIGURATOR_CONFIG_PATH", "config.json")

# Seconds to wait before exiting after a run; None waits for Ctrl+C
EXIT_DELAY_SECONDS = _optional_float(os.getenv("CONFIGURATOR_EXIT_DELAY"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()

# Project Paths
BASE_DIR = Path(__file__).parent.parent
PROMPTS_YAML_PATH = BASE_DIR / "prompts.yaml"

# Per-field prompt title/description overrides loaded from prompts.yaml
PROMPT_OVERRIDES: Dict[str, dict] = {}

# Discord API
GUILD_FETCH_LIMIT = 200

# Values used when no config file exists yet
DEFAULT_PLAYBACK_TIMEOUT = 45
DEFAULT_SCREEN_NUMBER = 0
DEFAULT_USER_LIMIT = 1

# Output formatting
JSON_INDENT = 2


def init_config() -> None:
    """Initialize configuration by loading prompt overrides from prompts.yaml.

    This function should be called once at application startup.
    It's safe to call multiple times.
    """
    global _initialized

    if _initialized:
        return

    if PROMPTS_YAML_PATH.exists():
        try:
            with open(PROMPTS_YAML_PATH, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
            if isinstance(loaded, dict):
                PROMPT_OVERRIDES.update(
                    {k: v for k, v in loaded.items() if isinstance(v, dict)}
                )
        except (OSError, yaml.YAMLError) as e:
            # Imported lazily: the logging module reads LOG_LEVEL from here
            from .utils.logging import logger
            logger.warning(f"Ignoring unreadable {PROMPTS_YAML_PATH.name}: {e}")

    _initialized = True


def get_prompt_text(field: str, title: str, description: str = "") -> Tuple[str, str]:
    """Get the title and description for a wizard field.

    Args:
        field: The field key (e.g., 'playbackTimeout')
        title: The built-in title
        description: The built-in description

    Returns:
        The (title, description) pair, with any prompts.yaml override applied.
    """
    override = PROMPT_OVERRIDES.get(field, {})
    return (
        str(override.get("title", title)),
        str(override.get("description", description)),
    )


def is_initialized() -> bool:
    """Check if configuration has been initialized."""
    return _initialized
