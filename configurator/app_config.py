"""
Queue bot config file: the record, how it is loaded, and how it is saved.

The file is a flat JSON object shared with the queue bot. Keys that are
missing from the file decode to their zero value; the three numeric defaults
are only applied when there is no file at all.
"""

import errno
import json
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, ValidationError, field_validator

from .config import (
    DEFAULT_PLAYBACK_TIMEOUT,
    DEFAULT_SCREEN_NUMBER,
    DEFAULT_USER_LIMIT,
    JSON_INDENT,
)
from .errors import ConfigDecodeError, ConfigWriteError
from .utils.logging import logger

PathLike = Union[str, "os.PathLike[str]"]

# JSON keys left out of the file when empty
_OMIT_WHEN_EMPTY = ("adminRoles", "adminUsers", "dbFile", "mpvPath", "ytDlpPath")


class AppConfig(BaseModel):
    """Settings written for the queue bot."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    discord_token: StrictStr = Field(default="", alias="discordToken")
    guild_id: StrictStr = Field(default="", alias="guildId")
    channel_id: StrictStr = Field(default="", alias="channelId")
    admin_roles: List[StrictStr] = Field(default_factory=list, alias="adminRoles")
    # Kept for the bot's schema; the wizard never fills it in
    admin_users: List[StrictStr] = Field(default_factory=list, alias="adminUsers")
    playback_timeout: StrictInt = Field(default=0, alias="playbackTimeout")
    screen_number: StrictInt = Field(default=0, alias="screenNumber")
    allow_self_swap: StrictBool = Field(default=False, alias="allowSelfSwap")
    user_limit: StrictInt = Field(default=0, alias="userLimit")

    # Managed by the bot's portable config, passed through untouched
    db_file: StrictStr = Field(default="", alias="dbFile")
    mpv_path: StrictStr = Field(default="", alias="mpvPath")
    yt_dlp_path: StrictStr = Field(default="", alias="ytDlpPath")

    @field_validator("admin_roles", "admin_users", mode="before")
    @classmethod
    def _null_list_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @classmethod
    def with_defaults(cls) -> "AppConfig":
        """Create the record used on first run, when no file exists."""
        return cls(
            playback_timeout=DEFAULT_PLAYBACK_TIMEOUT,
            screen_number=DEFAULT_SCREEN_NUMBER,
            user_limit=DEFAULT_USER_LIMIT,
        )

    @classmethod
    def from_dict(cls, data: Any) -> "AppConfig":
        """Decode a JSON object into a record.

        Absent keys keep their zero value and unknown keys are ignored.

        Raises:
            ConfigDecodeError: If data is not an object or a value has the wrong type.
        """
        if not isinstance(data, dict):
            raise ConfigDecodeError(
                f"expected a JSON object, got {type(data).__name__}"
            )
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigDecodeError(f"Invalid config: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        """Encode the record with the bot's JSON keys, leaving out empty optional fields."""
        data = self.model_dump(by_alias=True)
        for key in _OMIT_WHEN_EMPTY:
            if not data[key]:
                del data[key]
        return data


def load_config(path: PathLike) -> AppConfig:
    """Load the config file, or return first-run defaults if it can't be opened.

    Args:
        path: Path to the JSON config file.

    Returns:
        The decoded record, or AppConfig.with_defaults() when the file is missing.

    Raises:
        ConfigDecodeError: If the file opens but is not a valid config document.
    """
    try:
        f = open(path, 'r', encoding='utf-8')
    except OSError:
        logger.info(f"No config at {path}, starting from defaults")
        return AppConfig.with_defaults()

    with f:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ConfigDecodeError(f"Could not decode {path}: {e}") from e

    config = AppConfig.from_dict(data)
    logger.info(f"Loaded config from {path}")
    return config


def dumps_config(config: AppConfig) -> str:
    """Serialize a record the way it is written to disk."""
    return json.dumps(config.to_dict(), indent=JSON_INDENT, ensure_ascii=False) + "\n"


def _new_file_mode() -> int:
    """Mode a freshly created file gets under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def save_config(config: AppConfig, path: PathLike) -> None:
    """Write the record to path, replacing the contents of any existing file.

    The document is fully encoded before the file is touched and is written
    through a temporary file next to the real target (symlinks are followed),
    keeping the target's permission bits. When the target can't be replaced
    (a bind-mounted file), it is truncated and rewritten in place.

    Raises:
        ConfigWriteError: If the record can't be encoded or the file can't be written.
    """
    try:
        payload = dumps_config(config)
    except (TypeError, ValueError) as e:
        raise ConfigWriteError(f"Could not encode config: {e}") from e

    target = Path(path).resolve()
    try:
        mode = stat.S_IMODE(os.stat(target).st_mode)
    except FileNotFoundError:
        mode = _new_file_mode()
    except OSError as e:
        raise ConfigWriteError(f"Could not write {target}: {e}") from e

    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent)
        )
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(payload)
        os.chmod(tmp_name, mode)
        try:
            os.replace(tmp_name, target)
            tmp_name = None
        except OSError as e:
            if e.errno not in (errno.EBUSY, errno.EXDEV):
                raise
            with open(target, 'w', encoding='utf-8') as f:
                f.write(payload)
    except OSError as e:
        raise ConfigWriteError(f"Could not write {target}: {e}") from e
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)

    logger.info(f"Saved config to {target}")
