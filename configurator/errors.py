"""
Exceptions raised by the Queue Bot Configurator.

Every error here is fatal for the current run; the CLI logs the message and
exits with a non-zero status.
"""


class ConfiguratorError(Exception):
    """Base class for configurator failures."""


class ConfigDecodeError(ConfiguratorError):
    """The config file exists but its contents could not be decoded."""


class ConfigWriteError(ConfiguratorError):
    """The config file could not be encoded or written."""


class DiscordAPIError(ConfiguratorError):
    """A Discord API call failed (login, guilds, channels or roles)."""


class NoGuildsError(ConfiguratorError):
    """The bot account is not a member of any server."""


class WizardAborted(ConfiguratorError):
    """The operator cancelled a prompt."""
