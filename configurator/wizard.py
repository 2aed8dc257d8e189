"""
Interactive setup wizard for the queue bot config file.

The wizard runs two prompt groups: the bot token first, then (once the token
has been used to list the bot's servers) the server, channel, admin roles and
playback settings, ending with a confirmation. The file is written only when
the operator confirms.
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

import questionary
from rich.console import Console

from .app_config import AppConfig, PathLike, load_config, save_config
from .config import GUILD_FETCH_LIMIT, get_prompt_text
from .discord_api import (
    DependentOptions,
    DiscordDirectory,
    Option,
    channel_options,
    guild_options,
    role_options,
)
from .errors import NoGuildsError, WizardAborted
from .utils.logging import logger
from .utils.theme import DESCRIPTION_STYLE, NOTICE_STYLE, SPINNER_STYLE, custom_style
from .utils.validators import parse_int_or_zero, validate_is_int

NO_GUILDS_MESSAGE = "No servers found! Add the bot to a server first."


class QuestionaryPrompter:
    """Renders wizard fields with questionary.

    Each field prints its description under the title. A prompt cancelled
    with Ctrl+C raises WizardAborted.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()
        self.style = custom_style()

    def _describe(self, description: str) -> None:
        if description:
            self.console.print(f"[{DESCRIPTION_STYLE}]{description}[/]", highlight=False)

    @staticmethod
    def _answer(question: questionary.Question) -> Any:
        answer = question.ask()
        if answer is None:
            raise WizardAborted("Setup cancelled")
        return answer

    def notice(self, message: str) -> None:
        self.console.print(f"[{NOTICE_STYLE}]{message}[/]", highlight=False)

    def text(
        self,
        title: str,
        description: str = "",
        default: str = "",
        validate: Optional[Callable[[str], Any]] = None,
    ) -> str:
        self._describe(description)
        return self._answer(questionary.text(
            title, default=default, validate=validate, style=self.style
        ))

    def select(
        self,
        title: str,
        description: str,
        options: Sequence[Option],
        default: Any = None,
    ) -> Any:
        self._describe(description)
        choices = [questionary.Choice(title=o.label, value=o.value) for o in options]
        initial = next((c for c in choices if c.value == default), None)
        return self._answer(questionary.select(
            title, choices=choices, default=initial, style=self.style
        ))

    def multi_select(
        self,
        title: str,
        description: str,
        options: Sequence[Option],
        selected: Sequence[Any] = (),
    ) -> List[Any]:
        self._describe(description)
        choices = [
            questionary.Choice(title=o.label, value=o.value, checked=o.value in selected)
            for o in options
        ]
        return list(self._answer(questionary.checkbox(
            title, choices=choices, style=self.style
        )))

    def confirm(self, title: str, description: str = "", default: bool = False) -> bool:
        self._describe(description)
        return bool(self._answer(questionary.confirm(
            title, default=default, style=self.style
        )))


@dataclass
class _NumericAnswers:
    """Numeric fields as typed; converted only when the config is saved."""
    playback_timeout: str
    screen_number: str
    user_limit: str


class Wizard:
    """Walks the operator through building the queue bot config file."""

    def __init__(
        self,
        config_path: PathLike,
        prompter: Optional[QuestionaryPrompter] = None,
        directory_factory: Callable[[], DiscordDirectory] = DiscordDirectory,
        console: Optional[Console] = None,
    ) -> None:
        self.config_path = config_path
        self.console = console or Console()
        self.prompter = prompter or QuestionaryPrompter(self.console)
        self.directory_factory = directory_factory
        self.config: Optional[AppConfig] = None

    def _status(self, message: str):
        return self.console.status(message, spinner_style=SPINNER_STYLE)

    def run(self) -> bool:
        """Run the wizard.

        Returns:
            True if the config was saved, False if the operator declined.

        Raises:
            ConfiguratorError: On any fatal condition; nothing is written.
        """
        try:
            with self._status("Loading..."):
                self.config = load_config(self.config_path)
        except KeyboardInterrupt as e:
            raise WizardAborted("Setup cancelled") from e

        self._ask_token(self.config)

        directory = self.directory_factory()
        try:
            try:
                with self._status("Logging in..."):
                    directory.login(self.config.discord_token)
                    guilds = directory.list_guilds(GUILD_FETCH_LIMIT)
            except KeyboardInterrupt as e:
                raise WizardAborted("Setup cancelled") from e

            if not guilds:
                raise NoGuildsError(NO_GUILDS_MESSAGE)

            numbers, confirmed = self._ask_settings(self.config, directory, guilds)
        finally:
            directory.close()

        if not confirmed:
            logger.info("Operator declined; config not saved")
            return False

        self.config.playback_timeout = parse_int_or_zero(numbers.playback_timeout)
        self.config.screen_number = parse_int_or_zero(numbers.screen_number)
        self.config.user_limit = parse_int_or_zero(numbers.user_limit)
        save_config(self.config, self.config_path)
        return True

    def _ask_token(self, config: AppConfig) -> None:
        title, description = get_prompt_text(
            "discordToken",
            "Discord Token",
            "Enter your Discord bot token. If you haven't created a bot yet, "
            "see the README for instructions.",
        )
        config.discord_token = self.prompter.text(
            title, description, default=config.discord_token
        )

    def _ask_settings(self, config: AppConfig, directory: DiscordDirectory, guilds):
        channels = DependentOptions(
            lambda guild_id: channel_options(directory.list_text_channels(guild_id))
        )
        roles = DependentOptions(
            lambda guild_id: role_options(directory.list_roles(guild_id))
        )

        guild_title, guild_description = get_prompt_text(
            "guildId", "Guild", "Select the guild the bot will be used in."
        )
        servers = guild_options(guilds)
        while True:
            config.guild_id = self.prompter.select(
                guild_title, guild_description, servers, default=config.guild_id
            )
            channel_choices = channels.options_for(config.guild_id)
            if channel_choices:
                break
            self.prompter.notice(
                "That server has no text channels the bot can see. Pick another server."
            )

        title, description = get_prompt_text(
            "channelId", "Channel", "Select the channel the bot will be used in."
        )
        config.channel_id = self.prompter.select(
            title, description, channel_choices, default=config.channel_id
        )

        role_choices = roles.options_for(config.guild_id)
        if role_choices:
            title, description = get_prompt_text(
                "adminRoles", "Admin Roles", "Select the roles that can manage the bot."
            )
            config.admin_roles = self.prompter.multi_select(
                title, description, role_choices, selected=config.admin_roles
            )
        else:
            config.admin_roles = []

        numbers = _NumericAnswers(
            playback_timeout=self._ask_number(
                "playbackTimeout",
                "Playback Timeout",
                "The time in seconds before the bot automatically begins playing the next song.",
                config.playback_timeout,
            ),
            screen_number=self._ask_number(
                "screenNumber",
                "Screen Number",
                "The screen number to display the video on (0 for primary).",
                config.screen_number,
            ),
            user_limit=self._ask_number(
                "userLimit",
                "User Limit",
                "The maximum number of songs a user can queue at once.",
                config.user_limit,
            ),
        )

        title, description = get_prompt_text(
            "allowSelfSwap", "Allow Self Swap", "Allow users to swap their own songs."
        )
        config.allow_self_swap = self.prompter.select(
            title,
            description,
            [Option("Yes", True), Option("No", False)],
            default=config.allow_self_swap,
        )

        title, description = get_prompt_text("confirm", "Save this configuration?")
        confirmed = self.prompter.confirm(title, description, default=False)
        return numbers, confirmed

    def _ask_number(self, field: str, title: str, description: str, current: int) -> str:
        title, description = get_prompt_text(field, title, description)
        return self.prompter.text(
            title, description, default=str(current), validate=validate_is_int
        )
