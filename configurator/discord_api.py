"""
Read-only Discord lookups for the wizard.

Wraps discord.py's REST calls in a small synchronous API. The client logs in
over HTTP only (no gateway connection) and never writes to Discord.
"""

import asyncio
from collections import Counter
from dataclasses import dataclass
from typing import Any, Callable, Coroutine, Dict, Generic, List, Optional, Sequence, TypeVar

import aiohttp
import discord

from .config import GUILD_FETCH_LIMIT
from .errors import DiscordAPIError
from .utils.logging import logger

T = TypeVar("T")


@dataclass(frozen=True)
class GuildSummary:
    """A server the bot account belongs to."""
    id: str
    name: str


@dataclass(frozen=True)
class ChannelSummary:
    """A text channel in a server."""
    id: str
    name: str


@dataclass(frozen=True)
class RoleSummary:
    """A role in a server."""
    id: str
    name: str


@dataclass(frozen=True)
class Option(Generic[T]):
    """A labelled choice for a picker."""
    label: str
    value: T


def _create_client() -> discord.Client:
    return discord.Client(intents=discord.Intents.none())


class DiscordDirectory:
    """Synchronous facade over a discord.py client for guild, channel and role lookups."""

    def __init__(self, client_factory: Optional[Callable[[], discord.Client]] = None) -> None:
        self._loop = asyncio.new_event_loop()
        self._client_factory = client_factory or _create_client
        self._client: Optional[discord.Client] = None
        self._guilds: Dict[str, discord.Guild] = {}

    def __enter__(self) -> "DiscordDirectory":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _run(self, action: str, coro: Coroutine[Any, Any, T]) -> T:
        """Run a coroutine on the private loop, translating client errors."""
        try:
            return self._loop.run_until_complete(coro)
        except discord.LoginFailure as e:
            raise DiscordAPIError(f"Login failed: {e}") from e
        except (discord.DiscordException, aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            raise DiscordAPIError(f"Failed to {action}: {type(e).__name__}: {e}") from e

    @property
    def client(self) -> discord.Client:
        if self._client is None:
            raise DiscordAPIError("Not logged in")
        return self._client

    def login(self, token: str) -> None:
        """Authenticate with a bot token."""
        async def _login() -> discord.Client:
            client = self._client_factory()
            # Keep a handle so close() can release the HTTP session on failure
            self._client = client
            await client.login(token)
            return client

        self._run("log in", _login())
        logger.info("Logged in to Discord")

    def list_guilds(self, limit: int = GUILD_FETCH_LIMIT) -> List[GuildSummary]:
        """List the servers the bot account belongs to, in API order."""
        async def _fetch() -> List[discord.Guild]:
            return [guild async for guild in self.client.fetch_guilds(limit=limit)]

        guilds = self._run("list servers", _fetch())
        self._guilds = {str(guild.id): guild for guild in guilds}
        logger.info(f"Found {len(guilds)} server(s)")
        return [GuildSummary(id=str(guild.id), name=guild.name) for guild in guilds]

    async def _guild(self, guild_id: str) -> discord.Guild:
        guild = self._guilds.get(guild_id)
        if guild is None:
            guild = await self.client.fetch_guild(int(guild_id))
            self._guilds[guild_id] = guild
        return guild

    def list_text_channels(self, guild_id: str) -> List[ChannelSummary]:
        """List the text channels of a server, in API order."""
        async def _fetch() -> Sequence[Any]:
            guild = await self._guild(guild_id)
            return await guild.fetch_channels()

        channels = self._run(f"list channels for server {guild_id}", _fetch())
        text_channels = [
            ChannelSummary(id=str(channel.id), name=channel.name)
            for channel in channels
            if channel.type == discord.ChannelType.text
        ]
        logger.debug(f"Server {guild_id}: {len(text_channels)} text channel(s)")
        return text_channels

    def list_roles(self, guild_id: str) -> List[RoleSummary]:
        """List the roles of a server, in API order."""
        async def _fetch() -> Sequence[Any]:
            guild = await self._guild(guild_id)
            return await guild.fetch_roles()

        roles = self._run(f"list roles for server {guild_id}", _fetch())
        logger.debug(f"Server {guild_id}: {len(roles)} role(s)")
        return [RoleSummary(id=str(role.id), name=role.name) for role in roles]

    def close(self) -> None:
        """Close the HTTP session and the private event loop."""
        if self._loop.is_closed():
            return
        try:
            if self._client is not None:
                self._loop.run_until_complete(self._client.close())
            self._loop.run_until_complete(self._loop.shutdown_asyncgens())
        finally:
            self._client = None
            self._loop.close()


def guild_options(guilds: Sequence[GuildSummary]) -> List[Option[str]]:
    """Picker options for servers: label is the name, value is the ID."""
    return [Option(guild.name, guild.id) for guild in guilds]


def channel_options(channels: Sequence[ChannelSummary]) -> List[Option[str]]:
    """Picker options for channels.

    Channels sharing a name with another channel in the list get their ID
    appended in parentheses so the operator can tell them apart.
    """
    name_counts = Counter(channel.name for channel in channels)
    options = []
    for channel in channels:
        if name_counts[channel.name] > 1:
            label = f"{channel.name} ({channel.id})"
        else:
            label = channel.name
        options.append(Option(label, channel.id))
    return options


def role_options(roles: Sequence[RoleSummary]) -> List[Option[str]]:
    """Picker options for roles: label is the name, value is the ID."""
    return [Option(role.name, role.id) for role in roles]


class DependentOptions(Generic[T]):
    """Options for a picker that depends on another field's value.

    Whenever the parent value changes the cached options are dropped and the
    loader is called again. An empty parent yields no options.
    """

    def __init__(self, loader: Callable[[str], List[Option[T]]]) -> None:
        self._loader = loader
        self._parent: Optional[str] = None
        self._options: List[Option[T]] = []

    def options_for(self, parent: str) -> List[Option[T]]:
        if not parent:
            return []
        if parent != self._parent:
            self._options = []
            self._parent = None
            self._options = self._loader(parent)
            self._parent = parent
        return list(self._options)
