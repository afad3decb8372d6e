from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional
import logging

import httpx

from src.commands.errors import ConfigurationError
from src.commands.impl.http_command import HttpCommand, compile_command
from src.config.constants import DEFAULT_REQUEST_TIMEOUT_SECONDS
from src.models.events import EventDefinition, OutcomeEvent
from src.models.pack import PackConfig


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandDefinition:
    """What the host runtime needs to expose one command"""

    name: str
    input_names: List[str]
    output_events: List[EventDefinition]
    handler: Callable[[bytes], Awaitable[OutcomeEvent]]


@dataclass(frozen=True)
class PackDefinition:
    name: str
    commands: List[CommandDefinition] = field(default_factory=list)
    event_definitions: List[EventDefinition] = field(default_factory=list)


class CommandRegistry:
    """
    Compiles every command of a pack and keeps them by name.

    All commands are compiled when the registry is created, so a pack with
    an invalid command never produces any handler.

    Usage:
        registry = CommandRegistry(pack, environment, client)
        event = await registry.get_command("GetWeather").invoke(b'{"city": "London"}')
    """

    def __init__(
        self,
        pack: PackConfig,
        environment: Mapping[str, str],
        client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
    ):
        """
        Args:
            pack: Parsed pack document
            environment: Substitution key to value, resolved at startup
            client: Shared HTTP client passed to every command
            timeout_seconds: Request deadline when no client is shared
        """
        logger.info(f"Initializing CommandRegistry for pack '{pack.name}'")

        self._pack = pack
        self._commands: Dict[str, HttpCommand] = {}

        for command_config in pack.commands:
            if command_config.name in self._commands:
                raise ConfigurationError(
                    f"command '{command_config.name}' is declared more than once"
                )
            try:
                command = compile_command(
                    command_config, environment, client, timeout_seconds
                )
            except ConfigurationError as e:
                raise ConfigurationError(
                    f"could not create handler for command '{command_config.name}': {e}"
                ) from e
            self._commands[command_config.name] = command

        logger.info(
            f"Registered {len(self._commands)} commands: {list(self._commands.keys())}"
        )

    @property
    def pack_name(self) -> str:
        return self._pack.name

    def get_command(self, command_name: str) -> HttpCommand:
        """
        Get a compiled command by name.

        Raises:
            ValueError: If command_name is not registered
        """
        if command_name not in self._commands:
            available_commands = list(self._commands.keys())
            raise ValueError(
                f"Command '{command_name}' not found. Available commands: {available_commands}"
            )
        return self._commands[command_name]

    def get_available_commands(self) -> List[str]:
        return list(self._commands.keys())

    def get_event_definitions(self) -> List[EventDefinition]:
        """All events the pack can emit, in command declaration order"""
        events: List[EventDefinition] = []
        for command in self._commands.values():
            events.extend(command.get_output_events())
        return events

    def get_command_info(self, command_name: str) -> Dict[str, Any]:
        command = self.get_command(command_name)
        return {
            "name": command.get_command_name(),
            "method": command.method,
            "input_names": command.get_input_names(),
            "output_events": [event.name for event in command.get_output_events()],
        }

    def to_pack_definition(self) -> PackDefinition:
        """Describe the pack in the shape a host runtime registers"""
        return PackDefinition(
            name=self._pack.name,
            commands=[
                CommandDefinition(
                    name=command.get_command_name(),
                    input_names=command.get_input_names(),
                    output_events=command.get_output_events(),
                    handler=command.invoke,
                )
                for command in self._commands.values()
            ],
            event_definitions=self.get_event_definitions(),
        )
