from abc import ABC, abstractmethod
from typing import List

from src.models.events import EventDefinition, OutcomeEvent


class Invocable(ABC):
    """
    Capability handed to the host runtime for each command.

    An invocable accepts the raw invocation payload and always returns
    exactly one OutcomeEvent. Implementations must not raise for decode,
    transport or application errors; those become failure events.
    """

    @abstractmethod
    def get_command_name(self) -> str:
        """Return the command name the host runtime subscribes to"""
        pass

    @abstractmethod
    def get_output_events(self) -> List[EventDefinition]:
        """
        Return the events this command can emit.

        The list is fixed when the command is created and never changes
        between invocations.
        """
        pass

    @abstractmethod
    async def invoke(self, raw_input: bytes) -> OutcomeEvent:
        """
        Handle one invocation.

        Args:
            raw_input: JSON payload keyed by logical input name

        Returns:
            The success or failure event for this invocation
        """
        pass

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.get_command_name()}')"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"name='{self.get_command_name()}', "
            f"events={[event.name for event in self.get_output_events()]}"
            f")"
        )
