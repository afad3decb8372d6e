from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Union

# Decoded response payloads are always one of these shapes
JSONValue = Union[Dict[str, Any], List[Any], str, int, float, bool, None]


class EventKind(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class EventDefinition:
    """Name of an event a command can emit"""

    name: str


@dataclass
class OutcomeEvent:
    """
    Result of a single command invocation.

    Exactly one OutcomeEvent is produced per invocation. The payload is the
    decoded response body for success events and an error description for
    failure events.
    """

    kind: EventKind
    name: str
    payload: JSONValue = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def success(cls, event: EventDefinition, payload: JSONValue) -> "OutcomeEvent":
        return cls(kind=EventKind.SUCCESS, name=event.name, payload=payload)

    @classmethod
    def failure(cls, event: EventDefinition, payload: JSONValue) -> "OutcomeEvent":
        return cls(kind=EventKind.FAILURE, name=event.name, payload=payload)

    def is_success(self) -> bool:
        return self.kind == EventKind.SUCCESS

    def is_failure(self) -> bool:
        return self.kind == EventKind.FAILURE

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the event for the host runtime"""
        return {
            "kind": self.kind.value,
            "name": self.name,
            "payload": self.payload,
            "timestamp": self.timestamp.isoformat(),
        }
