import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from src.commands.errors import ConfigurationError
from src.commands.interfaces.invocable import Invocable
from src.commands.template_resolver import resolve
from src.config.constants import (
    BODY_METHODS,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    FAILURE_EVENT_SUFFIX,
    SUCCESS_EVENT_SUFFIX,
    SUPPORTED_METHODS,
)
from src.models.events import EventDefinition, JSONValue, OutcomeEvent
from src.models.pack import CommandConfig

logger = logging.getLogger(__name__)

# Invocation payloads are flat objects of string values
_INPUT_ADAPTER = TypeAdapter(Dict[str, str])


class HttpCommand(Invocable):
    """
    A command compiled from its pack definition.

    Each invocation decodes the input payload, substitutes the resolved
    inputs and environment values into the request templates, sends one
    HTTP request and maps the outcome to the success or failure event.
    Nothing is shared between invocations apart from the read-only
    definition, environment values and event definitions.
    """

    def __init__(
        self,
        config: CommandConfig,
        environment: Mapping[str, str],
        client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
    ):
        """
        Args:
            config: Parsed command definition
            environment: Substitution key to value, resolved at startup
            client: Shared HTTP client. When omitted a client is opened
                per invocation.
            timeout_seconds: Request deadline for per-invocation clients
        """
        self._config = config
        self._environment = MappingProxyType(dict(environment))
        self._method = config.request.method.upper()
        self._client = client
        self._timeout_seconds = timeout_seconds

        self.success_event = EventDefinition(
            name=f"{config.name}{SUCCESS_EVENT_SUFFIX}"
        )
        self.failure_event = EventDefinition(
            name=f"{config.name}{FAILURE_EVENT_SUFFIX}"
        )

    @property
    def config(self) -> CommandConfig:
        return self._config

    @property
    def method(self) -> str:
        return self._method

    def get_command_name(self) -> str:
        return self._config.name

    def get_output_events(self) -> List[EventDefinition]:
        return [self.success_event, self.failure_event]

    def get_input_names(self) -> List[str]:
        return list(self._config.input_mapping.keys())

    def resolve_inputs(self, inputs: Mapping[str, str]) -> Dict[str, str]:
        """Key the decoded inputs by wire field name. Missing inputs become ''."""
        return {
            wire_name: inputs.get(logical_name, "")
            for logical_name, wire_name in self._config.input_mapping.items()
        }

    async def invoke(self, raw_input: bytes) -> OutcomeEvent:
        try:
            inputs = _INPUT_ADAPTER.validate_json(raw_input)
        except ValidationError as e:
            return self._failure(f"could not decode input: {e}")

        resolved_inputs = self.resolve_inputs(inputs)
        substitutions = [resolved_inputs, self._environment]
        request = self._config.request

        path = resolve(request.path_template, substitutions)
        content: Optional[bytes] = None
        if self._method in BODY_METHODS:
            content = resolve(request.data_template, substitutions).encode("utf-8")

        auth: Optional[httpx.BasicAuth] = None
        if request.auth is not None:
            user = resolve(request.auth.user, [self._environment])
            password = resolve(request.auth.password, [self._environment])
            if user and password:
                auth = httpx.BasicAuth(user, password)

        logger.debug(
            f"Command '{self._config.name}' sending {self._method} request "
            f"(body: {content is not None}, auth: {auth is not None})"
        )

        try:
            response = await self._send(path, content, auth)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return self._failure(f"{type(e).__name__}: {e}", exc_info=True)

        if not 200 <= response.status_code < 400:
            return self._failure(
                f"bad response: code: {response.status_code}, "
                f"body: {_describe_body(response)}"
            )

        try:
            payload: JSONValue = response.json()
        except ValueError as e:
            return self._failure(f"could not decode response body: {e}")

        logger.info(
            f"Command '{self._config.name}' succeeded with status {response.status_code}"
        )
        return OutcomeEvent.success(self.success_event, payload)

    async def _send(
        self,
        url: str,
        content: Optional[bytes],
        auth: Optional[httpx.BasicAuth],
    ) -> httpx.Response:
        if self._client is not None:
            return await self._dispatch(self._client, url, content, auth)

        async with httpx.AsyncClient(timeout=self._timeout_seconds) as client:
            return await self._dispatch(client, url, content, auth)

    async def _dispatch(
        self,
        client: httpx.AsyncClient,
        url: str,
        content: Optional[bytes],
        auth: Optional[httpx.BasicAuth],
    ) -> httpx.Response:
        outbound = client.build_request(
            self._method,
            url,
            content=content,
            headers=dict(self._config.request.headers),
        )
        if auth is None:
            return await client.send(outbound)
        return await client.send(outbound, auth=auth)

    def _failure(self, description: str, exc_info: bool = False) -> OutcomeEvent:
        logger.error(
            f"Command '{self._config.name}' failed: {description}", exc_info=exc_info
        )
        return OutcomeEvent.failure(self.failure_event, description)


def _describe_body(response: httpx.Response) -> JSONValue:
    """Decoded JSON body when possible, raw text otherwise"""
    try:
        return response.json()
    except ValueError:
        return response.text


def compile_command(
    config: CommandConfig,
    environment: Mapping[str, str],
    client: Optional[httpx.AsyncClient] = None,
    timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
) -> HttpCommand:
    """
    Turn a command definition into a runnable command.

    Raises:
        ConfigurationError: If the request method is not a supported HTTP method
            or a header name or value cannot be sent as ASCII
    """
    method = config.request.method.upper()
    if method not in SUPPORTED_METHODS:
        raise ConfigurationError(f"unknown request type '{config.request.method}'")

    for header_name, header_value in config.request.headers.items():
        try:
            header_name.encode("ascii")
            header_value.encode("ascii")
        except UnicodeEncodeError as e:
            raise ConfigurationError(
                f"header '{header_name}' must be ASCII: {e}"
            ) from e

    command = HttpCommand(config, environment, client, timeout_seconds)
    logger.info(
        f"Compiled command '{config.name}' ({method}) with events "
        f"{[event.name for event in command.get_output_events()]}"
    )
    return command
