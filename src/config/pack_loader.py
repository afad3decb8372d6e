"""
Loading of pack documents.

A pack document declares the pack identity, the process environment
variables it needs and the commands it exposes. It can be written as YAML
or JSON. Every failure here is a configuration error: nothing is compiled
until the document parses, validates and all declared environment
variables are present.
"""

import json
import logging
import os
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

import httpx
import yaml
from pydantic import ValidationError

from src.commands.errors import ConfigurationError
from src.commands.registry.command_registry import CommandRegistry
from src.config.constants import DEFAULT_REQUEST_TIMEOUT_SECONDS
from src.models.pack import PackConfig

logger = logging.getLogger(__name__)


def load_pack_config(path: str | Path) -> PackConfig:
    """
    Read and validate a pack document.

    Args:
        path: Path to a .json, .yaml or .yml file

    Returns:
        Validated PackConfig

    Raises:
        ConfigurationError: If the file cannot be read, parsed or validated
    """
    file_path = Path(path)

    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"could not read file {file_path}, err: {e}") from e

    try:
        data = _parse_document(file_path, text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f"could not unmarshal file {file_path}, err: {e}"
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"pack document {file_path} must contain an object")

    try:
        pack = PackConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"invalid pack document {file_path}: {e}") from e

    logger.info(
        f"Loaded pack '{pack.name}' with {len(pack.commands)} commands from {file_path}"
    )
    return pack


def _parse_document(file_path: Path, text: str) -> Any:
    if file_path.suffix.lower() == ".json":
        return json.loads(text)
    # YAML is a superset of JSON, so any other suffix goes through the YAML parser
    return yaml.safe_load(text)


def resolve_environment(
    pack: PackConfig, environ: Optional[Mapping[str, str]] = None
) -> Mapping[str, str]:
    """
    Look up every environment variable the pack declares.

    Args:
        pack: Parsed pack document
        environ: Process environment, defaults to os.environ

    Returns:
        Read-only mapping of substitution key to value

    Raises:
        ConfigurationError: If a declared variable is not set
    """
    if environ is None:
        environ = os.environ

    values = {}
    for variable, substitution_key in pack.envs.items():
        if variable not in environ:
            raise ConfigurationError(f"{variable} environment variable is not set")
        values[substitution_key] = environ[variable]

    logger.debug(f"Resolved {len(values)} environment values for pack '{pack.name}'")
    return MappingProxyType(values)


def load_pack(
    path: str | Path,
    environ: Optional[Mapping[str, str]] = None,
    client: Optional[httpx.AsyncClient] = None,
    timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
) -> CommandRegistry:
    """
    Load a pack document and compile all of its commands.

    Raises:
        ConfigurationError: On any document, environment or command error
    """
    pack = load_pack_config(path)
    environment = resolve_environment(pack, environ)
    return CommandRegistry(pack, environment, client, timeout_seconds)
