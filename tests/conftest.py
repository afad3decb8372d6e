import json
from typing import Any, Callable, Dict, List

import httpx
import pytest

from src.models.pack import CommandConfig, PackConfig


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it receives"""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: List[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture
def environment() -> Dict[str, str]:
    """Resolved environment values keyed by substitution key"""
    return {
        "{api_host}": "http://api",
        "{api_key}": "secret-key",
        "{api_user}": "pack-user",
        "{api_pass}": "pack-pass",
    }


@pytest.fixture
def pack_document() -> Dict[str, Any]:
    """Raw pack document as it appears in a config file"""
    return {
        "id": "weather-pack",
        "name": "Weather",
        "envs": {
            "WEATHER_API_HOST": "{api_host}",
            "WEATHER_API_KEY": "{api_key}",
        },
        "commands": [
            {
                "name": "GetWeather",
                "input": {"city": "{location}"},
                "request": {
                    "type": "GET",
                    "path": "{api_host}/weather?q={location}",
                    "headers": {"Accept": "application/json"},
                },
            },
            {
                "name": "ReportTemperature",
                "input": {"city": "{location}", "temperature": "{temp}"},
                "request": {
                    "type": "post",
                    "path": "{api_host}/reports",
                    "data": '{"location": "{location}", "temp": {temp}}',
                    "headers": {"Content-Type": "application/json"},
                    "auth": {"user": "{api_user}", "pass": "{api_pass}"},
                },
            },
        ],
    }


@pytest.fixture
def pack_config(pack_document: Dict[str, Any]) -> PackConfig:
    return PackConfig.model_validate(pack_document)


@pytest.fixture
def make_command_config() -> Callable[..., CommandConfig]:
    """Build a CommandConfig from wire-format request fields"""

    def _make(
        name: str = "GetWeather",
        input_mapping: Dict[str, str] | None = None,
        **request: Any,
    ) -> CommandConfig:
        request.setdefault("type", "GET")
        request.setdefault("path", "http://api/weather?q={location}")
        return CommandConfig.model_validate(
            {
                "name": name,
                "input": input_mapping
                if input_mapping is not None
                else {"city": "{location}"},
                "request": request,
            }
        )

    return _make


@pytest.fixture
def json_response() -> Callable[..., Callable[[httpx.Request], httpx.Response]]:
    """Handler factory returning a fixed JSON response"""

    def _make(status_code: int = 200, body: Any = None):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, content=json.dumps(body).encode())

        return handler

    return _make
