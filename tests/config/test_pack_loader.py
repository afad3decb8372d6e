import json
from pathlib import Path
from typing import Any, Dict

import pytest
import yaml

from src.commands.errors import ConfigurationError
from src.config.pack_loader import load_pack, load_pack_config, resolve_environment
from src.models.pack import PackConfig


@pytest.fixture
def process_environ() -> Dict[str, str]:
    return {
        "WEATHER_API_HOST": "http://api",
        "WEATHER_API_KEY": "secret-key",
        "UNRELATED": "ignored",
    }


class TestLoadPackConfig:
    """Test reading pack documents from disk"""

    def test_load_yaml(self, tmp_path: Path, pack_document: Dict[str, Any]) -> None:
        path = tmp_path / "pack.yaml"
        path.write_text(yaml.safe_dump(pack_document), encoding="utf-8")

        pack = load_pack_config(path)

        assert pack.name == "Weather"
        assert [command.name for command in pack.commands] == [
            "GetWeather",
            "ReportTemperature",
        ]

    def test_load_json(self, tmp_path: Path, pack_document: Dict[str, Any]) -> None:
        path = tmp_path / "pack.json"
        path.write_text(json.dumps(pack_document), encoding="utf-8")

        pack = load_pack_config(str(path))

        assert pack.envs == {
            "WEATHER_API_HOST": "{api_host}",
            "WEATHER_API_KEY": "{api_key}",
        }

    def test_example_pack_document_loads(self) -> None:
        path = Path(__file__).parents[2] / "config" / "pack.example.yaml"

        pack = load_pack_config(path)

        assert pack.id == "weather-pack"
        assert pack.commands[1].request.auth is not None

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="could not read file"):
            load_pack_config(tmp_path / "missing.yaml")

    def test_malformed_json(self, tmp_path: Path) -> None:
        path = tmp_path / "pack.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="could not unmarshal file"):
            load_pack_config(path)

    def test_document_must_be_an_object(self, tmp_path: Path) -> None:
        path = tmp_path / "pack.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="must contain an object"):
            load_pack_config(path)

    def test_invalid_document(self, tmp_path: Path) -> None:
        path = tmp_path / "pack.yaml"
        path.write_text("name: Broken\ncommands:\n  - name: NoRequest\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="invalid pack document"):
            load_pack_config(path)


class TestResolveEnvironment:
    """Test lookup of declared environment variables"""

    def test_values_keyed_by_substitution_key(
        self, pack_config: PackConfig, process_environ: Dict[str, str]
    ) -> None:
        environment = resolve_environment(pack_config, process_environ)

        assert dict(environment) == {
            "{api_host}": "http://api",
            "{api_key}": "secret-key",
        }

    def test_environment_is_read_only(
        self, pack_config: PackConfig, process_environ: Dict[str, str]
    ) -> None:
        environment = resolve_environment(pack_config, process_environ)

        with pytest.raises(TypeError):
            environment["{api_host}"] = "changed"  # type: ignore[index]

    def test_missing_variable(
        self, pack_config: PackConfig, process_environ: Dict[str, str]
    ) -> None:
        del process_environ["WEATHER_API_KEY"]

        with pytest.raises(
            ConfigurationError, match="WEATHER_API_KEY environment variable is not set"
        ):
            resolve_environment(pack_config, process_environ)

    def test_empty_value_counts_as_set(
        self, pack_config: PackConfig, process_environ: Dict[str, str]
    ) -> None:
        process_environ["WEATHER_API_KEY"] = ""

        assert resolve_environment(pack_config, process_environ)["{api_key}"] == ""

    def test_defaults_to_process_environment(
        self, pack_config: PackConfig, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("WEATHER_API_HOST", "http://from-env")
        monkeypatch.setenv("WEATHER_API_KEY", "env-key")

        environment = resolve_environment(pack_config)

        assert environment["{api_host}"] == "http://from-env"


class TestLoadPack:
    """Test the full load and compile step"""

    def test_load_pack_compiles_commands(
        self,
        tmp_path: Path,
        pack_document: Dict[str, Any],
        process_environ: Dict[str, str],
    ) -> None:
        path = tmp_path / "pack.yaml"
        path.write_text(yaml.safe_dump(pack_document), encoding="utf-8")

        registry = load_pack(path, process_environ)

        assert registry.get_available_commands() == ["GetWeather", "ReportTemperature"]

    def test_missing_environment_stops_before_compilation(
        self, tmp_path: Path, pack_document: Dict[str, Any]
    ) -> None:
        pack_document["commands"][0]["request"]["type"] = "UNKNOWN"
        path = tmp_path / "pack.yaml"
        path.write_text(yaml.safe_dump(pack_document), encoding="utf-8")

        with pytest.raises(ConfigurationError, match="environment variable is not set"):
            load_pack(path, {})
