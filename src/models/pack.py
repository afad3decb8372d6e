from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AuthConfig(BaseModel):
    """Basic auth credentials, usually environment substitution keys"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    user: str = Field(default="", description="Basic auth user name")
    password: str = Field(default="", alias="pass", description="Basic auth password")

    def enabled(self) -> bool:
        return self.user != "" and self.password != ""


class RequestConfig(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    method: str = Field(..., alias="type", description="HTTP method (e.g. 'POST')")
    path_template: str = Field(
        ..., alias="path", description="URL template with literal placeholders"
    )
    data_template: str = Field(
        default="",
        alias="data",
        description="Body template, only sent for methods that carry a body",
    )
    headers: Dict[str, str] = Field(
        default_factory=dict, description="Headers applied verbatim"
    )
    auth: Optional[AuthConfig] = None


class CommandConfig(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., min_length=1, description="Command name")
    input_mapping: Dict[str, str] = Field(
        default_factory=dict,
        alias="input",
        description="Logical input name to wire field name",
    )
    request: RequestConfig


class PackConfig(BaseModel):
    """Parsed pack document"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default="", description="Pack identifier")
    name: str = Field(..., min_length=1, description="Pack name")
    envs: Dict[str, str] = Field(
        default_factory=dict,
        description="Process environment variable name to substitution key",
    )
    commands: List[CommandConfig] = Field(default_factory=list)
