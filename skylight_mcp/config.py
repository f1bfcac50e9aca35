"""Environment-sourced configuration for the Skylight MCP server."""

import os
import re
from enum import Enum
from typing import Dict, List, Literal, Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import ConfigurationError

DEFAULT_TIMEZONE = "America/New_York"
AUTH_REQUIRED = "Either SKYLIGHT_EMAIL and SKYLIGHT_PASSWORD, or SKYLIGHT_TOKEN must be provided"
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# Settings field -> environment variable
ENV_VARS: Dict[str, str] = {
    "email": "SKYLIGHT_EMAIL",
    "password": "SKYLIGHT_PASSWORD",
    "token": "SKYLIGHT_TOKEN",
    "auth_type": "SKYLIGHT_AUTH_TYPE",
    "frame_id": "SKYLIGHT_FRAME_ID",
    "timezone": "SKYLIGHT_TIMEZONE",
    "log_level": "SKYLIGHT_LOG_LEVEL",
}

CONFIG_HELP = """
Authentication (choose one):
  Option 1 - Email/Password (recommended):
    SKYLIGHT_EMAIL     - Your Skylight account email
    SKYLIGHT_PASSWORD  - Your Skylight account password

  Option 2 - Manual Token:
    SKYLIGHT_TOKEN     - Your Skylight API token
    SKYLIGHT_AUTH_TYPE - 'bearer' or 'basic' (default: bearer)

Required:
  SKYLIGHT_FRAME_ID - Your frame/household ID

Optional:
  SKYLIGHT_TIMEZONE  - Timezone for dates (default: America/New_York)
  SKYLIGHT_LOG_LEVEL - Log level for stderr output (default: INFO)

To find your frame ID:
1. Log in to the Skylight app
2. Use a proxy tool to capture API traffic
3. Look for the frame ID in URLs like /api/frames/{frameId}/chores
"""


def _has_credentials(
    email: Optional[str], password: Optional[str], token: Optional[str]
) -> bool:
    return bool((email and password) or token)


class AuthMode(str, Enum):
    LOGIN = "login"
    TOKEN = "token"


class Settings(BaseModel):
    """Household context. Immutable for the lifetime of the process."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    email: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=1)
    token: Optional[str] = Field(default=None, min_length=1)
    auth_type: Literal["bearer", "basic"] = "bearer"
    frame_id: str = Field(..., min_length=1)
    timezone: str = DEFAULT_TIMEZONE
    log_level: str = "INFO"

    # secrets are kept verbatim
    @field_validator("email", "frame_id", "timezone", "log_level", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("email")
    @classmethod
    def _looks_like_email(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not EMAIL_RE.match(value):
            raise ValueError("must be a valid email address")
        return value

    @field_validator("auth_type", mode="before")
    @classmethod
    def _lower_auth_type(cls, value: object) -> object:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone '{value}'")
        return value

    @model_validator(mode="after")
    def _one_auth_mode(self) -> "Settings":
        if not _has_credentials(self.email, self.password, self.token):
            raise ValueError(AUTH_REQUIRED)
        return self

    @property
    def auth_mode(self) -> AuthMode:
        if self.email and self.password:
            return AuthMode.LOGIN
        return AuthMode.TOKEN

    @property
    def uses_login(self) -> bool:
        return self.auth_mode is AuthMode.LOGIN


def _describe(error: dict) -> str:
    loc = error.get("loc") or ()
    field = loc[0] if loc else None
    message = error.get("msg", "invalid value")
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    if field is None:
        return message
    env_name = ENV_VARS.get(str(field), str(field))
    if error.get("type") == "missing":
        return f"{env_name} is required"
    return f"{env_name}: {message}"


def format_config_errors(errors: List[str]) -> str:
    bullets = "\n".join(f"  - {line}" for line in errors)
    return (
        "Skylight MCP Server - Configuration Error\n\n"
        f"Missing or invalid configuration:\n{bullets}\n{CONFIG_HELP}"
    )


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment.

    Empty variables are treated as unset. Every problem is reported at once
    in a single ConfigurationError.
    """
    env = os.environ if environ is None else environ
    raw = {}
    for field, env_name in ENV_VARS.items():
        value = env.get(env_name)
        if value is not None and value.strip():
            raw[field] = value
    try:
        return Settings(**raw)
    except ValidationError as e:
        problems = [_describe(err) for err in e.errors()]
        # the model-level check is skipped by pydantic when a field already failed
        has_creds = _has_credentials(raw.get("email"), raw.get("password"), raw.get("token"))
        if not has_creds and AUTH_REQUIRED not in problems:
            problems.insert(0, AUTH_REQUIRED)
        raise ConfigurationError(format_config_errors(problems)) from e
