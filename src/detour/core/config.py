"""
Configuration schema and loading for detour clients.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

import os
import re
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from detour.contracts import DEFAULT_MAX_REDIRECTS, DEFAULT_USER_AGENT
from detour.core.policies import (
    RedirectPolicy,
    allowed_domain_redirect_policy,
    allowed_host_redirect_policy,
    chain_redirect_policies,
    max_redirect_policy,
    no_redirect_policy,
    same_domain_redirect_policy,
    same_host_redirect_policy,
)

PolicyKind = Literal[
    "max_redirects",
    "disabled",
    "same_domain",
    "same_host",
    "allowed_hosts",
    "allowed_domains",
]


class RedirectPolicySettings(BaseModel):
    """One redirect policy.

    Example YAML:
        redirect_policies:
          - kind: max_redirects
            max_redirects: 5
          - kind: allowed_domains
            hosts: ["example.com", "example.org"]
    """

    model_config = {"frozen": True}

    kind: PolicyKind = Field(description="Which redirect policy to apply")
    max_redirects: int = Field(
        default=DEFAULT_MAX_REDIRECTS,
        ge=0,
        description="Hop limit (kind=max_redirects only)",
    )
    hosts: tuple[str, ...] = Field(
        default=(),
        description="Allow-list entries (kind=allowed_hosts or allowed_domains)",
    )

    @model_validator(mode="after")
    def validate_hosts_for_allow_lists(self) -> "RedirectPolicySettings":
        """Allow-list policies with no entries would reject every redirect."""
        if self.kind in ("allowed_hosts", "allowed_domains") and not self.hosts:
            raise ValueError(f"Redirect policy '{self.kind}' requires at least one host")
        return self


class ClientSettings(BaseModel):
    """HTTP client configuration."""

    model_config = {"frozen": True}

    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    base_url: str | None = Field(default=None, description="Base URL prepended to relative request paths")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User-Agent header value")
    headers: dict[str, str] = Field(default_factory=dict, description="Default headers for every request")
    redirect_policies: tuple[RedirectPolicySettings, ...] = Field(
        default=(RedirectPolicySettings(kind="max_redirects"),),
        description="Policies consulted before each redirect hop (all must allow)",
    )


class LoggingSettings(BaseModel):
    """Logging output configuration."""

    model_config = {"frozen": True}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    json_output: bool = Field(default=False, description="Emit JSON lines instead of console output")


class DetourSettings(BaseModel):
    """Top-level settings."""

    model_config = {"frozen": True}

    client: ClientSettings = Field(default_factory=ClientSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def build_redirect_policy(
    settings: RedirectPolicySettings | Sequence[RedirectPolicySettings],
) -> RedirectPolicy:
    """Construct the policy described by settings.

    Args:
        settings: A single policy, or several that must all allow a redirect

    Returns:
        The corresponding policy (a composite when given a sequence)
    """
    if not isinstance(settings, RedirectPolicySettings):
        return chain_redirect_policies(*(build_redirect_policy(s) for s in settings))

    match settings.kind:
        case "max_redirects":
            return max_redirect_policy(settings.max_redirects)
        case "disabled":
            return no_redirect_policy()
        case "same_domain":
            return same_domain_redirect_policy()
        case "same_host":
            return same_host_redirect_policy()
        case "allowed_hosts":
            return allowed_host_redirect_policy(*settings.hosts)
        case "allowed_domains":
            return allowed_domain_redirect_policy(*settings.hosts)

    raise ValueError(f"Unknown redirect policy kind: {settings.kind}")


_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")


def _expand_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """Recursively expand ${VAR} and ${VAR:-default} patterns in config values.

    Args:
        config: Configuration dict (may contain nested structures)

    Returns:
        New dict with environment variables expanded
    """
    def replacer(match: re.Match[str]) -> str:
        env_value = os.environ.get(match.group(1))
        if env_value is not None:
            return env_value
        if match.group(2) is not None:
            return match.group(2)
        # No env var and no default - keep original so validation reports it
        return match.group(0)

    def _expand_value(value: Any) -> Any:
        if isinstance(value, str):
            return _ENV_VAR_PATTERN.sub(replacer, value)
        elif isinstance(value, dict):
            return {k: _expand_value(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [_expand_value(item) for item in value]
        else:
            return value

    return {k: _expand_value(v) for k, v in config.items()}


def load_settings(config_path: Path) -> DetourSettings:
    """Load settings from YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (DETOUR_*) - highest priority
    2. Config file (settings.yaml)
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: DETOUR_CLIENT__TIMEOUT for nested keys.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated DetourSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="DETOUR",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; Pydantic expects lowercase
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}

    return DetourSettings(**_expand_env_vars(raw_config))
