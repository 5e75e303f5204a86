"""
Configuration management for dblp-search.

This module provides the client configuration model and utilities for
loading it from YAML files (with environment variable expansion) or from
plain dictionaries.
"""

import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from dblp_search.core.models import RecordKind
from dblp_search.utils.exceptions import ConfigurationError

PUBLICATION_API_ENDPOINT = "https://dblp.org/search/publ/api"
AUTHOR_API_ENDPOINT = "https://dblp.org/search/author/api"
VENUE_API_ENDPOINT = "https://dblp.org/search/venue/api"


class ClientConfig(BaseModel):
    """Configuration for the dblp client."""

    publication_endpoint: str = Field(
        default=PUBLICATION_API_ENDPOINT, description="Publication search endpoint"
    )
    author_endpoint: str = Field(default=AUTHOR_API_ENDPOINT, description="Author search endpoint")
    venue_endpoint: str = Field(default=VENUE_API_ENDPOINT, description="Venue search endpoint")

    rate_limit: float = Field(default=1.0, gt=0, le=100, description="Requests per second")
    timeout: int = Field(default=30, gt=0, le=300, description="Request timeout in seconds")
    mailto: Optional[str] = Field(default=None, description="Contact address sent in User-Agent")

    max_results: Optional[int] = Field(
        default=None, ge=1, le=1000, description="Default number of hits per search"
    )
    strict: bool = Field(
        default=True, description="Fail on the first malformed hit instead of skipping it"
    )

    model_config = ConfigDict(
        extra="forbid",
        str_strip_whitespace=True,
        validate_assignment=True,
    )

    @field_validator("publication_endpoint", "author_endpoint", "venue_endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Endpoints must be absolute HTTP(S) URLs."""
        if not re.match(r"^https?://", v):
            raise ValueError(f"endpoint must be an http(s) URL, got '{v}'")
        return v.rstrip("/")

    def endpoint_for(self, kind: RecordKind) -> str:
        """Get the endpoint URL serving ``kind`` records."""
        return {
            RecordKind.PUBLICATION: self.publication_endpoint,
            RecordKind.AUTHOR: self.author_endpoint,
            RecordKind.VENUE: self.venue_endpoint,
        }[RecordKind(kind)]


def load_config(config_path: Path) -> ClientConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated ClientConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigurationError: If the file is not valid YAML or the values are invalid

    Example:
        >>> config = load_config(Path("dblp.yml"))
        >>> config.rate_limit
        1.0
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(raw_config, dict):
        raise ConfigurationError(f"Configuration in {config_path} must be a mapping")

    return load_config_from_dict(raw_config)


def load_config_from_dict(config_dict: Dict[str, Any]) -> ClientConfig:
    """Load configuration from a dictionary.

    Args:
        config_dict: Configuration dictionary

    Returns:
        Validated ClientConfig instance

    Raises:
        ConfigurationError: If the values are invalid
    """
    expanded_config = _expand_env_vars(config_dict)

    try:
        return ClientConfig(**expanded_config)
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first.get("loc", ()))
        raise ConfigurationError(f"Invalid configuration: {e}", config_key=key or None) from e


def save_config(config: ClientConfig, output_path: Path) -> None:
    """Save configuration to a YAML file.

    Args:
        config: ClientConfig instance to save
        output_path: Path to save the configuration
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        yaml.dump(
            config.model_dump(exclude_none=True),
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )


def _expand_env_vars(config: Any) -> Any:
    """Recursively expand environment variables in config.

    Supports ${VAR_NAME} and ${VAR_NAME:-default} syntax. Unknown variables
    without a default are left as written.
    """
    if isinstance(config, dict):
        return {k: _expand_env_vars(v) for k, v in config.items()}
    elif isinstance(config, list):
        return [_expand_env_vars(item) for item in config]
    elif isinstance(config, str):

        def replace_env_var(match: Any) -> str:
            var_expr = match.group(1)

            if ":-" in var_expr:
                var_name, default = var_expr.split(":-", 1)
                return str(os.getenv(var_name.strip(), default.strip()))

            value = os.getenv(var_expr.strip())
            if value is None:
                return str(match.group(0))
            return str(value)

        return re.sub(r"\$\{([^}]+)\}", replace_env_var, config)
    else:
        return config
