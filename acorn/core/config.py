# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Configuration loading with Pydantic validation and env var substitution."""

import os
import re
from pathlib import Path
from typing import Callable, Literal, Optional

import yaml
from pydantic import BaseModel, Field

# (operation kind, field name) -> include?
OperationFilter = Callable[[str, str], bool]


def accept_all(_operation: str, _name: str) -> bool:
    """Default operation filter: every root field becomes a function."""
    return True


def ignore_prefix(*prefixes: str) -> OperationFilter:
    """
    Build an operation filter that rejects names starting with any prefix.

    Matching is case-insensitive and ignores surrounding whitespace.

    Args:
        prefixes: Field name prefixes to skip (e.g., "internal")

    Returns:
        Predicate taking (operation kind, field name)
    """
    prefixes_lower = [prefix.strip().lower() for prefix in prefixes]

    def _filter(_operation: str, name: str) -> bool:
        name_lower = name.strip().lower()
        return not any(name_lower.startswith(prefix) for prefix in prefixes_lower)

    return _filter


class ConverterConfig(BaseModel):
    """Settings for schema traversal."""
    max_depth: int = Field(default=3, ge=1)  # Max nested object selections
    ignore_prefixes: list[str] = Field(default_factory=list)

    def operation_filter(self) -> OperationFilter:
        """Get the operation filter implied by this config."""
        if not self.ignore_prefixes:
            return accept_all
        return ignore_prefix(*self.ignore_prefixes)


class APIConfig(BaseModel):
    """GraphQL endpoint configuration."""
    url: str
    description: str = ""
    headers: dict[str, str] = Field(default_factory=dict)

    # Authentication
    auth_type: Literal["none", "bearer", "basic", "api_key"] = "none"
    auth_token: Optional[str] = None
    auth_username: Optional[str] = None
    auth_password: Optional[str] = None
    api_key: Optional[str] = None
    api_key_header: str = "X-API-Key"

    timeout_seconds: float = 30.0


class Config(BaseModel):
    """Root configuration model."""
    model_config = {"extra": "ignore"}

    converter: ConverterConfig = Field(default_factory=ConverterConfig)
    apis: dict[str, APIConfig] = Field(default_factory=dict)

    # Parameter names hidden from the model and injected from session context
    context_keys: list[str] = Field(default_factory=list)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """
        Load config from YAML file with env var substitution.

        Args:
            path: Path to the config YAML file

        Returns:
            Validated Config object
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            raw_content = f.read()

        # Substitute environment variables: ${VAR_NAME}
        substituted = _substitute_env_vars(raw_content)

        data = yaml.safe_load(substituted) or {}
        return cls.model_validate(data)

    def get_api_config(self, name: str) -> Optional[APIConfig]:
        """Get API config by name."""
        return self.apis.get(name)


def _substitute_env_vars(content: str) -> str:
    """Replace ${VAR_NAME} with environment variable values."""
    pattern = re.compile(r'\$\{([^}]+)\}')

    def replacer(match: re.Match) -> str:
        var_name = match.group(1)
        value = os.environ.get(var_name)
        if value is None:
            raise ValueError(f"Environment variable not set: {var_name}")
        return value

    return pattern.sub(replacer, content)
