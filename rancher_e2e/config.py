# /*
# Copyright 2026 The Rancher E2E Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# */

"""Configuration classes and test config file loading."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_snake
from pydantic_settings import (
    BaseSettings,
    InitSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from rancher_e2e.constants import (
    CONFIG_FILE_ENV,
    DEFAULT_WATCH_TIMEOUT_SECONDS,
    RANCHER_CONFIG_KEY,
)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ConfigError(RuntimeError):
    """Raised when the test config file cannot be located or parsed."""


# ============================================================================
# Config file
# ============================================================================

def config_file_path() -> Path:
    """Resolve the test config file from the CATTLE_TEST_CONFIG env var.

    Returns:
        Path to the config file.

    Raises:
        ConfigError: If the variable is unset or the file does not exist.
    """
    value = os.environ.get(CONFIG_FILE_ENV)
    if not value:
        raise ConfigError(f"{CONFIG_FILE_ENV} is not set")
    path = Path(value).expanduser()
    if not path.is_file():
        raise ConfigError(f"Config file {path} does not exist")
    return path


def load_config_section(key: str) -> dict[str, Any]:
    """Read one top-level section of the test config file.

    Args:
        key: Top-level key of the section.

    Returns:
        The section as a dictionary, or an empty dictionary if absent.

    Raises:
        ConfigError: If the file cannot be found or does not hold a mapping.
    """
    path = config_file_path()
    try:
        with open(path) as f:
            content = yaml.safe_load(f) or {}
    except yaml.YAMLError as err:
        raise ConfigError(f"Failed to parse {path}: {err}") from err
    if not isinstance(content, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    section = content.get(key) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Config section '{key}' in {path} must be a mapping")
    return section


def load_config(key: str, model: type[ModelT]) -> ModelT:
    """Load and validate a config file section into a pydantic model.

    Args:
        key: Top-level key of the section.
        model: Pydantic model class describing the section.

    Returns:
        Validated model instance; model defaults when the section is absent.
    """
    return model.model_validate(load_config_section(key))


# ============================================================================
# Rancher configuration
# ============================================================================

class _RancherFileSettingsSource(InitSettingsSource):
    """Settings source backed by the ``rancher`` section of the config file."""

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        section: dict[str, Any] = {}
        if os.environ.get(CONFIG_FILE_ENV):
            section = {to_snake(k): v for k, v in load_config_section(RANCHER_CONFIG_KEY).items()}
        super().__init__(settings_cls, init_kwargs=section)


class RancherConfig(BaseSettings):
    """Rancher server configuration, loaded from RANCHER_* env vars and the config file.

    Attributes:
        host: Rancher server hostname, without scheme.
        admin_token: Bearer token of an admin user.
        insecure: Skip TLS verification against the Rancher server.
        cleanup: Whether session cleanups run at teardown.
        cluster_name: Default downstream cluster name for tests.
        watch_timeout_seconds: Server-side timeout applied to every watch request.
    """

    model_config = SettingsConfigDict(env_prefix="RANCHER_", extra="ignore")

    host: str = ""
    admin_token: str = ""
    insecure: bool = True
    cleanup: bool = True
    cluster_name: str = ""
    watch_timeout_seconds: int = Field(default=DEFAULT_WATCH_TIMEOUT_SECONDS, ge=1)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, env_settings, _RancherFileSettingsSource(settings_cls)

    @property
    def url(self) -> str:
        """Base URL of the Rancher server."""
        return f"https://{self.host}"
