# MIT License
#
# Copyright (c) 2025 Democratize Technology
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""Settings loader.

Builds ``InjectionSettings`` from, in increasing precedence:
- the schema defaults
- an optional JSON or YAML settings file
- ``CONFIG_INJECTION_*`` environment variables
"""

from collections.abc import Mapping
import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError
import yaml

from ..exceptions import ConfigurationError
from .defaults import DEFAULT_SETTINGS, ENV_VAR_MAPPING, ENV_VAR_TYPES, TRUE_VALUES
from .schema import InjectionSettings

logger = logging.getLogger(__name__)


class SettingsLoader:
    """Load engine settings from a file and the environment.

    Args:
        environ: Environment mapping (``os.environ`` if None)
        config_path: Optional ``.json``, ``.yaml`` or ``.yml`` settings file
    """

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        config_path: str | Path | None = None,
    ) -> None:
        self.environ = os.environ if environ is None else environ
        self.config_path = Path(config_path) if config_path is not None else None
        self.loaded_from_env = False
        self.loaded_from_file = False

    def load(self) -> InjectionSettings:
        """Merge all sources and validate the result.

        Raises:
            ConfigurationError: If the merged settings are invalid or the
                settings file cannot be read
        """
        settings_data = DEFAULT_SETTINGS.model_dump()

        if self.config_path is not None:
            settings_data.update(self._load_from_file(self.config_path))

        settings_data.update(self._load_from_environment())

        try:
            settings = InjectionSettings(**settings_data)
        except ValidationError as e:
            logger.exception("Settings validation failed")
            raise ConfigurationError(
                f"Invalid injection settings: {e}",
                "Injection settings are invalid",
                context={"errors": e.errors()},
                recovery_suggestion="Check CONFIG_INJECTION_* variables and the settings file",
            ) from e

        logger.info(
            "Injection settings loaded (file=%s, env=%s)",
            self.loaded_from_file,
            self.loaded_from_env,
        )
        return settings

    def _load_from_file(self, path: Path) -> dict[str, Any]:
        try:
            with path.open() as f:
                if path.suffix in (".yaml", ".yml"):
                    file_settings = yaml.safe_load(f)
                else:
                    file_settings = json.load(f)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Failed to load settings from {path}: {e}",
                "Settings file could not be read",
                context={"path": str(path)},
            ) from e

        if not file_settings:
            return {}
        if not isinstance(file_settings, dict):
            raise ConfigurationError(
                f"Settings file {path} must contain a mapping",
                "Settings file has an unexpected structure",
                context={"path": str(path)},
            )

        self.loaded_from_file = True
        logger.info("Loaded injection settings from %s", path)
        return file_settings

    def _load_from_environment(self) -> dict[str, Any]:
        found: dict[str, Any] = {}

        for env_var, field_name in ENV_VAR_MAPPING.items():
            env_value = self.environ.get(env_var)
            if env_value is None:
                continue
            var_type = ENV_VAR_TYPES.get(env_var, str)
            try:
                if var_type is bool:
                    found[field_name] = env_value.strip().lower() in TRUE_VALUES
                else:
                    found[field_name] = var_type(env_value)
            except (ValueError, TypeError) as e:
                logger.warning("Invalid value for %s='%s': %s", env_var, env_value, e)

        if found:
            self.loaded_from_env = True
            logger.info("Loaded %d injection settings from environment variables", len(found))
        return found

    def get_env_var_help(self) -> dict[str, str]:
        """Help text for all supported environment variables."""
        return {
            env_var: f"Type: {ENV_VAR_TYPES.get(env_var, str).__name__}, Setting: {field_name}"
            for env_var, field_name in ENV_VAR_MAPPING.items()
        }


def load_settings(
    environ: Mapping[str, str] | None = None,
    config_path: str | Path | None = None,
) -> InjectionSettings:
    """Shortcut for ``SettingsLoader(environ, config_path).load()``."""
    return SettingsLoader(environ, config_path).load()
