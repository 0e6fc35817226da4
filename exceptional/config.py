# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Exceptional contributors

"""Process-wide settings read when an error is captured."""

import logging
import os
import socket
from dataclasses import dataclass
from typing import Any, Mapping

logger = logging.getLogger(__name__)

APPLICATION_NAME_KEY = "EXCEPTIONAL_APPLICATION_NAME"
MACHINE_NAME_KEY = "EXCEPTIONAL_MACHINE_NAME"
ROLLUP_PER_SERVER_KEY = "EXCEPTIONAL_ROLLUP_PER_SERVER"

DEFAULT_APPLICATION_NAME = "Exceptional"

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


class ConfigProvider:
    """Settings lookup over a mapping of names to values.

    Values may be native (``True``, ``5``) or text as found in the
    environment (``"yes"``, ``"5"``). Unparseable text falls back to the
    caller's default.
    """

    def __init__(self, values: Mapping[str, Any] | None = None):
        self._values = values if values is not None else {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self._values.get(key)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            value_lower = value.strip().lower()
            if value_lower in _TRUE_VALUES:
                return True
            if value_lower in _FALSE_VALUES:
                return False
        return default

    def get_int(self, key: str, default: int = 0) -> int:
        value = self._values.get(key)
        if isinstance(value, bool) or value is None:
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            return default


class EnvConfigProvider(ConfigProvider):
    """Provider over the process environment, read at lookup time."""

    def __init__(self, environ: Mapping[str, str] | None = None):
        super().__init__(environ if environ is not None else os.environ)


@dataclass(frozen=True)
class ErrorSettings:
    """Settings stamped onto every captured error.

    Attributes:
        application_name: Name of the reporting application
        machine_name: Host name of the reporting process
        rollup_per_server: Mix the machine name into fingerprints so that
            identical errors on different hosts are kept apart
    """

    application_name: str
    machine_name: str
    rollup_per_server: bool = False


def load_settings(provider: ConfigProvider | None = None) -> ErrorSettings:
    """Resolve error settings from a configuration provider.

    Args:
        provider: Source of configuration values. Defaults to the environment.

    Returns:
        Resolved ErrorSettings
    """
    provider = provider or EnvConfigProvider()
    settings = ErrorSettings(
        application_name=provider.get(APPLICATION_NAME_KEY) or DEFAULT_APPLICATION_NAME,
        machine_name=provider.get(MACHINE_NAME_KEY) or socket.gethostname(),
        rollup_per_server=provider.get_bool(ROLLUP_PER_SERVER_KEY, False),
    )
    logger.debug(
        f"Resolved error settings: application={settings.application_name} "
        f"machine={settings.machine_name} rollup_per_server={settings.rollup_per_server}"
    )
    return settings
