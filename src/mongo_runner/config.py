"""Persisted runner configuration."""

import io
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator, Optional, TypeVar, Union

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from mongo_runner.errors import ConfigError
from mongo_runner.models.config import RunnerConfig


logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".mongo-runner"

T = TypeVar("T")


def default_config_path() -> Path:
    """Location of the config file in the user's home directory."""
    return Path.home() / CONFIG_FILENAME


class ConfigStore:
    """Loads and saves the runner configuration document.

    There is no locking: concurrent writers race and the last save wins.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        """Initialize store for ``path`` (defaults to ``~/.mongo-runner``)."""
        self.path = Path(path) if path else default_config_path()
        self.yaml = YAML()
        self.yaml.preserve_quotes = True
        self.yaml.default_flow_style = False

    def load(self) -> RunnerConfig:
        """Load the configuration, or defaults if no file exists."""
        if not self.path.is_file():
            logger.debug(f"No config at {self.path}, using defaults")
            return RunnerConfig()

        try:
            data = self.yaml.load(self.path.read_text())
        except (OSError, YAMLError) as e:
            logger.error(f"Failed to read config {self.path}: {e}")
            raise ConfigError(f"Cannot read config {self.path}: {e}") from e

        if data is None:
            return RunnerConfig()
        if not isinstance(data, dict):
            raise ConfigError(f"Config {self.path} is not a mapping")

        try:
            return RunnerConfig(**data)
        except ValidationError as e:
            logger.error(f"Invalid config {self.path}: {e}")
            raise ConfigError(f"Invalid config {self.path}: {e}") from e

    def save(self, config: RunnerConfig) -> None:
        """Overwrite the config file with ``config``."""
        stream = io.StringIO()
        self.yaml.dump(config.model_dump(mode="json"), stream)

        try:
            self.path.write_text(stream.getvalue())
        except OSError as e:
            logger.error(f"Failed to write config {self.path}: {e}")
            raise ConfigError(f"Cannot write config {self.path}: {e}") from e

        logger.debug(f"Saved config to {self.path}")

    def with_config(self, fn: Callable[[RunnerConfig], T]) -> T:
        """Call ``fn`` with the loaded config and save it afterwards.

        The save happens even when ``fn`` raises; the error still propagates.
        """
        config = self.load()
        try:
            result = fn(config)
        except BaseException:
            self._save_after_error(config)
            raise
        self.save(config)
        return result

    @contextmanager
    def transaction(self) -> Iterator[RunnerConfig]:
        """Context manager form of :meth:`with_config`."""
        config = self.load()
        try:
            yield config
        except BaseException:
            self._save_after_error(config)
            raise
        self.save(config)

    def _save_after_error(self, config: RunnerConfig) -> None:
        """Save while another exception is in flight, keeping that one."""
        try:
            self.save(config)
        except ConfigError as e:
            logger.error(f"Config not saved after failed update: {e}")


def coerce_value(raw: str) -> Any:
    """Parse a command-line value as a YAML scalar (``true``, ``3``, ``~``...)."""
    yaml = YAML(typ="safe")
    try:
        return yaml.load(raw)
    except YAMLError:
        return raw
