"""Hydra-backed configuration loading for puzzle-search."""

import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from hydra import compose, initialize_config_dir
from hydra.core.global_hydra import GlobalHydra
from omegaconf import DictConfig, OmegaConf, open_dict

from .validators import validate_config

logger = logging.getLogger(__name__)

CONFIG_NAME = "config"


def default_config_dir() -> Path:
    """The ``conf`` directory at the project root."""
    return Path(__file__).parent.parent.parent.parent / "conf"


class ConfigManager:
    """Composes ``conf/config.yaml`` with overrides and edits the result.

    Overrides use Hydra syntax (``search.astar.max_visited_states=5000``).
    Edits made with :meth:`set_parameter` only live in memory until
    :meth:`save_config` writes a snapshot.
    """

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        self.config_dir = Path(config_dir or default_config_dir()).resolve()
        self.config: Optional[DictConfig] = None

        if not self.config_dir.is_dir():
            raise FileNotFoundError(f"Configuration directory not found: {self.config_dir}")

    def load_config(self,
                    config_name: str = CONFIG_NAME,
                    overrides: Optional[List[str]] = None,
                    validate: bool = True) -> DictConfig:
        """Compose the named config with ``overrides``.

        Raises:
            ConfigValidationError: If ``validate`` is set and a value is out of range
        """
        overrides = list(overrides or [])

        # Hydra keeps one global context per process
        GlobalHydra.instance().clear()
        try:
            with initialize_config_dir(config_dir=str(self.config_dir), version_base=None):
                cfg = compose(config_name=config_name, overrides=overrides)
            if validate:
                validate_config(cfg)
        except Exception as e:
            logger.error(f"Failed to load configuration {config_name!r}: {e}")
            raise

        self.config = cfg
        logger.info(f"Configuration loaded from {self.config_dir / config_name}.yaml"
                    + (f" with overrides {overrides}" if overrides else ""))
        return cfg

    def get_config(self) -> Optional[DictConfig]:
        return self.config

    def _loaded(self) -> DictConfig:
        if self.config is None:
            raise RuntimeError("No configuration loaded. Call load_config() first.")
        return self.config

    def get_parameter(self, key: str, default: Any = None) -> Any:
        """Value at a dotted ``key``, or ``default`` when the key is absent."""
        return OmegaConf.select(self._loaded(), key, default=default)

    def set_parameter(self, key: str, value: Any) -> None:
        """Assign a dotted ``key``; keys missing from the file are created."""
        config = self._loaded()
        with open_dict(config):
            OmegaConf.update(config, key, value, merge=True)
        logger.debug(f"Parameter set: {key} = {value}")

    def save_config(self, output_path: Union[str, Path]) -> Path:
        """Validate the current config and write it as YAML.

        Returns:
            The path written
        """
        config = self._loaded()
        validate_config(config)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        OmegaConf.save(config, output_path)

        logger.info(f"Configuration saved to {output_path}")
        return output_path


def load_config(config_name: str = CONFIG_NAME,
                overrides: Optional[List[str]] = None,
                config_dir: Optional[Union[str, Path]] = None,
                validate: bool = True) -> DictConfig:
    """Load configuration using a fresh ConfigManager."""
    return ConfigManager(config_dir).load_config(config_name, overrides, validate)
