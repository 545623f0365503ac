"""Hydra-backed configuration for the puzzle solver.

The last configuration loaded is kept as a module-level global so that the
agent factory and the CLI read the same ``puzzle`` and ``search`` settings.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from hydra import compose, initialize_config_dir
from hydra.core.global_hydra import GlobalHydra
from omegaconf import DictConfig, OmegaConf, open_dict

from .validators import ConfigValidationError, validate_config

logger = logging.getLogger(__name__)

_global_config: Optional[DictConfig] = None

# Marks keys that did not exist before a ConfigContext patched them
_MISSING = object()


def default_config_dir() -> Path:
    """The ``conf`` directory at the project root."""
    return Path(__file__).resolve().parents[3] / "conf"


class ConfigManager:
    """Composes a configuration file from a Hydra config directory."""

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """
        Args:
            config_dir: Directory holding ``<name>.yaml`` files. If None, uses
                the project's ``conf`` directory.

        Raises:
            FileNotFoundError: If the directory does not exist
        """
        self.config_dir = Path(config_dir or default_config_dir()).resolve()
        self.config: Optional[DictConfig] = None

        if not self.config_dir.is_dir():
            raise FileNotFoundError(f"Configuration directory not found: {self.config_dir}")

    def load_config(self,
                    config_name: str = "config",
                    overrides: Optional[List[str]] = None,
                    validate: bool = True) -> DictConfig:
        """Compose ``config_name`` with dotted overrides and make it global.

        Args:
            config_name: Name of the config file (without .yaml)
            overrides: Hydra overrides such as ``search.heuristic=misplaced``
            validate: Whether to check the puzzle and search sections

        Returns:
            Loaded configuration

        Raises:
            ConfigValidationError: If validation is requested and fails
        """
        global _global_config

        GlobalHydra.instance().clear()
        overrides = list(overrides or [])

        with initialize_config_dir(config_dir=str(self.config_dir), version_base=None):
            cfg = compose(config_name=config_name, overrides=overrides)

        if validate:
            validate_config(cfg)

        self.config = cfg
        _global_config = cfg

        logger.info(f"Loaded configuration '{config_name}' from {self.config_dir}")
        if overrides:
            logger.info(f"Applied overrides: {overrides}")
        return cfg

    def get_config(self) -> Optional[DictConfig]:
        return self.config


def load_config(config_name: str = "config",
                overrides: Optional[List[str]] = None,
                config_dir: Optional[Union[str, Path]] = None,
                validate: bool = True) -> DictConfig:
    """Load a configuration through a fresh ConfigManager."""
    return ConfigManager(config_dir).load_config(config_name, overrides, validate)


def get_config() -> Optional[DictConfig]:
    """Get the global configuration, or None if nothing was loaded."""
    return _global_config


def reset_config() -> None:
    """Forget the global configuration."""
    global _global_config
    _global_config = None


def get_parameter(key: str, default: Any = None) -> Any:
    """Read a dotted key such as ``puzzle.rows`` from the global configuration.

    Returns ``default`` when nothing is loaded or the key is absent.
    """
    config = get_config()
    if config is None:
        logger.debug(f"No global configuration loaded, using default for '{key}'")
        return default

    return OmegaConf.select(config, key, default=default)


class ConfigContext:
    """Temporarily patch dotted keys of the global configuration.

    The patched configuration must still validate; otherwise the changes are
    rolled back and ConfigValidationError is raised on entry. On exit every
    key gets its previous value back and keys that were added are removed.

    Example:
        with ConfigContext(**{'search.heuristic': 'misplaced'}):
            agent = create_search_agent(initial, goal)
    """

    def __init__(self, **changes: Any):
        self.changes = changes
        self._saved: Dict[str, Any] = {}
        self._config: Optional[DictConfig] = None

    def __enter__(self) -> DictConfig:
        config = get_config()
        if config is None:
            raise RuntimeError("No configuration loaded. Call load_config() first.")
        self._config = config

        for key in self.changes:
            value = OmegaConf.select(config, key, default=_MISSING)
            if OmegaConf.is_config(value):
                value = OmegaConf.to_container(value)
            self._saved[key] = value

        self._write(self.changes)
        try:
            validate_config(config)
        except ConfigValidationError:
            self._restore()
            raise

        logger.debug(f"Configuration patched: {self.changes}")
        return config

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._restore()
        return False

    def _write(self, values: Dict[str, Any]) -> None:
        with open_dict(self._config):
            for key, value in values.items():
                OmegaConf.update(self._config, key, value, merge=False)

    def _restore(self) -> None:
        with open_dict(self._config):
            for key, value in self._saved.items():
                if value is not _MISSING:
                    OmegaConf.update(self._config, key, value, merge=False)
                    continue
                parent_key, _, leaf = key.rpartition('.')
                parent = OmegaConf.select(self._config, parent_key) if parent_key else self._config
                if parent is not None and leaf in parent:
                    del parent[leaf]
        self._saved = {}
