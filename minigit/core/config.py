"""Configuration management for MiniGit.

This module provides a clean interface for reading and writing
both repository-local and global configuration files.
"""

import configparser
import io
import os
from pathlib import Path
from typing import Dict, Optional

DEFAULTS = {
    ('init', 'defaultbranch'): 'master',
    ('core', 'loglevel'): 'WARNING',
    ('color', 'ui'): 'true',
}

TRUE_VALUES = {'1', 'true', 'yes', 'on'}
FALSE_VALUES = {'0', 'false', 'no', 'off'}


def split_key(key: str):
    """Split 'section.option' into its parts; a bare option lives in [core]."""
    if '.' in key:
        section, option = key.split('.', 1)
    else:
        section, option = 'core', key
    return section.lower(), option.lower()


class Config:
    """
    Manages MiniGit configuration files.

    Configuration is stored in INI format:
    - Global config: ~/.minigitconfig
    - Repository config: .minigit/config (read through the repository storage)

    Environment variables take highest precedence, then repository config,
    then global config, then built-in defaults.
    """

    GLOBAL_CONFIG_PATH = Path.home() / '.minigitconfig'

    def __init__(self, repo=None, global_path: Optional[Path] = None):
        """
        Initialize Config manager.

        Args:
            repo: Repository instance, or None for global-only config
            global_path: Override for the global config file location
        """
        self.repo = repo
        self.global_path = Path(global_path) if global_path else self.GLOBAL_CONFIG_PATH
        self._global_config = None
        self._repo_config = None

    @property
    def global_config(self) -> configparser.ConfigParser:
        """Load and return global configuration."""
        if self._global_config is None:
            self._global_config = configparser.ConfigParser()
            if self.global_path.exists():
                self._global_config.read(self.global_path)
        return self._global_config

    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        """Load and return repository configuration."""
        if self._repo_config is None and self.repo is not None:
            self._repo_config = configparser.ConfigParser()
            storage = self.repo.storage
            if storage.exists(self.repo.config_file):
                self._repo_config.read_string(storage.read_text(self.repo.config_file))
        return self._repo_config

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value.

        Priority order (highest to lowest):
        1. Environment variables (MINIGIT_<SECTION>_<KEY>)
        2. Repository config
        3. Global config
        4. Fallback value, then built-in default

        Args:
            section: Config section (e.g., 'core', 'init')
            key: Config key (e.g., 'loglevel')
            fallback: Default value if not found

        Returns:
            Configuration value or fallback
        """
        env_value = os.environ.get(f"MINIGIT_{section.upper()}_{key.upper()}")
        if env_value is not None:
            return env_value

        if self.repo_config and self.repo_config.has_option(section, key):
            return self.repo_config.get(section, key)

        if self.global_config.has_option(section, key):
            return self.global_config.get(section, key)

        if fallback is not None:
            return fallback
        return DEFAULTS.get((section, key))

    def get_bool(self, section: str, key: str, fallback: bool = False) -> bool:
        """Get a boolean value; unrecognized strings give the fallback."""
        value = self.get(section, key)
        if value is None:
            return fallback
        value = value.strip().lower()
        if value in TRUE_VALUES:
            return True
        if value in FALSE_VALUES:
            return False
        return fallback

    def _write_repo_config(self) -> None:
        buffer = io.StringIO()
        self._repo_config.write(buffer)
        self.repo.storage.write_text(self.repo.config_file, buffer.getvalue())

    def _write_global_config(self) -> None:
        with open(self.global_path, 'w') as f:
            self.global_config.write(f)

    def set(self, section: str, key: str, value: str, global_config: bool = False) -> None:
        """
        Set a configuration value.

        Args:
            section: Config section
            key: Config key
            value: Value to set
            global_config: If True, write to global config; otherwise repo config
        """
        if global_config:
            config = self.global_config
        else:
            if self.repo is None:
                raise ValueError("No repository config available")
            config = self.repo_config

        if not config.has_section(section):
            config.add_section(section)
        config.set(section, key, value)

        if global_config:
            self._write_global_config()
        else:
            self._write_repo_config()

    def unset(self, section: str, key: str, global_config: bool = False) -> bool:
        """
        Remove a configuration value.

        Returns:
            True if value was removed, False if it didn't exist
        """
        if global_config:
            config = self.global_config
        else:
            if not self.repo_config:
                return False
            config = self.repo_config

        if not config.has_option(section, key):
            return False

        config.remove_option(section, key)
        if not config.options(section):
            config.remove_section(section)

        if global_config:
            self._write_global_config()
        else:
            self._write_repo_config()
        return True

    def list_all(self, global_only: bool = False, repo_only: bool = False) -> Dict[str, Dict[str, str]]:
        """
        List configuration values, repository values overriding global ones.

        Returns:
            Dict of sections to key-value dicts
        """
        result: Dict[str, Dict[str, str]] = {}

        sources = []
        if not repo_only:
            sources.append(self.global_config)
        if not global_only and self.repo_config:
            sources.append(self.repo_config)

        for config in sources:
            for section in config.sections():
                result.setdefault(section, {}).update(config.items(section))

        return result


def get_config(repo=None) -> Config:
    """
    Get a Config instance.

    Args:
        repo: Repository instance, or None for global-only config

    Returns:
        Config instance
    """
    return Config(repo)
