#!/usr/bin/env python3
"""
CPI Wrap Configuration Management
Handles CPILint and FlashPipe YAML configuration files
"""

import os
import tempfile
import yaml
from pathlib import Path
from typing import Dict, Optional, Any
from dataclasses import dataclass

from cpiwrap.errors import WrapperError
from cpiwrap.output import info


def expand_path(value: str) -> Path:
    """
    Expand ~ and environment variables in a configured path

    Args:
        value: Path as written in the configuration file or on the command line

    Returns:
        Expanded path
    """
    return Path(os.path.expandvars(os.path.expanduser(value)))


def default_tmp_dir() -> str:
    """$TMPDIR/cpilint, falling back to the system temp directory"""
    return str(Path(os.environ.get('TMPDIR') or tempfile.gettempdir()) / 'cpilint')


def _get_str(data: Dict[str, Any], key: str) -> Optional[str]:
    """Read a scalar key; missing and null are both 'not specified'"""
    value = data.get(key)
    if value is None:
        return None
    return str(value)


@dataclass
class CPILintConfig:
    """CPILint wrapper configuration structure"""

    config_file: Path
    repo_dir: Path
    tmp_dir: Path
    rules_file: Path

    DEFAULT_CONFIG = '~/.config/cpilint/config.yaml'
    DEFAULT_RULES_FILE = '~/.config/cpilint/rules.xml'

    @classmethod
    def from_dict(cls, data: Dict[str, Any], config_file: Path) -> 'CPILintConfig':
        """
        Create config from dictionary, validating every path

        Args:
            data: Parsed YAML mapping
            config_file: Path the mapping was read from

        Returns:
            CPILintConfig object

        Raises:
            WrapperError: If a required key is missing or a path does not exist
        """
        dir_value = _get_str(data, 'repo_dir')
        if dir_value is None:
            raise WrapperError("Repository directory is not specified in CPILint configuration file")
        repo_dir = expand_path(dir_value)
        info(f"Repository directory: {repo_dir}")
        if not repo_dir.is_dir():
            raise WrapperError("Repository directory does not exist")

        tmp_value = _get_str(data, 'tmp_dir')
        if tmp_value is None:
            tmp_value = default_tmp_dir()
            info("Temporary directory is not specified in CPILint configuration file")
            info(f"Using default location: {tmp_value}")
        tmp_dir = expand_path(tmp_value)
        info(f"Temporary directory: {tmp_dir}")

        rules_value = _get_str(data, 'rules_file')
        if rules_value is None:
            rules_value = cls.DEFAULT_RULES_FILE
            info("Rules file is not specified in CPILint configuration file")
            info(f"Using default location: {rules_value}")
        rules_file = expand_path(rules_value)
        info(f"Rules file: {rules_file}")
        if not rules_file.is_file():
            raise WrapperError("Rules file does not exist")

        return cls(
            config_file=config_file,
            repo_dir=repo_dir.absolute(),
            tmp_dir=tmp_dir,
            rules_file=rules_file.absolute(),
        )


@dataclass
class FlashPipeConfig:
    """FlashPipe wrapper configuration structure"""

    config_file: Path
    tenant: str
    git_repo_dir: Path

    DEFAULT_CONFIG = '~/.config/flashpipe/config.yaml'

    @classmethod
    def from_dict(cls, data: Dict[str, Any], config_file: Path) -> 'FlashPipeConfig':
        """Create config from dictionary (keys as FlashPipe itself reads them)"""
        tenant = _get_str(data, 'tmn-host')
        if tenant is None:
            raise WrapperError("SAP Cloud Integration tenant is not specified in FlashPipe configuration file")
        info(f"SAP Cloud Integration tenant: {tenant}")

        dir_value = _get_str(data, 'dir-git-repo')
        if dir_value is None:
            raise WrapperError("Repository directory is not specified in FlashPipe configuration file")
        git_repo_dir = expand_path(dir_value)
        info(f"Local directory: {git_repo_dir}")
        if not git_repo_dir.is_dir():
            raise WrapperError("Repository directory does not exist")

        return cls(
            config_file=config_file,
            tenant=tenant,
            git_repo_dir=git_repo_dir.absolute(),
        )


class ConfigManager:
    """Locate and load wrapper configuration files"""

    @staticmethod
    def resolve_config(config: Optional[str], tool_label: str, default: str) -> Path:
        """
        Resolve the configuration file given with -c, or the default location

        Args:
            config: Value of the -c option (None when not given)
            tool_label: Display name of the wrapped tool, e.g. 'CPILint'
            default: Default configuration file location

        Returns:
            Expanded path of an existing configuration file
        """
        if not config:
            info(f"{tool_label} configuration file is not specified")
            info(f"Using default location: {default}")
            config = default

        config_file = expand_path(config)
        info(f"{tool_label} configuration file: {config_file}")
        if not config_file.is_file():
            raise WrapperError(f"{tool_label} configuration file does not exist")

        return config_file.absolute()

    @staticmethod
    def load_yaml(config_file: Path, tool_label: str) -> Dict[str, Any]:
        """
        Load a configuration file as a YAML mapping

        An empty file loads as an empty mapping.
        """
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise WrapperError(f"{tool_label} configuration file is not valid YAML: {e}") from e
        except OSError as e:
            raise WrapperError(f"Cannot read {tool_label} configuration file: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise WrapperError(f"{tool_label} configuration file must contain a mapping")

        return data

    @staticmethod
    def load_cpilint_config(config: Optional[str] = None) -> CPILintConfig:
        """Resolve, load and validate a CPILint configuration file"""
        config_file = ConfigManager.resolve_config(config, 'CPILint', CPILintConfig.DEFAULT_CONFIG)
        data = ConfigManager.load_yaml(config_file, 'CPILint')
        return CPILintConfig.from_dict(data, config_file)

    @staticmethod
    def load_flashpipe_config(config: Optional[str] = None) -> FlashPipeConfig:
        """Resolve, load and validate a FlashPipe configuration file"""
        config_file = ConfigManager.resolve_config(config, 'FlashPipe', FlashPipeConfig.DEFAULT_CONFIG)
        data = ConfigManager.load_yaml(config_file, 'FlashPipe')
        return FlashPipeConfig.from_dict(data, config_file)
