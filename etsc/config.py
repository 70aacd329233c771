"""User configuration: defaults, config file values and command-line overrides."""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from etsc.loaders import load_config_file

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "etsc.config.js"
DEFAULT_TS_CONFIG_FILE = "tsconfig.json"


@dataclass
class ArgsConfig:
    """Values accepted on the command line."""

    config: str = DEFAULT_CONFIG_FILE
    clean: Optional[bool] = None
    silent: Optional[bool] = None
    debug: bool = False


@dataclass
class EsbuildConfig:
    entry_points: Optional[List[str]] = None
    minify: Optional[bool] = None
    target: Optional[str] = None
    format: Optional[str] = None
    binary: str = "esbuild"


@dataclass
class AssetsConfig:
    base_dir: Optional[str] = None
    out_dir: Optional[str] = None
    file_patterns: Optional[List[str]] = None


@dataclass
class Config:
    """Merged build configuration. ``None`` means "derive a default later"."""

    out_dir: Optional[str] = None
    clean: bool = False
    silent: bool = False
    debug: bool = False
    ts_config_file: Optional[str] = None
    tsc_binary: str = "tsc"
    esbuild: EsbuildConfig = field(default_factory=EsbuildConfig)
    assets: AssetsConfig = field(default_factory=AssetsConfig)


def to_snake_case(key):
    """Normalize ``outDir``, ``out-dir`` and ``out_dir`` to ``out_dir``."""
    key = re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", key)
    return key.replace("-", "_").lower()


def _build_section(section_cls, values, section_name):
    if values is None:
        return section_cls()
    if not isinstance(values, dict):
        raise TypeError(
            f"'{section_name}' must be a mapping, got {type(values).__name__}"
        )

    known = set(section_cls.__dataclass_fields__)
    kwargs = {}
    for key, value in values.items():
        name = to_snake_case(key)
        if name not in known:
            logger.debug("Ignoring unknown config key '%s.%s'", section_name, key)
            continue
        kwargs[name] = value
    return section_cls(**kwargs)


def config_from_dict(values: Dict[str, Any]) -> Config:
    """
    Build a Config from a raw mapping as found in a config file.

    Args:
        values: Mapping with camelCase or snake_case keys

    Returns:
        Config: Values from the mapping, defaults for everything else
    """
    kwargs = {}
    known = set(Config.__dataclass_fields__)
    for key, value in values.items():
        name = to_snake_case(key)
        if name not in known:
            logger.debug("Ignoring unknown config key '%s'", key)
            continue
        kwargs[name] = value

    esbuild_values = kwargs.get("esbuild")
    if isinstance(esbuild_values, dict) and esbuild_values.get("plugins"):
        logger.warning(
            "esbuild plugins are not supported and will be ignored; "
            "the build output may differ from a plugin-enabled build"
        )

    kwargs["esbuild"] = _build_section(EsbuildConfig, kwargs.get("esbuild"), "esbuild")
    kwargs["assets"] = _build_section(AssetsConfig, kwargs.get("assets"), "assets")
    return Config(**kwargs)


def read_user_config(args: ArgsConfig) -> Config:
    """
    Load the user config file and apply command-line overrides.

    A missing config file falls back to the default config. A broken one does
    too, unless silent mode was requested, in which case the error propagates.

    Args:
        args: Parsed command-line values

    Returns:
        Config: The merged configuration
    """
    config_path = Path(args.config)
    config = Config()

    if config_path.exists():
        try:
            config = config_from_dict(load_config_file(config_path))
        except Exception as e:
            if args.silent:
                raise
            logger.warning("Config file has some errors:")
            logger.error("%s", e)
            logger.warning("Using default config")
    elif not args.silent:
        logger.info("Config file '%s' does not exist, using default config", config_path)

    if args.clean is not None:
        config.clean = args.clean
    if args.silent is not None:
        config.silent = args.silent
    if args.debug:
        config.debug = True
    return config
