"""etsc: build TypeScript projects with esbuild, driven by tsconfig.json."""

__version__ = "0.1.0"

from .build import main, run_build
from .config import ArgsConfig, Config, read_user_config
from .errors import BuildError, ConfigError, EtscError, TSConfigError
from .metadata import BuildMetadata, esbuild_sourcemap_option, get_build_metadata
from .tsconfig import TSConfig, find_config_file, get_ts_config

__all__ = [
    "__version__",
    "ArgsConfig",
    "BuildError",
    "BuildMetadata",
    "Config",
    "ConfigError",
    "EtscError",
    "TSConfig",
    "TSConfigError",
    "esbuild_sourcemap_option",
    "find_config_file",
    "get_build_metadata",
    "get_ts_config",
    "main",
    "read_user_config",
    "run_build",
]
