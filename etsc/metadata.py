"""Derive esbuild and asset-copy options from the user config and tsconfig."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from etsc.config import Config
from etsc.errors import ConfigError
from etsc.tsconfig import get_ts_config

logger = logging.getLogger(__name__)

DEFAULT_OUT_DIR = "dist"
DEFAULT_TARGET = "es6"
DEFAULT_FORMAT = "cjs"
SUPPORTED_FORMATS = ("cjs", "esm")

DEFAULT_ASSETS_BASE_DIR = "src"
DEFAULT_ASSET_PATTERNS = ["**"]
SOURCE_FILES_EXCLUSION = "!**/*.{ts,js,tsx,jsx}"

SourceMapOption = Union[bool, str, None]


@dataclass
class EsbuildOptions:
    outdir: str
    entry_points: List[str] = field(default_factory=list)
    sourcemap: SourceMapOption = None
    target: str = DEFAULT_TARGET
    minify: bool = False
    tsconfig: Optional[str] = None
    format: str = DEFAULT_FORMAT
    binary: str = "esbuild"


@dataclass
class AssetsOptions:
    base_dir: str
    out_dir: str
    patterns: List[str] = field(default_factory=list)


@dataclass
class BuildMetadata:
    out_dir: str
    esbuild_options: EsbuildOptions
    assets_options: AssetsOptions


def esbuild_sourcemap_option(options) -> SourceMapOption:
    """
    Translate tsconfig source map settings into esbuild's ``sourcemap`` value.

    Returns:
        False, "inline", or the tsconfig's ``sourceMap`` value as-is
    """
    source_map = options.get("sourceMap")
    inline_sources = options.get("inlineSources")
    inline_source_map = options.get("inlineSourceMap")

    # inlineSources requires either inlineSourceMap or sourceMap
    if inline_sources and not inline_source_map and not source_map:
        return False

    # Mutually exclusive in tsconfig
    if source_map and inline_source_map:
        return False

    if inline_source_map:
        return "inline"

    return source_map


def get_build_metadata(config: Config, cwd=None) -> BuildMetadata:
    """
    Merge user config and tsconfig into the options for both build steps.

    User values win over tsconfig values, which win over built-in defaults.

    Args:
        config: Merged user configuration
        cwd: Working directory used to find tsconfig and resolve relative paths

    Returns:
        BuildMetadata: Output directory plus esbuild and asset-copy options
    """
    cwd = Path.cwd() if cwd is None else Path(cwd)
    user_esbuild = config.esbuild
    user_assets = config.assets
    user_entry_points = [str(cwd / p) for p in user_esbuild.entry_points or []]
    ts_config = get_ts_config(
        config.ts_config_file, cwd, config.tsc_binary, entry_points=user_entry_points
    )

    out_dir = config.out_dir or ts_config.options.get("outDir") or DEFAULT_OUT_DIR
    out_dir = str(cwd / out_dir)

    entry_points = user_entry_points or list(ts_config.file_names)
    target = (
        user_esbuild.target
        or (ts_config.options.get("target") or "").lower()
        or DEFAULT_TARGET
    )

    output_format = user_esbuild.format or DEFAULT_FORMAT
    if output_format not in SUPPORTED_FORMATS:
        raise ConfigError(
            f"Unsupported esbuild format '{output_format}' "
            f"(choices: {', '.join(SUPPORTED_FORMATS)})"
        )

    esbuild_options = EsbuildOptions(
        outdir=out_dir,
        entry_points=entry_points,
        sourcemap=esbuild_sourcemap_option(ts_config.options),
        target=target,
        minify=bool(user_esbuild.minify),
        tsconfig=str(ts_config.path),
        format=output_format,
        binary=user_esbuild.binary,
    )

    asset_patterns = list(user_assets.file_patterns or DEFAULT_ASSET_PATTERNS)
    assets_options = AssetsOptions(
        base_dir=str(cwd / (user_assets.base_dir or DEFAULT_ASSETS_BASE_DIR)),
        out_dir=str(cwd / user_assets.out_dir) if user_assets.out_dir else out_dir,
        patterns=asset_patterns + [SOURCE_FILES_EXCLUSION],
    )

    logger.debug("esbuild options: %s", esbuild_options)
    logger.debug("assets options: %s", assets_options)
    return BuildMetadata(
        out_dir=out_dir, esbuild_options=esbuild_options, assets_options=assets_options
    )
