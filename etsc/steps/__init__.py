"""Build steps: transpile, asset copy and output cleanup."""

from .assets import copy_non_source_files, expand_braces, match_assets
from .clean import clean_output_dir
from .esbuild import build_command, build_source_files

__all__ = [
    "build_command",
    "build_source_files",
    "clean_output_dir",
    "copy_non_source_files",
    "expand_braces",
    "match_assets",
]
