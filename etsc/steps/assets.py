"""Asset copy step: copy non-source files into the output directory."""

import asyncio
import logging
import shutil
from glob import glob
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


def _split_top_level(body):
    parts, depth, start = [], 0, 0
    for i, char in enumerate(body):
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
        elif char == "," and depth == 0:
            parts.append(body[start:i])
            start = i + 1
    parts.append(body[start:])
    return parts


def expand_braces(pattern) -> List[str]:
    """
    Expand ``{a,b}`` alternatives, which the glob module does not understand.

    ``"*.{ts,tsx}"`` becomes ``["*.ts", "*.tsx"]``. Nested groups are
    expanded too; a group without a comma is kept literally.
    """
    start = pattern.find("{")
    while start != -1:
        depth = 0
        for end in range(start, len(pattern)):
            if pattern[end] == "{":
                depth += 1
            elif pattern[end] == "}":
                depth -= 1
                if depth == 0:
                    break
        else:
            return [pattern]

        options = _split_top_level(pattern[start + 1 : end])
        if len(options) > 1:
            prefix, suffix = pattern[:start], pattern[end + 1 :]
            expanded = []
            for option in options:
                expanded.extend(expand_braces(prefix + option + suffix))
            return expanded
        start = pattern.find("{", start + 1)

    return [pattern]


def _glob_files(base_dir, pattern):
    matches = set()
    for expanded in expand_braces(pattern):
        for match in glob(expanded, root_dir=base_dir, recursive=True):
            if (base_dir / match).is_file():
                matches.add(Path(match))
    return matches


def match_assets(base_dir, patterns) -> List[Path]:
    """
    Resolve glob patterns against ``base_dir``.

    A pattern starting with ``!`` removes its matches from the result.
    Dotfiles and directories never match.

    Returns:
        Sorted file paths relative to ``base_dir``
    """
    base_dir = Path(base_dir)
    included, excluded = set(), set()
    for pattern in patterns:
        if pattern.startswith("!"):
            excluded |= _glob_files(base_dir, pattern[1:])
        else:
            included |= _glob_files(base_dir, pattern)
    return sorted(included - excluded)


def copy_assets(base_dir, out_dir, patterns) -> List[Path]:
    base_dir = Path(base_dir).resolve()
    out_dir = Path(out_dir).resolve()

    copied = []
    for relative in match_assets(base_dir, patterns):
        source = base_dir / relative
        # Output nested inside the asset directory must not be copied into itself
        if out_dir in source.parents:
            continue
        destination = out_dir / relative
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, destination)
        copied.append(destination)

    if not copied:
        logger.debug("No assets matched in %s", base_dir)
    return copied


async def copy_non_source_files(options) -> List[Path]:
    """
    Copy every asset matched by the options' patterns, off the event loop.

    Args:
        options: AssetsOptions from the build metadata

    Returns:
        Paths of the written files
    """
    copied = await asyncio.to_thread(
        copy_assets, options.base_dir, options.out_dir, options.patterns
    )
    logger.debug("Copied %d asset(s) into %s", len(copied), options.out_dir)
    return copied
