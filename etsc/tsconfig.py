"""TypeScript configuration lookup, resolved by the TypeScript compiler."""

import json
import logging
import os
import subprocess
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from etsc.config import DEFAULT_TS_CONFIG_FILE
from etsc.errors import TSConfigError

logger = logging.getLogger(__name__)

TSC_TIMEOUT = 60  # seconds

# "No inputs were found in config file"
NO_INPUTS_DIAGNOSTIC = "TS18003"


@dataclass
class TSConfig:
    """A tsconfig file after ``extends``, ``include`` and ``files`` were resolved."""

    path: Path
    options: Dict[str, Any] = field(default_factory=dict)
    file_names: List[str] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict)


def find_config_file(search_path, config_name=DEFAULT_TS_CONFIG_FILE) -> Optional[Path]:
    """
    Search ``search_path`` and its ancestors for ``config_name``.

    Args:
        search_path: Directory to start from
        config_name: File name, relative path or absolute path of the config

    Returns:
        Path of the first match, or None when the filesystem root is reached
    """
    directory = Path(search_path).resolve()
    while True:
        candidate = directory / config_name
        if candidate.is_file():
            return candidate
        if directory.parent == directory:
            return None
        directory = directory.parent


def show_config(config_file, tsc_binary="tsc"):
    """Run ``tsc --showConfig`` and return its decoded JSON output."""
    cmd = [tsc_binary, "--showConfig", "--project", str(config_file)]
    logger.debug("Resolving TypeScript config: %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd, capture_output=True, text=True, timeout=TSC_TIMEOUT
        )
    except FileNotFoundError as e:
        raise TSConfigError(
            f"Cannot resolve '{config_file}': '{tsc_binary}' was not found on PATH"
        ) from e
    except subprocess.TimeoutExpired as e:
        raise TSConfigError(
            f"Resolving '{config_file}' timed out after {TSC_TIMEOUT} seconds"
        ) from e

    # tsc reports config diagnostics on stdout
    if result.returncode != 0:
        output = (result.stdout + result.stderr).strip()
        raise TSConfigError(f"Cannot resolve '{config_file}':\n{output}")

    try:
        return json.loads(result.stdout)
    except json.JSONDecodeError as e:
        raise TSConfigError(f"Unexpected output from '{tsc_binary} --showConfig': {e}") from e


def show_config_for_entry_points(config_file, entry_points, tsc_binary="tsc"):
    """
    Resolve ``config_file`` with its file list replaced by ``entry_points``.

    A throwaway config extending the real one is written next to it, so
    relative paths resolve the same way.
    """
    override = {"extends": str(config_file), "files": [str(p) for p in entry_points]}
    fd, override_path = tempfile.mkstemp(
        prefix=".tsconfig.etsc-", suffix=".json", dir=config_file.parent
    )
    try:
        with os.fdopen(fd, "w") as f:
            json.dump(override, f)
        return show_config(Path(override_path), tsc_binary)
    finally:
        os.unlink(override_path)


def get_ts_config(config_name=None, cwd=None, tsc_binary="tsc", entry_points=None) -> TSConfig:
    """
    Locate and resolve the project's tsconfig.

    Relative paths in the resolved config (``files``, ``outDir``) are made
    absolute against the directory holding the config file.

    Args:
        config_name: Config file to look for (default: tsconfig.json)
        cwd: Directory to start the search from (default: current directory)
        tsc_binary: TypeScript compiler executable
        entry_points: User entry points; when given, a tsconfig that matches
            no input files is still accepted

    Returns:
        TSConfig: The resolved configuration

    Raises:
        TSConfigError: If the file is missing or tsc cannot resolve it
    """
    cwd = Path.cwd() if cwd is None else Path(cwd)
    config_file = find_config_file(cwd, config_name or DEFAULT_TS_CONFIG_FILE)
    if config_file is None:
        raise TSConfigError(f"tsconfig.json not found in the current directory! {cwd}")

    try:
        raw = show_config(config_file, tsc_binary)
    except TSConfigError as e:
        if not entry_points or NO_INPUTS_DIAGNOSTIC not in str(e):
            raise
        logger.debug("%s matches no inputs, resolving with the user entry points", config_file)
        raw = show_config_for_entry_points(config_file, entry_points, tsc_binary)
    base_dir = config_file.parent

    options = dict(raw.get("compilerOptions") or {})
    if options.get("outDir"):
        options["outDir"] = str((base_dir / options["outDir"]).resolve())

    file_names = [str((base_dir / name).resolve()) for name in raw.get("files") or []]

    return TSConfig(path=config_file, options=options, file_names=file_names, raw=raw)
