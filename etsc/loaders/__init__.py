"""Loaders for user config files, selected by file suffix."""

from pathlib import Path

from etsc.errors import ConfigError

from .data import load_json, load_yaml
from .module import load_python
from .node import load_javascript

LOADER_REGISTRY = {
    ".js": load_javascript,
    ".cjs": load_javascript,
    ".mjs": load_javascript,
    ".py": load_python,
    ".yml": load_yaml,
    ".yaml": load_yaml,
    ".json": load_json,
}


def load_config_file(path):
    """
    Load a config file into a plain dictionary.

    Args:
        path: Path to the config file

    Returns:
        dict: The raw config mapping, keys untouched

    Raises:
        ConfigError: If the suffix is unsupported or the document is not a mapping
    """
    path = Path(path)
    loader = LOADER_REGISTRY.get(path.suffix.lower())
    if loader is None:
        supported = ", ".join(sorted(LOADER_REGISTRY))
        raise ConfigError(
            f"Unsupported config file type '{path.suffix}' (supported: {supported})"
        )

    document = loader(path)
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ConfigError(
            f"Config file '{path}' must define a mapping, got {type(document).__name__}"
        )
    return document


__all__ = [
    "LOADER_REGISTRY",
    "load_config_file",
    "load_javascript",
    "load_json",
    "load_python",
    "load_yaml",
]
