"""Loader for Python config files."""

import importlib.util

from etsc.errors import ConfigError


def load_python(path):
    """
    Execute a Python config file and return its module-level ``config`` mapping.

    The module is executed in isolation and is not added to ``sys.modules``.
    """
    spec = importlib.util.spec_from_file_location(f"etsc_user_config_{path.stem}", path)
    if spec is None or spec.loader is None:
        raise ConfigError(f"Cannot import config file '{path}'")

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    if not hasattr(module, "config"):
        raise ConfigError(f"Config file '{path}' does not define a 'config' mapping")
    return module.config
