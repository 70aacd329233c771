"""Loader for JavaScript config files, evaluated by Node.js."""

import json
import subprocess

from etsc.errors import ConfigError

NODE_BINARY = "node"

# Prints the default export (or module.exports) as JSON. Functions, such as
# esbuild plugins, have no JSON form and are dropped.
NODE_EXPORT_SCRIPT = """
const { pathToFileURL } = require("url");
import(pathToFileURL(process.argv[1]).href).then((mod) => {
  const config = mod.default === undefined ? mod : mod.default;
  process.stdout.write(
    JSON.stringify(config, (key, value) => (typeof value === "function" ? undefined : value)) || "{}"
  );
});
"""

NODE_TIMEOUT = 30  # seconds


def load_javascript(path, node_binary=NODE_BINARY):
    """
    Evaluate a JavaScript config module with Node.js and decode its export.

    Args:
        path: Path to the ``.js``, ``.cjs`` or ``.mjs`` file
        node_binary: Node.js executable to run

    Returns:
        The exported value decoded from JSON
    """
    cmd = [node_binary, "-e", NODE_EXPORT_SCRIPT, str(path)]
    try:
        result = subprocess.run(
            cmd, capture_output=True, text=True, timeout=NODE_TIMEOUT
        )
    except FileNotFoundError as e:
        raise ConfigError(
            f"Cannot evaluate '{path}': '{node_binary}' was not found on PATH"
        ) from e
    except subprocess.TimeoutExpired as e:
        raise ConfigError(
            f"Evaluating '{path}' timed out after {NODE_TIMEOUT} seconds"
        ) from e

    if result.returncode != 0:
        raise ConfigError(f"Cannot evaluate '{path}':\n{result.stderr.strip()}")

    try:
        return json.loads(result.stdout)
    except json.JSONDecodeError as e:
        raise ConfigError(f"'{path}' did not export a JSON-serializable value: {e}") from e
