import json
import logging
import os
import sys
from unittest.mock import Mock, patch

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

DEFAULT_COMPILER_OPTIONS = {"outDir": "./build", "target": "es2019"}
DEFAULT_FILES = ["./src/index.ts", "./src/lib/util.ts"]


def show_config_result(compiler_options=None, files=None, returncode=0, stdout=None):
    """Build a fake CompletedProcess for ``tsc --showConfig``."""
    if stdout is None:
        stdout = json.dumps(
            {
                "compilerOptions": (
                    DEFAULT_COMPILER_OPTIONS if compiler_options is None else compiler_options
                ),
                "files": DEFAULT_FILES if files is None else files,
            }
        )
    return Mock(returncode=returncode, stdout=stdout, stderr="")


@pytest.fixture
def project(tmp_path, monkeypatch):
    """A small TypeScript project with sources and assets, used as cwd."""
    (tmp_path / "tsconfig.json").write_text(
        json.dumps({"compilerOptions": DEFAULT_COMPILER_OPTIONS, "include": ["src"]})
    )
    src = tmp_path / "src"
    (src / "lib").mkdir(parents=True)
    (src / "index.ts").write_text("export const answer = 42;\n")
    (src / "lib" / "util.ts").write_text("export const noop = () => {};\n")
    (src / "lib" / "legacy.js").write_text("module.exports = {};\n")
    (src / "view.tsx").write_text("export default () => null;\n")
    (src / "lib" / "data.json").write_text('{"key": "value"}\n')
    (src / "styles.css").write_text("body { margin: 0; }\n")
    (src / ".env").write_text("SECRET=1\n")

    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def fake_tsc():
    """Replace the ``tsc --showConfig`` call with a canned answer."""
    with patch("etsc.tsconfig.subprocess.run") as mock_run:
        mock_run.return_value = show_config_result()
        yield mock_run


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by configure_logging between tests."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    logging.getLogger("etsc").setLevel(logging.NOTSET)
