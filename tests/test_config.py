"""Tests for user config loading and merging."""

import json
import logging
import shutil
import subprocess
from unittest.mock import Mock, patch

import pytest
import yaml

from etsc.config import (
    ArgsConfig,
    AssetsConfig,
    Config,
    EsbuildConfig,
    config_from_dict,
    read_user_config,
    to_snake_case,
)
from etsc.errors import ConfigError
from etsc.loaders import load_config_file


@pytest.mark.parametrize(
    "key, expected",
    [
        ("outDir", "out_dir"),
        ("tsConfigFile", "ts_config_file"),
        ("entryPoints", "entry_points"),
        ("file-patterns", "file_patterns"),
        ("base_dir", "base_dir"),
        ("minify", "minify"),
    ],
)
def test_to_snake_case(key, expected):
    assert to_snake_case(key) == expected


class TestConfigFromDict:
    def test_camel_case_keys(self):
        config = config_from_dict(
            {
                "outDir": "out",
                "tsConfigFile": "tsconfig.build.json",
                "esbuild": {"entryPoints": ["src/main.ts"], "minify": True},
                "assets": {"baseDir": "static", "filePatterns": ["*.png"]},
            }
        )

        assert config.out_dir == "out"
        assert config.ts_config_file == "tsconfig.build.json"
        assert config.esbuild == EsbuildConfig(entry_points=["src/main.ts"], minify=True)
        assert config.assets == AssetsConfig(base_dir="static", file_patterns=["*.png"])

    def test_unknown_keys_are_ignored(self):
        config = config_from_dict({"plugins": [], "esbuild": {"plugins": []}})
        assert config == Config()

    def test_plugins_are_reported(self, caplog):
        caplog.set_level(logging.INFO)

        config = config_from_dict({"esbuild": {"plugins": [{"name": "svg"}], "minify": True}})

        assert config.esbuild.minify is True
        assert "esbuild plugins are not supported" in caplog.text

    def test_no_plugin_warning_without_plugins(self, caplog):
        caplog.set_level(logging.INFO)
        config_from_dict({"esbuild": {"minify": True}})
        assert caplog.text == ""

    def test_section_must_be_mapping(self):
        with pytest.raises(TypeError):
            config_from_dict({"esbuild": ["minify"]})


class TestLoaders:
    def test_yaml(self, tmp_path):
        path = tmp_path / "etsc.config.yml"
        path.write_text("outDir: out\nesbuild:\n  format: esm\n")
        assert load_config_file(path) == {"outDir": "out", "esbuild": {"format": "esm"}}

    def test_empty_yaml_is_empty_mapping(self, tmp_path):
        path = tmp_path / "etsc.config.yaml"
        path.write_text("")
        assert load_config_file(path) == {}

    def test_json(self, tmp_path):
        path = tmp_path / "etsc.config.json"
        path.write_text(json.dumps({"clean": True}))
        assert load_config_file(path) == {"clean": True}

    def test_python(self, tmp_path):
        path = tmp_path / "etsc_config.py"
        path.write_text("config = {'outDir': 'lib', 'esbuild': {'target': 'node18'}}\n")
        assert load_config_file(path) == {"outDir": "lib", "esbuild": {"target": "node18"}}

    def test_python_without_config_mapping(self, tmp_path):
        path = tmp_path / "etsc_config.py"
        path.write_text("OUT_DIR = 'lib'\n")
        with pytest.raises(ConfigError, match="does not define a 'config' mapping"):
            load_config_file(path)

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "etsc.config.toml"
        path.write_text("outDir = 'lib'\n")
        with pytest.raises(ConfigError, match="Unsupported config file type"):
            load_config_file(path)

    def test_non_mapping_document(self, tmp_path):
        path = tmp_path / "etsc.config.json"
        path.write_text("[1, 2, 3]")
        with pytest.raises(ConfigError, match="must define a mapping"):
            load_config_file(path)

    @patch("etsc.loaders.node.subprocess.run")
    def test_javascript_is_evaluated_with_node(self, mock_run, tmp_path):
        path = tmp_path / "etsc.config.js"
        path.write_text("module.exports = { outDir: 'out' };\n")
        mock_run.return_value = Mock(
            returncode=0, stdout='{"outDir": "out", "esbuild": {"minify": true}}', stderr=""
        )

        assert load_config_file(path) == {"outDir": "out", "esbuild": {"minify": True}}

        cmd = mock_run.call_args[0][0]
        assert cmd[0] == "node"
        assert cmd[-1] == str(path)

    @patch("etsc.loaders.node.subprocess.run")
    def test_javascript_evaluation_error(self, mock_run, tmp_path):
        path = tmp_path / "etsc.config.js"
        path.write_text("module.exports = {\n")
        mock_run.return_value = Mock(
            returncode=1, stdout="", stderr="SyntaxError: Unexpected end of input"
        )

        with pytest.raises(ConfigError, match="SyntaxError"):
            load_config_file(path)

    @patch("etsc.loaders.node.subprocess.run", side_effect=FileNotFoundError("node"))
    def test_javascript_without_node(self, mock_run, tmp_path):
        path = tmp_path / "etsc.config.cjs"
        path.write_text("module.exports = {};\n")

        with pytest.raises(ConfigError, match="was not found on PATH"):
            load_config_file(path)

    @patch(
        "etsc.loaders.node.subprocess.run",
        side_effect=subprocess.TimeoutExpired(cmd="node", timeout=30),
    )
    def test_javascript_timeout(self, mock_run, tmp_path):
        path = tmp_path / "etsc.config.mjs"
        path.write_text("export default {};\n")

        with pytest.raises(ConfigError, match="timed out"):
            load_config_file(path)


class TestReadUserConfig:
    def test_missing_file_uses_default_config(self, tmp_path, caplog):
        caplog.set_level(logging.INFO)
        args = ArgsConfig(config=str(tmp_path / "etsc.config.js"))

        config = read_user_config(args)

        assert config == Config()
        assert "does not exist, using default config" in caplog.text

    def test_missing_file_is_quiet_when_silent(self, tmp_path, caplog):
        caplog.set_level(logging.INFO)
        args = ArgsConfig(config=str(tmp_path / "etsc.config.js"), silent=True)

        config = read_user_config(args)

        assert config.silent is True
        assert caplog.text == ""

    def test_values_from_file(self, tmp_path):
        path = tmp_path / "etsc.config.yml"
        path.write_text("outDir: out\nclean: true\nassets:\n  baseDir: static\n")

        config = read_user_config(ArgsConfig(config=str(path)))

        assert config.out_dir == "out"
        assert config.clean is True
        assert config.assets.base_dir == "static"

    def test_flags_override_file(self, tmp_path):
        path = tmp_path / "etsc.config.yml"
        path.write_text("clean: true\nsilent: true\n")

        config = read_user_config(ArgsConfig(config=str(path), clean=False, silent=False))

        assert config.clean is False
        assert config.silent is False

    def test_debug_flag_is_carried(self, tmp_path):
        config = read_user_config(
            ArgsConfig(config=str(tmp_path / "missing.yml"), debug=True)
        )
        assert config.debug is True

    def test_broken_file_falls_back_to_default(self, tmp_path, caplog):
        caplog.set_level(logging.INFO)
        path = tmp_path / "etsc.config.yml"
        path.write_text("outDir: [unclosed\n")

        config = read_user_config(ArgsConfig(config=str(path)))

        assert config == Config()
        assert "Config file has some errors" in caplog.text
        assert "Using default config" in caplog.text

    def test_broken_file_raises_when_silent(self, tmp_path):
        path = tmp_path / "etsc.config.yml"
        path.write_text("outDir: [unclosed\n")

        with pytest.raises(yaml.YAMLError):
            read_user_config(ArgsConfig(config=str(path), silent=True))

    def test_invalid_section_falls_back_to_default(self, tmp_path):
        path = tmp_path / "etsc.config.json"
        path.write_text(json.dumps({"esbuild": "minify"}))

        config = read_user_config(ArgsConfig(config=str(path), clean=True))

        assert config == Config(clean=True)


@pytest.mark.skipif(shutil.which("node") is None, reason="node is not installed")
class TestNodeLoader:
    """Evaluate real config modules with Node.js."""

    def test_commonjs(self, tmp_path):
        path = tmp_path / "etsc.config.js"
        path.write_text(
            "module.exports = {\n"
            "  outDir: 'out',\n"
            "  esbuild: { minify: true, plugins: [{ name: 'svg', setup() {} }] },\n"
            "};\n"
        )

        assert load_config_file(path) == {
            "outDir": "out",
            "esbuild": {"minify": True, "plugins": [{"name": "svg"}]},
        }

    def test_es_module_default_export(self, tmp_path):
        path = tmp_path / "etsc.config.mjs"
        path.write_text("export default { outDir: 'lib', clean: true };\n")

        assert load_config_file(path) == {"outDir": "lib", "clean": True}

    def test_syntax_error(self, tmp_path):
        path = tmp_path / "etsc.config.js"
        path.write_text("module.exports = {\n")

        with pytest.raises(ConfigError, match="SyntaxError"):
            load_config_file(path)
