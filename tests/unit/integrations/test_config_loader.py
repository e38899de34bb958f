"""
配置加载器单元测试
"""
from pathlib import Path

import pytest

import netdiag
from netdiag.integrations.config_loader import (
    ConfigError,
    DiagnosticConfig,
    _default_config_path,
    load_diagnostic_config,
)


class TestLoadDiagnosticConfig:
    """诊断配置加载测试"""

    def test_default_config_file(self):
        """测试默认配置文件"""
        config = load_diagnostic_config(use_env=False)

        assert config == DiagnosticConfig()

    def test_default_config_ships_with_package(self):
        """测试默认配置文件位于netdiag包内"""
        path = _default_config_path()

        assert path.is_file()
        assert Path(netdiag.__file__).parent in path.parents

    def test_yaml_values(self, tmp_path):
        """测试从YAML读取配置"""
        path = tmp_path / "diagnostics.yaml"
        path.write_text(
            "diagnostics:\n  probe_timeout: 5\n  ping_count: 2\n  platform: Windows\n",
            encoding="utf-8"
        )

        config = load_diagnostic_config(str(path), use_env=False)

        assert config.probe_timeout == 5.0
        assert config.ping_count == 2
        assert config.platform == "windows"
        assert config.netstat_limit == 5

    def test_env_placeholder(self, tmp_path, monkeypatch):
        """测试 ${VAR} 占位符"""
        monkeypatch.setenv("MY_HOPS", "12")
        path = tmp_path / "diagnostics.yaml"
        path.write_text("traceroute_max_hops: ${MY_HOPS}\n", encoding="utf-8")

        config = load_diagnostic_config(str(path), use_env=False)

        assert config.traceroute_max_hops == 12

    def test_env_override(self, tmp_path, monkeypatch):
        """测试环境变量覆盖配置文件"""
        path = tmp_path / "diagnostics.yaml"
        path.write_text("probe_timeout: 5\n", encoding="utf-8")
        monkeypatch.setenv("NETDIAG_PROBE_TIMEOUT", "2.5")
        monkeypatch.setenv("NETDIAG_PLATFORM", "darwin")

        config = load_diagnostic_config(str(path))

        assert config.probe_timeout == 2.5
        assert config.platform == "darwin"

    def test_missing_explicit_file(self, tmp_path):
        """测试指定的配置文件不存在"""
        with pytest.raises(FileNotFoundError):
            load_diagnostic_config(str(tmp_path / "missing.yaml"), use_env=False)

    @pytest.mark.parametrize("content", [
        "probe_timeout: [unclosed\n",
        "- just\n- a list\n",
        "probe_timeout: soon\n",
        "probe_timeout: 0\n",
        "max_concurrent_probes: 0\n",
        "platform: beos\n",
    ])
    def test_invalid_config(self, tmp_path, content):
        """测试格式错误或取值不合法"""
        path = tmp_path / "diagnostics.yaml"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(ConfigError):
            load_diagnostic_config(str(path), use_env=False)

    def test_unknown_keys_are_ignored(self, tmp_path):
        """测试未知配置项被忽略"""
        path = tmp_path / "diagnostics.yaml"
        path.write_text("diagnostics:\n  colour: blue\n  ping_count: 3\n", encoding="utf-8")

        config = load_diagnostic_config(str(path), use_env=False)

        assert config.ping_count == 3
