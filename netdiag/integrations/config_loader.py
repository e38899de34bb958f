"""
诊断配置加载器

从YAML配置文件加载探测参数，并允许环境变量覆盖
"""
import os
import sys
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

PLATFORM_CHOICES = ("auto", "posix", "darwin", "windows")

# 环境变量 -> 配置字段
ENV_OVERRIDES = {
    "NETDIAG_PROBE_TIMEOUT": "probe_timeout",
    "NETDIAG_PING_COUNT": "ping_count",
    "NETDIAG_MAX_HOPS": "traceroute_max_hops",
    "NETDIAG_NETSTAT_LIMIT": "netstat_limit",
    "NETDIAG_MAX_CONCURRENT_PROBES": "max_concurrent_probes",
    "NETDIAG_PLATFORM": "platform",
}


class ConfigError(Exception):
    """配置文件格式或取值错误"""
    pass


@dataclass(frozen=True)
class DiagnosticConfig:
    """探测配置"""
    probe_timeout: float = 30.0          # 单个探测超时（秒）
    ping_count: int = 4                  # ping次数
    traceroute_max_hops: int = 30        # 路由追踪最大跳数
    netstat_limit: int = 5               # 保留的TCP连接数
    max_concurrent_probes: int = 5       # 同时运行的探测进程上限
    platform: str = "auto"               # auto | posix | darwin | windows

    def validate(self) -> "DiagnosticConfig":
        """
        校验配置取值

        Raises:
            ConfigError: 取值不合法
        """
        if self.probe_timeout <= 0:
            raise ConfigError(f"probe_timeout must be positive: {self.probe_timeout}")
        for name in ("ping_count", "traceroute_max_hops", "netstat_limit", "max_concurrent_probes"):
            if getattr(self, name) < 1:
                raise ConfigError(f"{name} must be >= 1: {getattr(self, name)}")
        if self.platform not in PLATFORM_CHOICES:
            raise ConfigError(
                f"platform must be one of {', '.join(PLATFORM_CHOICES)}: {self.platform}"
            )
        return self


def _default_config_path() -> Path:
    """获取默认配置文件路径"""
    package_root = Path(__file__).parent.parent
    return package_root / "data" / "diagnostics.yaml"


def _coerce(name: str, value: Any) -> Any:
    """按字段默认值的类型转换配置值"""
    default = getattr(DiagnosticConfig, name)
    # bool是int的子类，这里不存在布尔字段
    try:
        if isinstance(default, float):
            return float(value)
        if isinstance(default, int):
            return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value for {name}: {value!r}") from e
    return str(value).strip().lower()


def _expand_env(value: Any) -> Any:
    """替换 ${VAR} 形式的环境变量"""
    if isinstance(value, str) and value.startswith('${') and value.endswith('}'):
        return os.getenv(value[2:-1], '')
    return value


def load_diagnostic_config(
    config_path: Optional[str] = None,
    use_env: bool = True
) -> DiagnosticConfig:
    """
    加载诊断配置

    Args:
        config_path: 配置文件路径，如果为None则使用默认路径（不存在时使用默认值）
        use_env: 是否读取环境变量（含.env文件）覆盖配置

    Returns:
        校验后的DiagnosticConfig

    Raises:
        FileNotFoundError: 指定的配置文件不存在
        ConfigError: 配置文件格式错误或取值不合法
    """
    if config_path is None:
        path = _default_config_path()
        explicit = False
    else:
        path = Path(config_path)
        explicit = True

    known = {f.name for f in fields(DiagnosticConfig)}
    values: Dict[str, Any] = {}

    if path.exists():
        try:
            with open(path, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"配置文件格式错误: {path}: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigError(f"配置文件顶层必须是映射: {path}")

        section = config_data.get('diagnostics', config_data) or {}
        if not isinstance(section, dict):
            raise ConfigError(f"diagnostics配置必须是映射: {path}")

        for key, value in section.items():
            if key not in known:
                print(f"[ConfigLoader] 忽略未知配置项: {key}", file=sys.stderr)
                continue
            value = _expand_env(value)
            if value in ('', None):
                continue
            values[key] = _coerce(key, value)
    elif explicit:
        raise FileNotFoundError(f"诊断配置文件不存在: {path}")

    if use_env:
        load_dotenv()
        for env_var, name in ENV_OVERRIDES.items():
            raw = os.getenv(env_var)
            if raw:
                values[name] = _coerce(name, raw)

    return replace(DiagnosticConfig(), **values).validate()
