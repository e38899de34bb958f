"""
外部环境集成包

提供探测执行器、平台探测配置和配置加载
"""
from .config_loader import ConfigError, DiagnosticConfig, load_diagnostic_config
from .platform_profile import (
    DarwinProfile,
    PlatformProfile,
    PosixProfile,
    WindowsProfile,
    detect_platform_name,
    get_profile,
)
from .probe_runner import FixtureProbeRunner, ProbeExecutionError, ProbeRunner

__all__ = [
    "ProbeRunner",
    "FixtureProbeRunner",
    "ProbeExecutionError",
    "PlatformProfile",
    "PosixProfile",
    "DarwinProfile",
    "WindowsProfile",
    "detect_platform_name",
    "get_profile",
    "DiagnosticConfig",
    "ConfigError",
    "load_diagnostic_config",
]
