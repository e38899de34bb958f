"""
平台探测配置

不同操作系统的探测命令和输出措辞不同，
每个平台一个Profile，同时提供命令参数和对应的输出语法
"""
import platform
from typing import Dict, List, Optional

from ..models.results import ProbeKind
from ..utils.parsers import POSIX_GRAMMAR, WINDOWS_GRAMMAR, OutputGrammar
from .config_loader import DiagnosticConfig


class PlatformProfile:
    """
    平台探测配置基类

    子类只需覆盖各探测的命令构建方法和grammar
    """

    name = "base"
    grammar: OutputGrammar = POSIX_GRAMMAR

    def ping_command(self, target: str, config: DiagnosticConfig) -> List[str]:
        raise NotImplementedError

    def traceroute_command(self, target: str, config: DiagnosticConfig) -> List[str]:
        raise NotImplementedError

    def netstat_command(self, config: DiagnosticConfig) -> List[str]:
        return ["netstat", "-n"]

    def ipconfig_command(self, config: DiagnosticConfig) -> List[str]:
        raise NotImplementedError

    def nslookup_command(self, target: str, config: DiagnosticConfig) -> List[str]:
        return ["nslookup", target]

    def build_commands(self, target: str, config: DiagnosticConfig) -> Dict[ProbeKind, List[str]]:
        """
        构建五个探测的命令参数

        Args:
            target: 已校验的探测目标
            config: 探测配置

        Returns:
            探测类型 -> 命令参数列表（按 ping/traceroute/netstat/ipconfig/dns_lookup 顺序）
        """
        return {
            ProbeKind.PING: self.ping_command(target, config),
            ProbeKind.TRACEROUTE: self.traceroute_command(target, config),
            ProbeKind.NETSTAT: self.netstat_command(config),
            ProbeKind.IPCONFIG: self.ipconfig_command(config),
            ProbeKind.DNS_LOOKUP: self.nslookup_command(target, config),
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class PosixProfile(PlatformProfile):
    """Linux（iputils ping / traceroute / iproute2）"""

    name = "posix"
    grammar = POSIX_GRAMMAR

    def ping_command(self, target: str, config: DiagnosticConfig) -> List[str]:
        # 不带 -c 时 Linux ping 不会退出
        return ["ping", "-c", str(config.ping_count), target]

    def traceroute_command(self, target: str, config: DiagnosticConfig) -> List[str]:
        return ["traceroute", "-m", str(config.traceroute_max_hops), target]

    def ipconfig_command(self, config: DiagnosticConfig) -> List[str]:
        return ["ip", "addr", "show"]


class DarwinProfile(PosixProfile):
    """macOS，输出语法与Linux相同，没有iproute2"""

    name = "darwin"

    def ipconfig_command(self, config: DiagnosticConfig) -> List[str]:
        return ["ifconfig"]


class WindowsProfile(PlatformProfile):
    """Windows（ping / tracert / ipconfig）"""

    name = "windows"
    grammar = WINDOWS_GRAMMAR

    def ping_command(self, target: str, config: DiagnosticConfig) -> List[str]:
        return ["ping", "-n", str(config.ping_count), target]

    def traceroute_command(self, target: str, config: DiagnosticConfig) -> List[str]:
        return ["tracert", "-h", str(config.traceroute_max_hops), target]

    def ipconfig_command(self, config: DiagnosticConfig) -> List[str]:
        return ["ipconfig"]


PROFILES = {
    "posix": PosixProfile,
    "darwin": DarwinProfile,
    "windows": WindowsProfile,
}


def detect_platform_name(system: Optional[str] = None) -> str:
    """根据 platform.system() 判断平台名称"""
    system = (system or platform.system()).lower()
    if system == "windows":
        return "windows"
    if system == "darwin":
        return "darwin"
    return "posix"


def get_profile(name: str = "auto") -> PlatformProfile:
    """
    获取平台探测配置

    Args:
        name: auto | posix | darwin | windows

    Returns:
        对应的PlatformProfile实例

    Raises:
        ValueError: 未知平台名称
    """
    if name == "auto":
        name = detect_platform_name()
    try:
        return PROFILES[name]()
    except KeyError:
        raise ValueError(f"Unknown platform: {name}") from None
