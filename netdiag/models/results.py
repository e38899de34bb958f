"""
探测执行结果相关数据模型
定义单个探测命令的原始输出和执行结果标记
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class ProbeKind(str, Enum):
    """探测类型枚举"""
    PING = "ping"                        # 回显/可达性测试
    TRACEROUTE = "traceroute"            # 路由追踪
    NETSTAT = "netstat"                  # 活动连接列表
    IPCONFIG = "ipconfig"                # 本机网卡/IP配置
    DNS_LOOKUP = "dns_lookup"            # 域名解析


class ProbeOutcome(str, Enum):
    """单个探测的执行结果标记"""
    SUCCEEDED = "succeeded"              # 退出码0且有输出
    DEGRADED = "degraded"                # 退出码0但无输出
    FAILED = "failed"                    # 非0退出/命令不存在/超时


@dataclass
class RawProbeOutput:
    """
    探测原始输出

    text为空字符串表示探测失败或无输出（统一的降级标记），
    不等同于"未执行"
    """
    kind: ProbeKind                      # 探测类型
    command: List[str]                   # 执行的命令参数列表
    text: str                            # 标准输出（失败时为空字符串）
    outcome: ProbeOutcome                # 执行结果标记
    exit_code: Optional[int] = None      # 退出码（未能启动时为None）
    execution_time: float = 0.0          # 执行耗时（秒）
    error: Optional[str] = None          # 失败原因
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def succeeded(self) -> bool:
        return self.outcome == ProbeOutcome.SUCCEEDED

    def __str__(self) -> str:
        status = "OK" if self.succeeded else self.outcome.value.upper()
        return (f"[{status}] {self.kind.value}: {' '.join(self.command)} "
               f"(exit={self.exit_code}, time={self.execution_time:.2f}s)")

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return {
            "kind": self.kind.value,
            "command": list(self.command),
            "text": self.text,
            "outcome": self.outcome.value,
            "exit_code": self.exit_code,
            "execution_time": self.execution_time,
            "error": self.error,
            "timestamp": self.timestamp.isoformat()
        }
