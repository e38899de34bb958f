"""
诊断结果数据模型
定义最终返回给调用方的网络健康汇总结构
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from .results import ProbeKind, ProbeOutcome

# 固定的连接状态值（见 DiagnosticResult.status）
STATUS_CONNECTED = "Connected"
NOT_AVAILABLE = "N/A"


class HealthStatus(str, Enum):
    """由各探测结果汇总得出的整体健康状态"""
    HEALTHY = "healthy"                  # 全部探测成功
    DEGRADED = "degraded"                # 部分探测成功
    UNREACHABLE = "unreachable"          # 没有任何探测成功


@dataclass
class PingSample:
    """单次Ping往返时间样本"""
    sequence_label: str                  # 合成序号 "1".."N"，非ping自身的icmp_seq
    round_trip_ms: float                 # 往返时间（毫秒）

    def to_dict(self) -> Dict[str, Any]:
        """转换为图表序列格式"""
        return {"time": self.sequence_label, "value": self.round_trip_ms}


@dataclass(frozen=True)
class ConnectionQuality:
    """连接质量评级"""
    label: str                           # "Excellent" | "Good" | "Average" | "Poor"
    tier: int                            # 1(最好) - 4(最差)
    bar_fraction: float                  # 展示用的进度条比例

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "tier": self.tier, "bar_fraction": self.bar_fraction}


@dataclass
class DiagnosticResult:
    """
    网络诊断汇总结果

    status固定为"Connected"，不反映探测成败；
    真实的探测健康情况见health和probe_outcomes
    """
    target: str                          # 探测目标
    latency_label: str                   # "Nms" 或 "N/A"
    packet_loss_label: str               # "N%"
    ping_series: List[PingSample]        # Ping样本序列
    route: List[str]                     # 路由跳点（每行一个）
    netstat: List[str]                   # TCP连接（最多5条）
    ip_address: str                      # 解析出的地址或 "N/A"
    ipconfig: str = NOT_AVAILABLE        # 本机IP配置原始输出
    status: str = STATUS_CONNECTED
    packet_loss_reported: bool = False   # 输出中是否存在丢包率统计
    connection_quality: Optional[ConnectionQuality] = None
    health: HealthStatus = HealthStatus.UNREACHABLE
    probe_outcomes: Dict[ProbeKind, ProbeOutcome] = field(default_factory=dict)
    total_time: float = 0.0              # 总耗时（秒）
    created_at: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return (f"诊断[{self.target}] - {self.status} ({self.health.value})\n"
               f"延迟: {self.latency_label}  丢包: {self.packet_loss_label}\n"
               f"IP地址: {self.ip_address}  跳数: {len(self.route)}")

    def failed_probes(self) -> List[ProbeKind]:
        """返回未成功的探测类型"""
        return [
            kind for kind, outcome in self.probe_outcomes.items()
            if outcome != ProbeOutcome.SUCCEEDED
        ]

    def to_dict(self) -> Dict[str, Any]:
        """
        转换为字典格式

        保留原有JSON字段名（ping/route/status/latency/packetLoss/
        netstat/ipconfig/ipAddress），其余字段为附加信息
        """
        return {
            "target": self.target,
            "ping": [sample.to_dict() for sample in self.ping_series],
            "route": list(self.route),
            "status": self.status,
            "latency": self.latency_label,
            "packetLoss": self.packet_loss_label,
            "packetLossReported": self.packet_loss_reported,
            "netstat": list(self.netstat),
            "ipconfig": self.ipconfig,
            "ipAddress": self.ip_address,
            "connectionQuality": (
                self.connection_quality.to_dict() if self.connection_quality else None
            ),
            "health": self.health.value,
            "probes": {kind.value: outcome.value for kind, outcome in self.probe_outcomes.items()},
            "totalTime": self.total_time,
            "createdAt": self.created_at.isoformat()
        }

    def to_markdown(self) -> str:
        """
        生成Markdown格式的报告

        Returns:
            完整的Markdown报告字符串
        """
        quality = self.connection_quality.label if self.connection_quality else NOT_AVAILABLE

        md = f"""# 网络诊断报告

**目标**: {self.target}
**创建时间**: {self.created_at.strftime('%Y-%m-%d %H:%M:%S')}
**诊断耗时**: {self.total_time:.1f}秒
**状态**: {self.status} ({self.health.value})

---

## 概要

| 指标 | 值 |
|---|---|
| 延迟 | {self.latency_label} |
| 丢包率 | {self.packet_loss_label} |
| 连接质量 | {quality} |
| IP地址 | {self.ip_address} |

---

## Ping样本

"""
        if self.ping_series:
            for sample in self.ping_series:
                md += f"- #{sample.sequence_label}: {sample.round_trip_ms}ms\n"
        else:
            md += "无数据\n"

        md += "\n---\n\n## 路由\n\n"
        if self.route:
            for i, hop in enumerate(self.route, 1):
                md += f"{i}. `{hop}`\n"
        else:
            md += "无数据\n"

        md += "\n---\n\n## TCP连接\n\n"
        if self.netstat:
            for line in self.netstat:
                md += f"- `{line}`\n"
        else:
            md += "无数据\n"

        md += "\n---\n\n## 探测结果\n\n"
        for kind, outcome in self.probe_outcomes.items():
            md += f"- {kind.value}: {outcome.value}\n"

        return md
