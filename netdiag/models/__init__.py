"""
数据模型包
提供所有核心数据结构的导入
"""
from .report import (
    NOT_AVAILABLE,
    STATUS_CONNECTED,
    ConnectionQuality,
    DiagnosticResult,
    HealthStatus,
    PingSample,
)
from .results import ProbeKind, ProbeOutcome, RawProbeOutput
from .task import (
    DiagnosticError,
    DiagnosticUnavailableError,
    InvalidTargetError,
    ProbeRequest,
)

__all__ = [
    # 枚举类型
    "ProbeKind",
    "ProbeOutcome",
    "HealthStatus",
    # 请求相关
    "ProbeRequest",
    "DiagnosticError",
    "InvalidTargetError",
    "DiagnosticUnavailableError",
    # 结果相关
    "RawProbeOutput",
    "PingSample",
    "ConnectionQuality",
    "DiagnosticResult",
    "STATUS_CONNECTED",
    "NOT_AVAILABLE",
]
