"""
netdiag - 网络健康诊断

并发运行 ping / traceroute / netstat / ipconfig / nslookup，
解析输出并汇总为一个诊断结果
"""
from .agent import DiagnosticCollector
from .models import DiagnosticResult, InvalidTargetError, ProbeRequest

__version__ = "1.0.0"

__all__ = [
    "DiagnosticCollector",
    "DiagnosticResult",
    "InvalidTargetError",
    "ProbeRequest",
]
