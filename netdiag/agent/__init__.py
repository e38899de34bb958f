"""
诊断核心模块

提供探测编排、指标分析和报告生成功能
"""
from .analyzer import (
    classify_connection_quality,
    derive_health,
    derive_latency,
    derive_packet_loss,
    extract_packet_loss,
    parse_latency_label,
    quality_from_latency_label,
    round_half_away_from_zero,
)
from .collector import DiagnosticCollector
from .reporter import ReportGenerator

__all__ = [
    "DiagnosticCollector",
    "ReportGenerator",
    "derive_latency",
    "derive_packet_loss",
    "extract_packet_loss",
    "parse_latency_label",
    "classify_connection_quality",
    "quality_from_latency_label",
    "derive_health",
    "round_half_away_from_zero",
]
