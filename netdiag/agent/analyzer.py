"""
指标分析器

从解析后的Ping数据计算平均延迟、丢包率、连接质量，
并根据各探测结果汇总整体健康状态
"""
import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional, Sequence

from ..models.report import NOT_AVAILABLE, ConnectionQuality, HealthStatus
from ..models.results import ProbeKind, ProbeOutcome
from ..utils.parsers import POSIX_GRAMMAR, OutputGrammar

# 连接质量分档：(上限(含), 标签, 档位, 进度条比例)，按顺序匹配
QUALITY_TIERS = (
    (20.0, "Excellent", 1, 0.9),
    (50.0, "Good", 2, 0.7),
    (100.0, "Average", 3, 0.5),
)
POOR_QUALITY = ConnectionQuality(label="Poor", tier=4, bar_fraction=0.3)

NO_PACKET_LOSS = "0%"

_LEADING_DIGITS = re.compile(r"(\d+)")


def round_half_away_from_zero(value: float) -> int:
    """四舍五入（.5远离0），不使用Python内置round的银行家舍入"""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def derive_latency(round_trip_times: Sequence[float]) -> str:
    """
    计算平均延迟标签

    Args:
        round_trip_times: 解析出的往返时间（可能为空）

    Returns:
        "{四舍五入后的平均值}ms"，无数据或平均值溢出为inf时为 "N/A"
    """
    if not round_trip_times:
        return NOT_AVAILABLE
    mean = sum(round_trip_times) / len(round_trip_times)
    # 超长数字串会被float解析为inf，Decimal无法对其取整
    if not math.isfinite(mean):
        return NOT_AVAILABLE
    return f"{round_half_away_from_zero(mean)}ms"


def extract_packet_loss(ping_text: str, grammar: OutputGrammar = POSIX_GRAMMAR) -> Optional[str]:
    """提取丢包率数值，输出中没有丢包统计时返回None"""
    match = grammar.packet_loss.search(ping_text)
    return match.group(1) if match else None


def derive_packet_loss(ping_text: str, grammar: OutputGrammar = POSIX_GRAMMAR) -> str:
    """
    计算丢包率标签

    Returns:
        "{N}%"；没有匹配时为 "0%"（与真实的0%丢包无法区分，
        需要区分时使用 extract_packet_loss）
    """
    loss = extract_packet_loss(ping_text, grammar)
    return f"{loss}%" if loss is not None else NO_PACKET_LOSS


def parse_latency_label(latency_label: str) -> int:
    """从延迟标签中取出第一段数字，非数字标签（如 "N/A"）返回0"""
    match = _LEADING_DIGITS.search(latency_label or "")
    return int(match.group(1)) if match else 0


def classify_connection_quality(latency_ms: float) -> ConnectionQuality:
    """
    按延迟划分连接质量

    边界值归入延迟更低的一档：20 -> Excellent，50 -> Good，100 -> Average
    """
    for upper, label, tier, bar_fraction in QUALITY_TIERS:
        if latency_ms <= upper:
            return ConnectionQuality(label=label, tier=tier, bar_fraction=bar_fraction)
    return POOR_QUALITY


def quality_from_latency_label(latency_label: str) -> ConnectionQuality:
    """从延迟标签推导连接质量（"N/A" 视为0ms）"""
    return classify_connection_quality(parse_latency_label(latency_label))


def derive_health(outcomes: Mapping[ProbeKind, ProbeOutcome]) -> HealthStatus:
    """
    汇总整体健康状态

    全部成功为HEALTHY，部分成功为DEGRADED，全部未成功为UNREACHABLE
    """
    values = list(outcomes.values())
    succeeded = sum(1 for outcome in values if outcome == ProbeOutcome.SUCCEEDED)

    if values and succeeded == len(values):
        return HealthStatus.HEALTHY
    if succeeded:
        return HealthStatus.DEGRADED
    return HealthStatus.UNREACHABLE
