"""
Ping输出解析器

提取每个回复行的往返时间，生成按出现顺序编号的样本序列
"""
from typing import List

from ...models.report import PingSample
from .base import POSIX_GRAMMAR, OutputGrammar, PingParseResult, status_for


def parse_ping_output(text: str, grammar: OutputGrammar = POSIX_GRAMMAR) -> PingParseResult:
    """
    解析ping命令输出

    Args:
        text: ping原始输出（失败时为空字符串）
        grammar: 平台输出语法

    Returns:
        PingParseResult: 往返时间样本序列

    示例输入:
        PING 10.0.2.20 (10.0.2.20) 56(84) bytes of data.
        64 bytes from 10.0.2.20: icmp_seq=1 ttl=64 time=0.123 ms
        64 bytes from 10.0.2.20: icmp_seq=2 ttl=64 time=0.089 ms

    解析逻辑:
        1. 只保留包含往返时间标记的行
        2. 提取标记后的第一个数值，无法提取时记为0（不丢弃该行）
        3. 第N个保留行的标签为"N"，与ping自身的icmp_seq无关
    """
    samples: List[PingSample] = []

    for line in text.splitlines():
        if not grammar.rtt_marker.search(line):
            continue

        match = grammar.rtt_value.search(line)
        value = float(match.group(1)) if match else 0.0
        samples.append(PingSample(
            sequence_label=str(len(samples) + 1),
            round_trip_ms=value
        ))

    return PingParseResult(samples=samples, status=status_for(text, len(samples)))
