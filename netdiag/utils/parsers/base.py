"""
解析器通用数据结构

定义输出语法（按平台区分）和所有解析器共用的结果结构
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Pattern

from ...models.report import NOT_AVAILABLE, PingSample


class ParseStatus(str, Enum):
    """解析结果标记"""
    PARSED = "parsed"                  # 至少匹配到一行
    EMPTY = "empty"                    # 原始输出为空（探测失败或无输出）
    UNPARSEABLE = "unparseable"        # 有输出但没有任何匹配行


def status_for(text: str, matched: int) -> ParseStatus:
    """根据原始输出和匹配数量判断解析状态"""
    if matched:
        return ParseStatus.PARSED
    if not text.strip():
        return ParseStatus.EMPTY
    return ParseStatus.UNPARSEABLE


@dataclass(frozen=True)
class OutputGrammar:
    """
    探测输出语法

    每个平台的ping/traceroute/netstat/nslookup输出措辞不同，
    解析器只依赖这里的正则，不在解析逻辑中判断平台
    """
    name: str
    rtt_marker: Pattern[str]           # 往返时间标记（行过滤）
    rtt_value: Pattern[str]            # 标记后的第一个数值
    packet_loss: Pattern[str]          # 丢包率
    hop_line: Pattern[str]             # 路由跳点行（以跳数开头）
    tcp_line: Pattern[str]             # TCP连接行
    address: Pattern[str]              # 地址标记后的值


# Linux/macOS: "64 bytes from ...: icmp_seq=1 ttl=64 time=0.123 ms"
#              "4 packets transmitted, 4 received, 0% packet loss"
POSIX_GRAMMAR = OutputGrammar(
    name="posix",
    rtt_marker=re.compile(r"time="),
    rtt_value=re.compile(r"time=(\d+(?:\.\d+)?)"),
    packet_loss=re.compile(r"(\d+(?:\.\d+)?)% packet loss"),
    hop_line=re.compile(r"^\s*\d"),
    tcp_line=re.compile(r"^tcp"),
    address=re.compile(r"Address:\s*(\S+)"),
)

# Windows: "Reply from 1.1.1.1: bytes=32 time=12ms TTL=57" / "time<1ms"
#          "Packets: Sent = 4, Received = 4, Lost = 0 (0% loss),"
#          "  TCP    10.0.0.5:52144   20.42.65.92:443   ESTABLISHED"
WINDOWS_GRAMMAR = OutputGrammar(
    name="windows",
    rtt_marker=re.compile(r"time[=<]"),
    rtt_value=re.compile(r"time[=<](\d+(?:\.\d+)?)"),
    packet_loss=re.compile(r"\((\d+(?:\.\d+)?)% loss\)"),
    hop_line=re.compile(r"^\s*\d"),
    tcp_line=re.compile(r"^\s*TCP\b"),
    address=re.compile(r"Address(?:es)?:\s*(\S+)"),
)


@dataclass
class PingParseResult:
    """Ping输出解析结果"""
    samples: List[PingSample]
    status: ParseStatus

    @property
    def round_trip_times(self) -> List[float]:
        return [sample.round_trip_ms for sample in self.samples]


@dataclass
class RouteParseResult:
    """Traceroute输出解析结果"""
    hops: List[str]                    # 每跳一行（已去除首尾空白）
    status: ParseStatus


@dataclass
class NetstatParseResult:
    """Netstat输出解析结果"""
    connections: List[str]            # TCP连接行（已截断）
    status: ParseStatus


@dataclass
class DnsLookupResult:
    """域名解析结果"""
    addresses: List[str]               # 按出现顺序的全部地址
    status: ParseStatus

    @property
    def ip_address(self) -> str:
        """第一个匹配的地址，没有则为 "N/A" """
        return self.addresses[0] if self.addresses else NOT_AVAILABLE
