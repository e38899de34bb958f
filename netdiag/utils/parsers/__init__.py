"""
探测输出解析器包

提供4个解析器和平台输出语法的导入
"""
from .base import (
    POSIX_GRAMMAR,
    WINDOWS_GRAMMAR,
    DnsLookupResult,
    NetstatParseResult,
    OutputGrammar,
    ParseStatus,
    PingParseResult,
    RouteParseResult,
)
from .netstat_parser import DEFAULT_NETSTAT_LIMIT, parse_netstat_output
from .nslookup_parser import parse_nslookup_output
from .ping_parser import parse_ping_output
from .traceroute_parser import parse_traceroute_output

__all__ = [
    # 数据结构
    "OutputGrammar",
    "ParseStatus",
    "PingParseResult",
    "RouteParseResult",
    "NetstatParseResult",
    "DnsLookupResult",
    "POSIX_GRAMMAR",
    "WINDOWS_GRAMMAR",
    "DEFAULT_NETSTAT_LIMIT",
    # 解析器函数
    "parse_ping_output",
    "parse_traceroute_output",
    "parse_netstat_output",
    "parse_nslookup_output",
]
