"""
Traceroute输出解析器

按原顺序提取每一跳的行，不拆分主机名和RTT列
"""
from .base import POSIX_GRAMMAR, OutputGrammar, RouteParseResult, status_for


def parse_traceroute_output(text: str, grammar: OutputGrammar = POSIX_GRAMMAR) -> RouteParseResult:
    """
    解析traceroute/tracert输出

    Args:
        text: traceroute原始输出
        grammar: 平台输出语法

    Returns:
        RouteParseResult: 跳点行列表

    示例输入:
        traceroute to 10.0.2.20 (10.0.2.20), 30 hops max, 60 byte packets
         1  10.0.1.1 (10.0.1.1)  0.512 ms  0.389 ms  0.301 ms
         2  * * *

    标题行不以数字开头，会被跳过；超时的跳（* * *）照常保留
    """
    hops = [
        line.strip()
        for line in text.splitlines()
        if grammar.hop_line.match(line)
    ]

    return RouteParseResult(hops=hops, status=status_for(text, len(hops)))
