"""
Netstat输出解析器

提取TCP连接行，只保留最先出现的若干条
"""
from typing import List

from .base import POSIX_GRAMMAR, NetstatParseResult, OutputGrammar, status_for

DEFAULT_NETSTAT_LIMIT = 5


def parse_netstat_output(
    text: str,
    grammar: OutputGrammar = POSIX_GRAMMAR,
    limit: int = DEFAULT_NETSTAT_LIMIT
) -> NetstatParseResult:
    """
    解析netstat -n输出

    Args:
        text: netstat原始输出
        grammar: 平台输出语法
        limit: 最多保留的连接数

    Returns:
        NetstatParseResult: TCP连接行（按首次出现顺序，不排序）

    示例输入:
        Active Internet connections (w/o servers)
        Proto Recv-Q Send-Q Local Address           Foreign Address         State
        tcp        0      0 10.0.0.5:52144          20.42.65.92:443         ESTABLISHED
        udp        0      0 10.0.0.5:68             10.0.0.1:67             ESTABLISHED
    """
    connections: List[str] = []

    for line in text.splitlines():
        if len(connections) >= limit:
            break
        if grammar.tcp_line.match(line):
            connections.append(line.strip())

    return NetstatParseResult(connections=connections, status=status_for(text, len(connections)))
