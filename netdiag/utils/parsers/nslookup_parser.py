"""
Nslookup输出解析器

提取地址标记后的值
"""
from .base import POSIX_GRAMMAR, DnsLookupResult, OutputGrammar, status_for


def parse_nslookup_output(text: str, grammar: OutputGrammar = POSIX_GRAMMAR) -> DnsLookupResult:
    """
    解析nslookup输出

    Args:
        text: nslookup原始输出
        grammar: 平台输出语法

    Returns:
        DnsLookupResult: 全部地址（ip_address取第一个）

    示例输入:
        Server:         127.0.0.53
        Address:        127.0.0.53#53

        Non-authoritative answer:
        Name:   example.com
        Address: 93.184.216.34

    注意: 第一个地址标记通常属于DNS服务器本身，
    ip_address沿用"第一个匹配"的规则，完整列表见addresses
    """
    # 在整段文本上匹配，地址标记后的空白可以跨行（"Address:\n   1.2.3.4"）
    addresses = [match.group(1) for match in grammar.address.finditer(text)]

    return DnsLookupResult(addresses=addresses, status=status_for(text, len(addresses)))
