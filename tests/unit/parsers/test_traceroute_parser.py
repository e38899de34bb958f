"""
Traceroute解析器单元测试
"""
from netdiag.utils.parsers import ParseStatus, WINDOWS_GRAMMAR
from netdiag.utils.parsers.traceroute_parser import parse_traceroute_output


class TestParseTracerouteOutput:
    """Traceroute输出解析测试"""

    def test_traceroute_complete(self):
        """测试完整路由，标题行被跳过"""
        stdout = """traceroute to 10.0.2.20 (10.0.2.20), 30 hops max, 60 byte packets
 1  10.0.1.1 (10.0.1.1)  0.512 ms  0.389 ms  0.301 ms
 2  10.10.1.1 (10.10.1.1)  1.234 ms  1.123 ms  1.089 ms
 3  10.0.2.1 (10.0.2.1)  1.567 ms  1.456 ms  1.389 ms
 4  10.0.2.20 (10.0.2.20)  1.789 ms  1.678 ms  1.567 ms"""

        result = parse_traceroute_output(stdout)

        assert result.status == ParseStatus.PARSED
        assert result.hops == [
            "1  10.0.1.1 (10.0.1.1)  0.512 ms  0.389 ms  0.301 ms",
            "2  10.10.1.1 (10.10.1.1)  1.234 ms  1.123 ms  1.089 ms",
            "3  10.0.2.1 (10.0.2.1)  1.567 ms  1.456 ms  1.389 ms",
            "4  10.0.2.20 (10.0.2.20)  1.789 ms  1.678 ms  1.567 ms",
        ]

    def test_timeout_hops_are_kept(self):
        """测试超时的跳（* * *）照常保留"""
        stdout = """traceroute to 10.0.2.20 (10.0.2.20), 30 hops max, 60 byte packets
 1  10.0.1.1 (10.0.1.1)  0.512 ms  0.389 ms  0.301 ms
 2  * * *
 3  * * *"""

        result = parse_traceroute_output(stdout)

        assert result.hops == ["1  10.0.1.1 (10.0.1.1)  0.512 ms  0.389 ms  0.301 ms", "2  * * *", "3  * * *"]

    def test_order_is_preserved(self):
        """测试保持输入顺序（不按跳数排序）"""
        stdout = " 10  c\n 2  b\nnoise\n 1  a"

        result = parse_traceroute_output(stdout)

        assert result.hops == ["10  c", "2  b", "1  a"]

    def test_only_digit_leading_lines(self):
        """测试只保留去除前导空白后以数字开头的行"""
        stdout = "traceroute to x\n   7  host\n\tnot a hop 8\n*  * *\n12 last"

        result = parse_traceroute_output(stdout)

        assert result.hops == ["7  host", "12 last"]

    def test_windows_tracert(self):
        """测试Windows tracert输出"""
        stdout = """
Tracing route to example.com [93.184.216.34]
over a maximum of 30 hops:

  1    <1 ms    <1 ms    <1 ms  192.168.1.1
  2     8 ms     7 ms     8 ms  10.10.1.1

Trace complete."""

        result = parse_traceroute_output(stdout, WINDOWS_GRAMMAR)

        assert len(result.hops) == 2
        assert result.hops[0].startswith("1")
        assert result.hops[1].endswith("10.10.1.1")

    def test_empty_and_unparseable(self):
        """测试空输出和无匹配行"""
        assert parse_traceroute_output("").status == ParseStatus.EMPTY
        result = parse_traceroute_output("traceroute: unknown host example.invalid")
        assert result.hops == []
        assert result.status == ParseStatus.UNPARSEABLE
