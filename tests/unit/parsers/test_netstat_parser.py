"""
Netstat解析器单元测试
"""
from netdiag.utils.parsers import ParseStatus, WINDOWS_GRAMMAR
from netdiag.utils.parsers.netstat_parser import parse_netstat_output


class TestParseNetstatOutput:
    """Netstat输出解析测试"""

    def test_tcp_lines_only(self):
        """测试只保留TCP行"""
        stdout = """Active Internet connections (w/o servers)
Proto Recv-Q Send-Q Local Address           Foreign Address         State
tcp        0      0 10.0.0.5:52144          20.42.65.92:443         ESTABLISHED
udp        0      0 10.0.0.5:68             10.0.0.1:67             ESTABLISHED
tcp        0      0 10.0.0.5:41822          34.107.243.93:443       TIME_WAIT"""

        result = parse_netstat_output(stdout)

        assert result.status == ParseStatus.PARSED
        assert result.connections == [
            "tcp        0      0 10.0.0.5:52144          20.42.65.92:443         ESTABLISHED",
            "tcp        0      0 10.0.0.5:41822          34.107.243.93:443       TIME_WAIT",
        ]

    def test_truncated_to_first_five(self):
        """测试最多保留前5条，按首次出现顺序"""
        stdout = "\n".join(f"tcp 0 0 10.0.0.5:{5000 + i} 1.1.1.1:443 ESTABLISHED" for i in range(8))

        result = parse_netstat_output(stdout)

        assert len(result.connections) == 5
        assert [line.split()[3] for line in result.connections] == [
            "10.0.0.5:5000", "10.0.0.5:5001", "10.0.0.5:5002", "10.0.0.5:5003", "10.0.0.5:5004",
        ]

    def test_custom_limit(self):
        """测试自定义条数上限"""
        stdout = "tcp a\ntcp b\ntcp c"

        assert parse_netstat_output(stdout, limit=2).connections == ["tcp a", "tcp b"]

    def test_indented_tcp_is_not_posix_match(self):
        """测试posix语法要求行首就是tcp"""
        stdout = "  tcp 0 0 a b ESTABLISHED"

        result = parse_netstat_output(stdout)

        assert result.connections == []
        assert result.status == ParseStatus.UNPARSEABLE

    def test_windows_netstat(self):
        """测试Windows netstat -n输出（行首缩进、大写TCP）"""
        stdout = """
Active Connections

  Proto  Local Address          Foreign Address        State
  TCP    192.168.1.20:52144     140.82.112.26:443      ESTABLISHED
  UDP    0.0.0.0:5353           *:*
  TCP    192.168.1.20:52150     93.184.216.34:443      ESTABLISHED"""

        result = parse_netstat_output(stdout, WINDOWS_GRAMMAR)

        assert result.connections == [
            "TCP    192.168.1.20:52144     140.82.112.26:443      ESTABLISHED",
            "TCP    192.168.1.20:52150     93.184.216.34:443      ESTABLISHED",
        ]

    def test_empty_output(self):
        """测试空输出"""
        result = parse_netstat_output("")

        assert result.connections == []
        assert result.status == ParseStatus.EMPTY
