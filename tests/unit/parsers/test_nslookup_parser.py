"""
Nslookup解析器单元测试
"""
from netdiag.utils.parsers import ParseStatus, WINDOWS_GRAMMAR
from netdiag.utils.parsers.nslookup_parser import parse_nslookup_output


class TestParseNslookupOutput:
    """Nslookup输出解析测试"""

    def test_first_address_is_used(self):
        """测试只使用第一个地址标记（通常是DNS服务器）"""
        stdout = """Server:\t\t127.0.0.53
Address:\t127.0.0.53#53

Non-authoritative answer:
Name:\texample.com
Address: 93.184.216.34
Name:\texample.com
Address: 2606:2800:220:1:248:1893:25c8:1946"""

        result = parse_nslookup_output(stdout)

        assert result.status == ParseStatus.PARSED
        assert result.ip_address == "127.0.0.53#53"
        assert result.addresses == [
            "127.0.0.53#53",
            "93.184.216.34",
            "2606:2800:220:1:248:1893:25c8:1946",
        ]

    def test_single_address(self):
        """测试只有一个地址"""
        result = parse_nslookup_output("Name: host\nAddress: 10.0.2.20")

        assert result.ip_address == "10.0.2.20"

    def test_address_on_next_line(self):
        """测试地址标记和地址之间换行"""
        result = parse_nslookup_output("Name: host\nAddress:\n   1.2.3.4\n")

        assert result.ip_address == "1.2.3.4"
        assert result.status == ParseStatus.PARSED

    def test_no_address_marker(self):
        """测试没有地址标记时返回 N/A"""
        result = parse_nslookup_output("** server can't find example.invalid: NXDOMAIN")

        assert result.ip_address == "N/A"
        assert result.addresses == []
        assert result.status == ParseStatus.UNPARSEABLE

    def test_empty_output(self):
        """测试空输出"""
        result = parse_nslookup_output("")

        assert result.ip_address == "N/A"
        assert result.status == ParseStatus.EMPTY

    def test_windows_addresses_label(self):
        """测试Windows的 Addresses: 标记"""
        stdout = """Server:  router.lan
Address:  192.168.1.1

Name:    example.com
Addresses:  2606:2800:220:1:248:1893:25c8:1946
          93.184.216.34"""

        result = parse_nslookup_output(stdout, WINDOWS_GRAMMAR)

        assert result.ip_address == "192.168.1.1"
        assert result.addresses[1] == "2606:2800:220:1:248:1893:25c8:1946"
