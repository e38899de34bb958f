"""
报告生成器单元测试
"""
from datetime import datetime

from netdiag.agent.reporter import ReportGenerator
from netdiag.models.report import ConnectionQuality, DiagnosticResult, HealthStatus, PingSample
from netdiag.models.results import ProbeKind, ProbeOutcome


def make_result(target="example.com"):
    return DiagnosticResult(
        target=target,
        latency_label="13ms",
        packet_loss_label="0%",
        ping_series=[PingSample("1", 12.5), PingSample("2", 13.5)],
        route=[" 1  _gateway (192.168.1.1)  0.512 ms"],
        netstat=[],
        ip_address="93.184.216.34",
        packet_loss_reported=True,
        connection_quality=ConnectionQuality("Excellent", 1, 0.9),
        health=HealthStatus.DEGRADED,
        probe_outcomes={
            ProbeKind.PING: ProbeOutcome.SUCCEEDED,
            ProbeKind.NETSTAT: ProbeOutcome.DEGRADED,
        },
        total_time=1.5,
        created_at=datetime(2024, 5, 1, 8, 30, 0)
    )


class TestReportGenerator:
    """Markdown报告测试"""

    def test_generate_writes_file(self, tmp_path):
        """测试生成报告文件"""
        generator = ReportGenerator(str(tmp_path / "reports"))

        path = generator.generate(make_result())

        assert path.endswith("diagnostic_report_example.com_20240501083000.md")
        content = (tmp_path / "reports" / "diagnostic_report_example.com_20240501083000.md").read_text(encoding="utf-8")
        assert "# 网络诊断报告" in content
        assert "| 延迟 | 13ms |" in content
        assert "| 连接质量 | Excellent |" in content
        assert "- #1: 12.5ms" in content
        assert "- netstat: degraded" in content

    def test_unsafe_target_in_filename(self, tmp_path):
        """测试IPv6地址中的冒号被替换"""
        generator = ReportGenerator(str(tmp_path))

        path = generator.generate(make_result("2001:db8::1"))

        assert "diagnostic_report_2001_db8__1_" in path

    def test_generate_summary(self, tmp_path):
        """测试终端摘要"""
        summary = ReportGenerator(str(tmp_path)).generate_summary(make_result())

        assert "网络诊断报告 - example.com" in summary
        assert "状态: Connected (degraded)" in summary
        assert "连接质量: Excellent" in summary
        assert "未成功的探测: netstat" in summary
        assert "总耗时: 1.5秒" in summary
