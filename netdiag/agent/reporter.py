"""
报告生成器

生成Markdown格式的网络诊断报告
"""
import re
from pathlib import Path

from ..models.report import NOT_AVAILABLE, DiagnosticResult

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class ReportGenerator:
    """报告生成器"""

    def __init__(self, output_dir: str = "runtime/reports"):
        """
        初始化报告生成器

        Args:
            output_dir: 报告输出目录
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def generate(self, result: DiagnosticResult) -> str:
        """
        生成报告文件

        Args:
            result: 诊断结果

        Returns:
            生成的报告文件路径
        """
        markdown_content = result.to_markdown()

        # IPv6地址中的":"等字符不能出现在文件名里
        safe_target = _UNSAFE_FILENAME_CHARS.sub("_", result.target)
        timestamp = result.created_at.strftime("%Y%m%d%H%M%S")
        output_path = self.output_dir / f"diagnostic_report_{safe_target}_{timestamp}.md"

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(markdown_content)

        return str(output_path)

    def generate_summary(self, result: DiagnosticResult) -> str:
        """
        生成简要摘要（用于终端输出）

        Args:
            result: 诊断结果

        Returns:
            摘要文本
        """
        quality = result.connection_quality.label if result.connection_quality else NOT_AVAILABLE
        failed = ", ".join(kind.value for kind in result.failed_probes()) or "无"

        summary = f"""
{'='*60}
网络诊断报告 - {result.target}
{'='*60}

状态: {result.status} ({result.health.value})
延迟: {result.latency_label}
丢包率: {result.packet_loss_label}
连接质量: {quality}
IP地址: {result.ip_address}
路由跳数: {len(result.route)}
未成功的探测: {failed}
总耗时: {result.total_time:.1f}秒
"""
        summary += "=" * 60

        return summary
