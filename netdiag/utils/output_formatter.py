"""
诊断结果格式化器

使用rich在终端展示诊断结果，支持verbose和默认两种模式
"""
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..models.report import DiagnosticResult
from ..models.results import ProbeOutcome

BAR_WIDTH = 30

# 连接质量档位 -> 颜色
TIER_COLORS = {1: "green", 2: "yellow", 3: "dark_orange", 4: "red"}

OUTCOME_COLORS = {
    ProbeOutcome.SUCCEEDED: "green",
    ProbeOutcome.DEGRADED: "yellow",
    ProbeOutcome.FAILED: "red",
}


class ResultFormatter:
    """诊断结果格式化器"""

    def __init__(self, verbose: bool = False, console: Console = None):
        """
        初始化格式化器

        Args:
            verbose: 是否启用详细模式（显示ipconfig原始输出和各探测结果）
            console: 输出使用的Console，默认新建
        """
        self.console = console or Console(emoji=False, legacy_windows=False)
        self.verbose = verbose

    def render(self, result: DiagnosticResult):
        """输出完整诊断结果"""
        self._print_summary(result)
        self._print_quality(result)
        self._print_route(result)
        self._print_netstat(result)

        if self.verbose:
            self._print_probe_outcomes(result)
            self._print_ipconfig(result)

    def _print_summary(self, result: DiagnosticResult):
        """打印技术细节摘要"""
        lines = [
            f"Status: {result.status} [dim]({result.health.value})[/dim]",
            f"Latency: {result.latency_label}",
            f"Packet Loss: {result.packet_loss_label}",
            f"IP Address: {escape(result.ip_address)}",
        ]
        if result.ping_series:
            samples = ", ".join(
                f"#{s.sequence_label}={s.round_trip_ms:g}ms" for s in result.ping_series
            )
            lines.append(f"Ping: {samples}")

        self.console.print(Panel(
            "\n".join(lines),
            title=f"Technical Details - {escape(result.target)}",
            border_style="cyan"
        ))

        failed = result.failed_probes()
        if failed:
            names = ", ".join(kind.value for kind in failed)
            self.console.print(f"[yellow]未成功的探测: {names}[/yellow]")

    def _print_quality(self, result: DiagnosticResult):
        """打印连接质量进度条"""
        quality = result.connection_quality
        if quality is None:
            return

        color = TIER_COLORS.get(quality.tier, "white")
        filled = int(round(quality.bar_fraction * BAR_WIDTH))
        bar = "█" * filled + "░" * (BAR_WIDTH - filled)
        self.console.print(
            f"\nConnection Speed  [{color}]{bar} {quality.label}[/{color}]"
        )

    def _print_route(self, result: DiagnosticResult):
        """打印路由跳点"""
        self.console.print("\n[bold]Route:[/bold]")
        if not result.route:
            self.console.print("  [dim]无数据[/dim]")
            return
        for i, hop in enumerate(result.route, 1):
            self.console.print(f"  {i}. {hop}", markup=False, highlight=False)

    def _print_netstat(self, result: DiagnosticResult):
        """打印TCP连接"""
        if not result.netstat:
            return
        self.console.print("\n[bold]TCP Connections:[/bold]")
        for line in result.netstat:
            self.console.print(f"  {line}", markup=False, highlight=False)

    def _print_probe_outcomes(self, result: DiagnosticResult):
        """打印各探测执行结果（verbose模式）"""
        table = Table(title="Probes")
        table.add_column("Probe")
        table.add_column("Outcome")
        for kind, outcome in result.probe_outcomes.items():
            color = OUTCOME_COLORS.get(outcome, "white")
            table.add_row(kind.value, f"[{color}]{outcome.value}[/{color}]")
        self.console.print()
        self.console.print(table)

    def _print_ipconfig(self, result: DiagnosticResult):
        """打印本机IP配置（verbose模式）"""
        self.console.print(Panel(Text(result.ipconfig), border_style="green", title="ipconfig"))
