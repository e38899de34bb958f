"""
CLI命令行入口

使用Typer框架提供命令行接口
"""
import asyncio
import json
from dataclasses import replace
from typing import Optional

import typer
from rich.console import Console

from .agent import DiagnosticCollector, ReportGenerator
from .integrations import (
    ConfigError,
    DiagnosticConfig,
    FixtureProbeRunner,
    get_profile,
    load_diagnostic_config,
)
from .models.task import DiagnosticUnavailableError, InvalidTargetError, ProbeRequest
from .utils.output_formatter import ResultFormatter

app = typer.Typer(
    name="netdiag",
    help="网络健康诊断工具：延迟、丢包、路由、连接和域名解析",
    add_completion=False
)
console = Console()
err_console = Console(stderr=True)


def build_config(
    config_path: Optional[str],
    timeout: Optional[float],
    platform_name: Optional[str]
) -> DiagnosticConfig:
    """加载配置文件并应用命令行覆盖"""
    config = load_diagnostic_config(config_path)
    overrides = {}
    if timeout is not None:
        overrides["probe_timeout"] = timeout
    if platform_name:
        overrides["platform"] = platform_name.lower()
    return replace(config, **overrides).validate() if overrides else config


@app.command("diagnose")
def diagnose(
    target: str = typer.Argument(..., help="主机名或IP地址，例如: example.com"),
    json_output: bool = typer.Option(False, "--json", help="以JSON格式输出结果"),
    timeout: Optional[float] = typer.Option(None, "--timeout", "-t", help="单个探测超时（秒）"),
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="配置文件路径"),
    platform_name: Optional[str] = typer.Option(None, "--platform", "-p", help="auto | posix | darwin | windows"),
    scenario: Optional[str] = typer.Option(None, "--scenario", "-s", help="使用离线Mock场景代替真实命令"),
    output_dir: Optional[str] = typer.Option(None, "--output", "-o", help="Markdown报告输出目录"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="显示各探测结果和ipconfig原始输出")
):
    """
    执行网络健康诊断

    示例:
        netdiag diagnose example.com
        netdiag diagnose 8.8.8.8 --json
        netdiag diagnose example.com --scenario healthy_posix
    """
    try:
        config = build_config(config_path, timeout, platform_name)
    except (FileNotFoundError, ConfigError) as e:
        err_console.print(f"[red]配置错误: {e}[/red]")
        raise typer.Exit(code=2)

    runner = None
    if scenario:
        try:
            runner = FixtureProbeRunner(
                scenario,
                timeout=config.probe_timeout,
                max_concurrent=config.max_concurrent_probes
            )
        except ValueError as e:
            err_console.print(f"[red]{e}[/red]")
            raise typer.Exit(code=2)

    collector = DiagnosticCollector(runner=runner, config=config)

    if not json_output:
        console.print(f"\n[bold cyan]netdiag - 网络健康诊断[/bold cyan]")
        console.print(f"[dim]{'='*60}[/dim]")
        console.print(f"[dim]平台: {collector.profile.name}  超时: {config.probe_timeout:g}s[/dim]\n")

    try:
        result = asyncio.run(collector.collect(target))
    except InvalidTargetError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=2)
    except DiagnosticUnavailableError as e:
        err_console.print(f"[red]诊断不可用: {e}[/red]")
        raise typer.Exit(code=1)

    if json_output:
        typer.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        ResultFormatter(verbose=verbose, console=console).render(result)

    if output_dir:
        reporter = ReportGenerator(output_dir)
        report_path = reporter.generate(result)
        err_console.print(f"[green]OK[/green] 报告已生成: {report_path}")
        # JSON模式下stdout只输出JSON
        summary_console = err_console if json_output else console
        summary_console.print(reporter.generate_summary(result), markup=False, highlight=False)


@app.command("commands")
def show_commands(
    target: str = typer.Argument(..., help="主机名或IP地址"),
    platform_name: str = typer.Option("auto", "--platform", "-p", help="auto | posix | darwin | windows")
):
    """显示将要执行的探测命令（不执行）"""
    try:
        validated = ProbeRequest(target=target).validate()
        profile = get_profile(platform_name.lower())
        config = load_diagnostic_config()
    except (InvalidTargetError, ConfigError, ValueError) as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=2)

    for kind, command in profile.build_commands(validated, config).items():
        console.print(f"{kind.value:<12} {' '.join(command)}", markup=False, highlight=False)


def main():
    app()


if __name__ == "__main__":
    main()
