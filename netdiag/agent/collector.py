"""
诊断编排器

并发运行五个探测，等待全部结束后解析输出并汇总为一个诊断结果
"""
import asyncio
import time
from typing import Dict, Mapping, Optional

from ..integrations.config_loader import DiagnosticConfig
from ..integrations.platform_profile import PlatformProfile, get_profile
from ..integrations.probe_runner import ProbeRunner
from ..models.report import NOT_AVAILABLE, DiagnosticResult
from ..models.results import ProbeKind, ProbeOutcome, RawProbeOutput
from ..models.task import DiagnosticError, DiagnosticUnavailableError, ProbeRequest
from ..utils.parsers import (
    parse_netstat_output,
    parse_nslookup_output,
    parse_ping_output,
    parse_traceroute_output,
)
from .analyzer import (
    derive_health,
    derive_latency,
    derive_packet_loss,
    extract_packet_loss,
    quality_from_latency_label,
)


class DiagnosticCollector:
    """
    诊断编排器

    - 目标为空时在启动任何探测之前抛出InvalidTargetError
    - 探测之间没有顺序依赖，各自只写自己的结果槽位
    - 单个探测失败只会得到空输出，不会使整批失败
    """

    def __init__(
        self,
        runner: Optional[ProbeRunner] = None,
        profile: Optional[PlatformProfile] = None,
        config: Optional[DiagnosticConfig] = None
    ):
        """
        初始化诊断编排器

        Args:
            runner: 探测执行器，默认按config创建子进程执行器
            profile: 平台探测配置，默认按config.platform选择
            config: 探测配置，默认使用内置默认值
        """
        self.config = config or DiagnosticConfig()
        self.runner = runner or ProbeRunner(
            timeout=self.config.probe_timeout,
            max_concurrent=self.config.max_concurrent_probes
        )
        self.profile = profile or get_profile(self.config.platform)

    async def collect(self, target: str) -> DiagnosticResult:
        """
        执行完整诊断

        Args:
            target: 主机名或IP地址

        Returns:
            DiagnosticResult: 汇总结果（status固定为"Connected"）

        Raises:
            InvalidTargetError: 目标不合法，未启动任何探测
            DiagnosticUnavailableError: 编排过程中出现意外异常
        """
        validated = ProbeRequest(target=target).validate()

        start_time = time.monotonic()
        try:
            outputs = await self.run_probes(validated)
            return self.assemble(validated, outputs, time.monotonic() - start_time)
        except DiagnosticError:
            raise
        except Exception as e:
            raise DiagnosticUnavailableError(f"Failed to run diagnostics for {validated}: {e}") from e

    async def run_probes(self, target: str) -> Dict[ProbeKind, RawProbeOutput]:
        """
        并发运行全部探测并等待结束

        Returns:
            探测类型 -> 原始输出
        """
        commands = self.profile.build_commands(target, self.config)
        outputs = await asyncio.gather(*(
            self.runner.run_probe(kind, command)
            for kind, command in commands.items()
        ))
        return {output.kind: output for output in outputs}

    def assemble(
        self,
        target: str,
        outputs: Mapping[ProbeKind, RawProbeOutput],
        total_time: float = 0.0
    ) -> DiagnosticResult:
        """
        解析各探测输出并组装诊断结果

        Args:
            target: 探测目标
            outputs: 探测类型 -> 原始输出（缺失的探测按空输出处理）
            total_time: 总耗时（秒）
        """
        grammar = self.profile.grammar

        def text_of(kind: ProbeKind) -> str:
            output = outputs.get(kind)
            return output.text if output else ""

        ping_text = text_of(ProbeKind.PING)
        ping = parse_ping_output(ping_text, grammar)
        route = parse_traceroute_output(text_of(ProbeKind.TRACEROUTE), grammar)
        netstat = parse_netstat_output(text_of(ProbeKind.NETSTAT), grammar, self.config.netstat_limit)
        dns = parse_nslookup_output(text_of(ProbeKind.DNS_LOOKUP), grammar)

        latency_label = derive_latency(ping.round_trip_times)
        outcomes = {
            kind: outputs[kind].outcome if kind in outputs else ProbeOutcome.FAILED
            for kind in ProbeKind
        }

        return DiagnosticResult(
            target=target,
            latency_label=latency_label,
            packet_loss_label=derive_packet_loss(ping_text, grammar),
            packet_loss_reported=extract_packet_loss(ping_text, grammar) is not None,
            ping_series=ping.samples,
            route=route.hops,
            netstat=netstat.connections,
            ip_address=dns.ip_address,
            ipconfig=text_of(ProbeKind.IPCONFIG) or NOT_AVAILABLE,
            connection_quality=quality_from_latency_label(latency_label),
            health=derive_health(outcomes),
            probe_outcomes=outcomes,
            total_time=total_time
        )
