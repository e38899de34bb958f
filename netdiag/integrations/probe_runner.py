"""
探测执行器

执行单个外部诊断命令并捕获标准输出。
任何执行错误（非0退出、命令不存在、超时）都降级为空字符串，
单个探测失败不会中断整批诊断
"""
import asyncio
import json
import sys
import time
from pathlib import Path, PureWindowsPath
from typing import Dict, Optional, Sequence, Tuple

from ..models.results import ProbeKind, ProbeOutcome, RawProbeOutput


class ProbeExecutionError(Exception):
    """探测命令执行失败（在ProbeRunner内部被吸收，不会传给调用方）"""

    def __init__(self, message: str, exit_code: Optional[int] = None):
        super().__init__(message)
        self.exit_code = exit_code


class ProbeRunner:
    """
    外部命令探测执行器

    使用 asyncio 子进程执行命令（不经过shell），
    每个探测有独立超时，进程数由信号量限制
    """

    def __init__(
        self,
        timeout: float = 30.0,
        max_concurrent: int = 5,
        encoding: str = "utf-8"
    ):
        """
        初始化探测执行器

        Args:
            timeout: 单个探测超时时间（秒），超时后终止子进程
            max_concurrent: 同时运行的子进程上限（同一runner上的所有诊断共享）
            encoding: 解码命令输出使用的编码
        """
        self.timeout = timeout
        self.max_concurrent = max_concurrent
        self.encoding = encoding
        self._semaphore = asyncio.Semaphore(max_concurrent)

    async def run(self, command: Sequence[str]) -> str:
        """
        执行命令并返回标准输出

        Args:
            command: 命令参数列表，例如 ["ping", "-c", "4", "example.com"]

        Returns:
            标准输出；执行失败或无输出时返回空字符串（不会抛出异常）
        """
        _, _, text, _ = await self._run_command(command)
        return text

    async def run_probe(self, kind: ProbeKind, command: Sequence[str]) -> RawProbeOutput:
        """
        执行一个探测并返回带结果标记的原始输出

        Args:
            kind: 探测类型
            command: 命令参数列表

        Returns:
            RawProbeOutput: text在失败/无输出时为空字符串
        """
        start_time = time.monotonic()
        outcome, exit_code, text, error = await self._run_command(command)

        return RawProbeOutput(
            kind=kind,
            command=list(command),
            text=text,
            outcome=outcome,
            exit_code=exit_code,
            execution_time=time.monotonic() - start_time,
            error=error
        )

    async def _run_command(
        self,
        command: Sequence[str]
    ) -> Tuple[ProbeOutcome, Optional[int], str, Optional[str]]:
        """
        执行命令并按降级策略归类结果

        Returns:
            (结果标记, 退出码, 输出文本, 失败原因)
        """
        async with self._semaphore:
            try:
                exit_code, stdout = await self._execute(command)
            except ProbeExecutionError as e:
                print(f"[ProbeRunner] 执行失败 {' '.join(command)}: {e}", file=sys.stderr)
                return ProbeOutcome.FAILED, e.exit_code, "", str(e)
            except Exception as e:
                print(f"[ProbeRunner] 执行异常 {' '.join(command)}: {e}", file=sys.stderr)
                return ProbeOutcome.FAILED, None, "", str(e)

        if exit_code != 0:
            print(f"[ProbeRunner] 非0退出 {' '.join(command)}: exit={exit_code}", file=sys.stderr)
            return ProbeOutcome.FAILED, exit_code, "", f"exit code {exit_code}"

        if not stdout.strip():
            return ProbeOutcome.DEGRADED, exit_code, "", "no output"

        return ProbeOutcome.SUCCEEDED, exit_code, stdout, None

    async def _execute(self, command: Sequence[str]) -> Tuple[int, str]:
        """
        启动子进程并等待结束

        Returns:
            (退出码, 标准输出)

        Raises:
            ProbeExecutionError: 命令不存在、无法启动或超时
        """
        if not command:
            raise ProbeExecutionError("empty command")

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE
            )
        except FileNotFoundError as e:
            raise ProbeExecutionError(f"command not found: {command[0]}") from e
        except OSError as e:
            raise ProbeExecutionError(f"failed to start {command[0]}: {e}") from e

        try:
            stdout, _ = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            self._kill(process)
            await process.wait()
            raise ProbeExecutionError(f"timed out after {self.timeout}s") from None
        except asyncio.CancelledError:
            # 诊断被取消时不留下孤儿进程，回收后再继续传播取消
            self._kill(process)
            await asyncio.shield(process.wait())
            raise

        return process.returncode, (stdout or b"").decode(self.encoding, errors="replace")

    @staticmethod
    def _kill(process: asyncio.subprocess.Process) -> None:
        if process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:
                pass


# 命令名 -> 探测类型（FixtureProbeRunner按命令匹配Mock数据）
COMMAND_KINDS = {
    "ping": ProbeKind.PING,
    "traceroute": ProbeKind.TRACEROUTE,
    "tracert": ProbeKind.TRACEROUTE,
    "netstat": ProbeKind.NETSTAT,
    "ip": ProbeKind.IPCONFIG,
    "ifconfig": ProbeKind.IPCONFIG,
    "ipconfig": ProbeKind.IPCONFIG,
    "nslookup": ProbeKind.DNS_LOOKUP,
}


class FixtureProbeRunner(ProbeRunner):
    """
    离线探测执行器

    从Mock JSON文件读取预定义的命令输出，不启动任何子进程。
    用于测试和 `netdiag diagnose --scenario` 离线演示
    """

    def __init__(
        self,
        scenario: str,
        fixtures_path: Optional[str] = None,
        timeout: float = 30.0,
        max_concurrent: int = 5
    ):
        """
        初始化离线探测执行器

        Args:
            scenario: 场景名称（fixtures文件中 scenarios 下的key）
            fixtures_path: Mock数据文件路径，默认为包内 data/mock_probe_responses.json
            timeout: 模拟的超时时间（秒）

        Raises:
            ValueError: 场景不存在
        """
        super().__init__(timeout=timeout, max_concurrent=max_concurrent)
        self.fixtures_path = fixtures_path or self._get_default_fixtures_path()
        self.fixtures = self._load_fixtures()

        scenarios = self.fixtures.get("scenarios", {})
        if scenario not in scenarios:
            raise ValueError(
                f"Unknown scenario: {scenario} (available: {', '.join(sorted(scenarios)) or 'none'})"
            )
        self.scenario = scenario
        self.probes: Dict[str, Dict] = scenarios[scenario].get("probes", {})

    @staticmethod
    def _get_default_fixtures_path() -> str:
        """获取默认Mock数据路径"""
        package_root = Path(__file__).parent.parent
        return str(package_root / "data" / "mock_probe_responses.json")

    def _load_fixtures(self) -> Dict:
        """
        加载Mock数据

        文件不存在或格式错误时使用空的场景数据
        """
        try:
            with open(self.fixtures_path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except FileNotFoundError:
            print(f"[FixtureProbeRunner] 警告: Mock数据文件不存在: {self.fixtures_path}", file=sys.stderr)
        except json.JSONDecodeError as e:
            print(f"[FixtureProbeRunner] 错误: Mock数据JSON格式错误: {e}", file=sys.stderr)
        return {"scenarios": {}}

    @staticmethod
    def match_probe_kind(command: Sequence[str]) -> Optional[ProbeKind]:
        """根据命令名匹配探测类型"""
        if not command:
            return None
        # PureWindowsPath同时按 "\" 和 "/" 拆分，任何平台上都能取到命令名
        executable = PureWindowsPath(command[0]).name.lower()
        if executable.endswith(".exe"):
            executable = executable[:-4]
        return COMMAND_KINDS.get(executable)

    async def _execute(self, command: Sequence[str]) -> Tuple[int, str]:
        kind = self.match_probe_kind(command)
        entry = self.probes.get(kind.value) if kind else None

        # 场景中没有的探测按"命令不存在"处理
        if entry is None:
            raise ProbeExecutionError(f"command not found: {command[0] if command else ''}")

        delay = float(entry.get("delay", 0.0))
        if delay > self.timeout:
            await asyncio.sleep(self.timeout)
            raise ProbeExecutionError(f"timed out after {self.timeout}s")
        if delay:
            await asyncio.sleep(delay)

        if entry.get("error"):
            raise ProbeExecutionError(entry["error"], entry.get("exit_code"))

        return entry.get("exit_code", 0), entry.get("stdout", "")

    def scenario_names(self):
        """返回全部可用场景名称"""
        return sorted(self.fixtures.get("scenarios", {}))
