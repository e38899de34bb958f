"""
诊断请求数据模型
定义用户输入的探测目标及其校验规则
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict


class DiagnosticError(Exception):
    """诊断错误基类"""
    pass


class InvalidTargetError(DiagnosticError):
    """探测目标不合法（在任何探测启动之前抛出）"""

    def __init__(self, message: str, target: str = ""):
        super().__init__(message)
        self.target = target


class DiagnosticUnavailableError(DiagnosticError):
    """编排层内部异常，诊断整体不可用"""
    pass


@dataclass
class ProbeRequest:
    """
    探测请求

    target是唯一的用户输入（主机名或IP地址）
    """
    target: str
    created_at: datetime = field(default_factory=datetime.now)

    def validate(self) -> str:
        """
        校验并返回规范化后的目标

        Returns:
            去除首尾空白后的目标

        Raises:
            InvalidTargetError: 目标为空、包含空白或以"-"开头
        """
        target = (self.target or "").strip()
        if not target:
            raise InvalidTargetError("Target is required", self.target or "")
        # 目标会作为命令参数传给探测程序，不能被解析为选项
        if target.startswith("-"):
            raise InvalidTargetError(f"Invalid target: {target}", target)
        if any(ch.isspace() for ch in target):
            raise InvalidTargetError(f"Target must not contain whitespace: {target!r}", target)
        return target

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return {
            "target": self.target,
            "created_at": self.created_at.isoformat()
        }
