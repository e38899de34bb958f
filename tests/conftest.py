"""
Pytest配置和全局fixtures
"""
import sys
from pathlib import Path

import pytest

# 添加项目根目录到Python路径，以便导入模块
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from netdiag.integrations.config_loader import ENV_OVERRIDES  # noqa: E402


@pytest.fixture(autouse=True)
def clear_netdiag_env(monkeypatch):
    """避免开发环境中的 NETDIAG_* 变量影响测试"""
    for env_var in ENV_OVERRIDES:
        monkeypatch.delenv(env_var, raising=False)
