"""pytest 配置。

说明：
    - 本包采用 src-layout（`packages/impact_point/src/impact_point`）。
    - 测试运行环境应当“已安装本包”（例如 `pip install -e .[test]`）。
    - 不使用 `sys.path` 注入 `src` 路径，避免出现“本地能跑但安装后失败”的环境差异。
"""

from __future__ import annotations

import pytest

from impact_point import BallisticParams


@pytest.fixture
def example_params() -> BallisticParams:
    """z0=1.0, vz=2.0, vx=vy=0.5, x0=y0=0 的抛体（g=9.8）。"""

    return BallisticParams(x0=0.0, y0=0.0, z0=1.0, vx=0.5, vy=0.5, vz=2.0, gravity=9.8)
