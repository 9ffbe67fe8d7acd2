"""impact_point 配置包。

说明：
    - 这是一个“纯模型”包，只包含 dataclass 配置定义，不做任何 IO。
"""

from impact_point.configs.models import (
    EstimatorConfig,
    FrameConfig,
    ImpactPointConfig,
    PhysicsConfig,
    RansacConfig,
)

__all__ = [
    "EstimatorConfig",
    "FrameConfig",
    "ImpactPointConfig",
    "PhysicsConfig",
    "RansacConfig",
]
