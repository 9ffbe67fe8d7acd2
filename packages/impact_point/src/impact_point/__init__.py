"""impact_point 包入口。

导出内容：
    - ImpactPointPredictor：无状态编排器（三点路径 / 一般路径）。
    - ImpactPointEstimator：在线会话（episode 缓冲、间隔超时、预测后暂停）。
    - 各算法函数与配置 dataclass：作为跨包集成时的稳定入口。
"""

from impact_point.ballistic import fit_ballistic_trajectory, generate_trajectory_points
from impact_point.clock import EpisodeClock
from impact_point.configs import (
    EstimatorConfig,
    FrameConfig,
    ImpactPointConfig,
    PhysicsConfig,
    RansacConfig,
)
from impact_point.episode import Episode
from impact_point.fitting import (
    find_xy_at_target_height,
    fit_cubic_curve,
    fit_cubic_curve_ransac,
)
from impact_point.impact import calculate_impact_point
from impact_point.predictor import ImpactPointPredictor
from impact_point.session import ImpactPointEstimator
from impact_point.types import (
    BallisticParams,
    CubicFit,
    ImpactSolution,
    Prediction,
    PredictionResult,
    RobustFit,
    Sample,
)

__all__ = [
    "BallisticParams",
    "calculate_impact_point",
    "CubicFit",
    "Episode",
    "EpisodeClock",
    "EstimatorConfig",
    "find_xy_at_target_height",
    "fit_ballistic_trajectory",
    "fit_cubic_curve",
    "fit_cubic_curve_ransac",
    "FrameConfig",
    "generate_trajectory_points",
    "ImpactPointConfig",
    "ImpactPointEstimator",
    "ImpactPointPredictor",
    "ImpactSolution",
    "PhysicsConfig",
    "Prediction",
    "PredictionResult",
    "RansacConfig",
    "RobustFit",
    "Sample",
]
