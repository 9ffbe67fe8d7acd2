"""impact_point 的配置定义。

说明：
    - 配置按领域拆分为多个 frozen dataclass（physics/frame/ransac/estimator）。
    - 该模块是“纯模型”，不做任何 IO；YAML 加载见 `impact_point.config_yaml`。
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PhysicsConfig:
    """物理口径相关配置。"""

    # 重力加速度（m/s^2），沿 -z。
    gravity: float = 9.8


@dataclass(frozen=True)
class FrameConfig:
    """lidar 坐标系与目标坐标系之间的平移关系。

    约定：
        lidar_to_target_* 为目标坐标系原点在 lidar 坐标系下的位置。
        - 目标平面在 lidar 坐标系下的高度：lidar_to_target_z + target_height。
        - 目标坐标系下的水平位置：x_lidar - lidar_to_target_x，y 同理。
    """

    lidar_to_target_x: float = 0.0
    lidar_to_target_y: float = 0.0
    lidar_to_target_z: float = 0.0

    # 目标坐标系下的穿越高度（m）。
    target_height: float = 0.0

    def target_plane_z(self) -> float:
        """返回目标平面在 lidar 坐标系下的高度（m）。"""

        return float(self.lidar_to_target_z) + float(self.target_height)


@dataclass(frozen=True)
class RansacConfig:
    """RANSAC 预清洗相关配置。"""

    enabled: bool = True

    # 内点距离阈值（m）。
    threshold: float = 0.1
    max_iterations: int = 1000

    # 多项式次数；最小子集大小为 degree+1。
    degree: int = 3

    # 随机种子：None 表示每次构造预测器时取系统熵。
    seed: int | None = None


@dataclass(frozen=True)
class EstimatorConfig:
    """在线估计流程相关配置。"""

    # 触发一般路径估计的最少点数。
    min_points: int = 5

    # 相邻两点的最大间隔（s），超过则丢弃当前 episode。
    gap_timeout_s: float = 0.3

    # 一次预测周期结束后暂停接收点的时长（s）。
    pause_after_prediction_s: float = 1.0

    # episode 恰好累积到 3 个点时，是否先输出一次三点近似估计。
    early_estimate_enabled: bool = False

    # 三点路径求根时允许的外推长度（相对观测参数跨度的倍数）。
    max_extrapolation_ratio: float = 10.0

    # 输出轨迹/曲线的采样点数。
    trajectory_num_points: int = 50
    curve_num_points: int = 50


@dataclass(frozen=True)
class ImpactPointConfig:
    """ImpactPointPredictor / ImpactPointEstimator 的配置聚合。"""

    physics: PhysicsConfig = field(default_factory=PhysicsConfig)
    frame: FrameConfig = field(default_factory=FrameConfig)
    ransac: RansacConfig = field(default_factory=RansacConfig)
    estimator: EstimatorConfig = field(default_factory=EstimatorConfig)

    def __post_init__(self) -> None:
        if not float(self.physics.gravity) > 0.0:
            raise ValueError(f"gravity must be > 0, got {self.physics.gravity}")
        if float(self.ransac.threshold) <= 0.0:
            raise ValueError(f"ransac.threshold must be > 0, got {self.ransac.threshold}")
        if int(self.ransac.max_iterations) < 1:
            raise ValueError(f"ransac.max_iterations must be >= 1, got {self.ransac.max_iterations}")
        if int(self.ransac.degree) < 1:
            raise ValueError(f"ransac.degree must be >= 1, got {self.ransac.degree}")
        if int(self.estimator.min_points) < 2:
            raise ValueError(f"estimator.min_points must be >= 2, got {self.estimator.min_points}")
        if not float(self.estimator.gap_timeout_s) > 0.0:
            raise ValueError(f"estimator.gap_timeout_s must be > 0, got {self.estimator.gap_timeout_s}")
        if float(self.estimator.pause_after_prediction_s) < 0.0:
            raise ValueError(
                f"estimator.pause_after_prediction_s must be >= 0, got {self.estimator.pause_after_prediction_s}"
            )
        if not float(self.estimator.max_extrapolation_ratio) >= 0.0:
            raise ValueError(
                f"estimator.max_extrapolation_ratio must be >= 0, got {self.estimator.max_extrapolation_ratio}"
            )
        if int(self.estimator.trajectory_num_points) < 2 or int(self.estimator.curve_num_points) < 2:
            raise ValueError("trajectory_num_points/curve_num_points must be >= 2")
