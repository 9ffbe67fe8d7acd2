"""impact_point 的核心数据结构定义。

把数据类型从算法模块中拆出，主要目的：

1) 降低模块间耦合：拟合/求解/编排模块只依赖稳定的数据结构。
2) 便于复用与单测：类型层保持轻量（只包含字段与语义说明）。

坐标约定（lidar 坐标系）：
- x/y：水平面
- z：向上为正
- 重力沿 -z 方向
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

import numpy as np
from numpy.typing import NDArray

# 说明：
#   - 与 curve 拟合相关的字段大多是 numpy 数组；这里用 NDArray 让类型契约更显式。
#   - 类型层不做 dtype/shape 的运行时检查，shape 约束通过字段注释说明。
FloatArray = NDArray[np.floating]
BoolArray = NDArray[np.bool_]


def _empty_points() -> FloatArray:
    return np.zeros((0, 3), dtype=float)


@dataclass(frozen=True)
class Sample:
    """单帧观测点。

    属性:
        x: lidar 坐标系 x（m）。
        y: lidar 坐标系 y（m）。
        z: lidar 坐标系高度（m，上正）。
        t: 相对时间戳（s），相对 episode 的第一个被接受的点。
    """

    x: float
    y: float
    z: float
    t: float

    def xyz(self) -> tuple[float, float, float]:
        return float(self.x), float(self.y), float(self.z)


@dataclass(frozen=True)
class CubicFit:
    """逐轴多项式拟合结果。

    属性:
        coeffs_x: x(p) 的多项式系数，最高次在前（与 np.polyval 一致）。
        coeffs_y: y(p) 的多项式系数。
        coeffs_z: z(p) 的多项式系数。
        params: 参与拟合的拟合参数 p，shape=(N,)。
        degree: 多项式次数（默认 3）。
        curve_points: 在观测参数范围内等间隔采样的曲线点，shape=(K,3)。
    """

    coeffs_x: FloatArray
    coeffs_y: FloatArray
    coeffs_z: FloatArray
    params: FloatArray
    degree: int
    curve_points: FloatArray = field(default_factory=_empty_points)

    @property
    def param_range(self) -> tuple[float, float]:
        p = np.asarray(self.params, dtype=float)
        return float(np.min(p)), float(np.max(p))

    def evaluate(self, params: FloatArray | float) -> FloatArray:
        """在给定拟合参数处计算曲线点，返回 shape=(K,3)（标量输入时 K=1）。"""

        p = np.atleast_1d(np.asarray(params, dtype=float))
        return np.stack(
            [
                np.polyval(self.coeffs_x, p),
                np.polyval(self.coeffs_y, p),
                np.polyval(self.coeffs_z, p),
            ],
            axis=-1,
        ).astype(float)


@dataclass(frozen=True)
class RobustFit:
    """RANSAC 拟合结果。

    属性:
        fit: 在最佳一致集上重新拟合得到的结果（不是最小子集的拟合）。
        inlier_mask: 与输入点逐一对齐的内点标记，shape=(N,)。
        num_inliers: 一致集大小。
    """

    fit: CubicFit
    inlier_mask: BoolArray
    num_inliers: int


@dataclass(frozen=True)
class BallisticParams:
    """抛体模型参数（t=0 时刻的位置与速度）。

    模型：
        x(t) = x0 + vx*t
        y(t) = y0 + vy*t
        z(t) = z0 + vz*t - 0.5*g*t^2
    """

    x0: float
    y0: float
    z0: float
    vx: float
    vy: float
    vz: float
    gravity: float

    def position_at(self, t: FloatArray | float) -> FloatArray:
        """计算给定时刻的位置，返回 shape=(K,3)。"""

        tt = np.atleast_1d(np.asarray(t, dtype=float))
        g = float(self.gravity)
        x = self.x0 + self.vx * tt
        y = self.y0 + self.vy * tt
        z = self.z0 + self.vz * tt - 0.5 * g * tt * tt
        return np.stack([x, y, z], axis=-1).astype(float)


@dataclass(frozen=True)
class ImpactSolution:
    """目标高度平面的穿越解。

    属性:
        impact_time: 穿越时刻（s，相对 episode 起点）。
        x_impact: 目标坐标系下的 x（m）。
        y_impact: 目标坐标系下的 y（m）。
        target_z: lidar 坐标系下的目标平面高度（m）。
    """

    impact_time: float
    x_impact: float
    y_impact: float
    target_z: float


@dataclass(frozen=True)
class PredictionResult:
    """单次估计周期的输出。

    说明：
        - success=False 时数值字段均为 0，只有 reason 有意义。
        - method 标记结果来源：ballistic（一般路径）或 polynomial（三点路径，无着弹时间）。
    """

    success: bool
    impact_time: float = 0.0
    x_impact: float = 0.0
    y_impact: float = 0.0
    x0: float = 0.0
    y0: float = 0.0
    z0: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    vz: float = 0.0
    reason: str | None = None
    method: Literal["ballistic", "polynomial"] = "ballistic"

    @classmethod
    def failure(
        cls,
        reason: str,
        *,
        method: Literal["ballistic", "polynomial"] = "ballistic",
    ) -> "PredictionResult":
        return cls(success=False, reason=str(reason), method=method)


@dataclass(frozen=True)
class Prediction:
    """编排器的完整输出（结果 + 供下游使用的点序列）。

    属性:
        result: 预测结果。
        path: 一般路径下为重采样的抛体轨迹；三点路径下为拟合曲线点；失败时为空，shape=(K,3)。
        inlier_mask: 若启用了 RANSAC 预清洗，则为内点标记；否则为 None。
    """

    result: PredictionResult
    path: FloatArray = field(default_factory=_empty_points)
    inlier_mask: BoolArray | None = None

    @property
    def success(self) -> bool:
        return bool(self.result.success)
