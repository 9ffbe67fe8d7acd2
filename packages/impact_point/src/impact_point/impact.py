"""着弹点求解：抛体轨迹穿越目标高度平面的时刻与水平位置。"""

from __future__ import annotations

from impact_point.configs import FrameConfig
from impact_point.types import BallisticParams, ImpactSolution
from impact_point.utils.math_utils import real_roots_of_quadratic


def calculate_impact_point(params: BallisticParams, frame: FrameConfig) -> ImpactSolution | None:
    """求解 z(t) == 目标平面高度 的最小非负根，并换算到目标坐标系。

    说明：
        - 目标平面在 lidar 坐标系下的高度为 frame.target_plane_z()。
        - 方程：-0.5*g*t^2 + vz*t + (z0 - plane_z) = 0。
        - 取最小非负实根，即“向前第一次穿越”。
        - 该函数是纯函数，不持有任何状态。

    Returns:
        ImpactSolution；无非负实根（例如起点已在平面下方且 vz<=0）时返回 None。
    """

    plane_z = float(frame.target_plane_z())
    g = float(params.gravity)

    roots = real_roots_of_quadratic(-0.5 * g, float(params.vz), float(params.z0) - plane_z)
    future = [r for r in roots if r >= 0.0]
    if not future:
        return None

    t_star = float(min(future))
    x_l = float(params.x0 + params.vx * t_star)
    y_l = float(params.y0 + params.vy * t_star)

    return ImpactSolution(
        impact_time=t_star,
        x_impact=x_l - float(frame.lidar_to_target_x),
        y_impact=y_l - float(frame.lidar_to_target_y),
        target_z=plane_z,
    )
