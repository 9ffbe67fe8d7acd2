"""多项式轨迹拟合：普通最小二乘、RANSAC 与目标高度求根。"""

from impact_point.fitting.polynomial import (
    curve_residuals,
    find_xy_at_target_height,
    fit_cubic_curve,
)
from impact_point.fitting.ransac import fit_cubic_curve_ransac

__all__ = [
    "curve_residuals",
    "find_xy_at_target_height",
    "fit_cubic_curve",
    "fit_cubic_curve_ransac",
]
