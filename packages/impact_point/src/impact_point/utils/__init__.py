"""impact_point 的通用工具模块。"""

from impact_point.utils.math_utils import (
    all_finite,
    least_squares_polyfit,
    line_fit,
    real_polynomial_roots,
    real_roots_of_quadratic,
)
from impact_point.utils.predictor_logging import default_logger

__all__ = [
    "all_finite",
    "default_logger",
    "least_squares_polyfit",
    "line_fit",
    "real_polynomial_roots",
    "real_roots_of_quadratic",
]
