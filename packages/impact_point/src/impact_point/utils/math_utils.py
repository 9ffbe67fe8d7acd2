"""impact_point 的轻量数学工具。

设计约束：
    - 仅依赖 NumPy。
    - 拟合失败（样本不足/奇异）返回 None，由调用方决定如何处理，不抛异常。
"""

from __future__ import annotations

import numpy as np

# np.roots 得到的复根，虚部小于该比例时视为实根。
_IMAG_REL_TOL = 1e-9

# 最高次系数与最大系数之比低于该值时视为 0（多项式降阶）。
_LEADING_REL_TOL = 1e-10


def all_finite(*arrays: np.ndarray) -> bool:
    """判断所有输入数组是否都不含 NaN/Inf。"""

    return all(bool(np.all(np.isfinite(np.asarray(a, dtype=float)))) for a in arrays)


def least_squares_polyfit(p: np.ndarray, y: np.ndarray, degree: int) -> np.ndarray | None:
    """用最小二乘拟合 y(p) 的多项式，系数最高次在前。

    说明：
        - 使用 Vandermonde 矩阵 + `np.linalg.lstsq`（比直接解正规方程更稳定）。
        - 当样本数不足 degree+1 或矩阵秩亏（例如拟合参数重复）时返回 None。

    Args:
        p: 拟合参数，shape=(N,)。
        y: 观测值，shape=(N,) 或 (N,K)（多列共享同一设计矩阵）。
        degree: 多项式次数。

    Returns:
        系数数组，shape=(degree+1,) 或 (degree+1,K)；失败时返回 None。
    """

    p = np.asarray(p, dtype=float).reshape(-1)
    y = np.asarray(y, dtype=float)
    n_coeffs = int(degree) + 1
    if p.size < n_coeffs or y.shape[0] != p.size:
        return None
    if not all_finite(p, y):
        return None

    A = np.vander(p, n_coeffs)
    coeffs, _, rank, _ = np.linalg.lstsq(A, y, rcond=None)
    if int(rank) < n_coeffs:
        return None
    return np.asarray(coeffs, dtype=float)


def line_fit(t: np.ndarray, y: np.ndarray) -> tuple[float, float] | None:
    """最小二乘拟合 y = c + k*t。

    Returns:
        (c, k)；t 全部相同（设计矩阵秩亏）时返回 None。
    """

    coeffs = least_squares_polyfit(t, y, 1)
    if coeffs is None:
        return None
    return float(coeffs[1]), float(coeffs[0])


def real_roots_of_quadratic(a: float, b: float, c: float) -> list[float]:
    """返回 a*x^2 + b*x + c = 0 的实根（升序）。

    说明：
        - 当 a≈0 时退化为一次方程；a、b 都≈0 时无解。
        - 输入包含 NaN/Inf 时返回空列表。
    """

    a, b, c = float(a), float(b), float(c)
    if not all_finite(np.array([a, b, c])):
        return []

    if abs(a) < 1e-12:
        if abs(b) < 1e-12:
            return []
        return [-c / b]

    d = b * b - 4.0 * a * c
    if d < 0.0:
        return []

    # 数值稳定形式，避免 b 与 sqrt(d) 接近时的相消误差。
    sqrt_d = float(np.sqrt(d))
    q = -0.5 * (b + np.copysign(sqrt_d, b))
    if abs(q) < 1e-300:
        return [-b / (2.0 * a)]
    return sorted([float(q / a), float(c / q)])


def real_polynomial_roots(coeffs: np.ndarray) -> list[float]:
    """返回多项式（最高次在前）的全部实根（升序）。"""

    c = np.asarray(coeffs, dtype=float).reshape(-1)
    if c.size == 0 or not all_finite(c):
        return []

    # 去掉相对其余系数可忽略的最高次项：伴随矩阵会被 1/c[0] 放大，低次根精度随之变差。
    scale = float(np.max(np.abs(c)))
    while c.size > 1 and abs(float(c[0])) <= _LEADING_REL_TOL * scale:
        c = c[1:]
    if c.size <= 1:
        return []

    roots = np.roots(c)
    out: list[float] = []
    for r in roots:
        re = float(np.real(r))
        if abs(float(np.imag(r))) <= _IMAG_REL_TOL * max(1.0, abs(re)):
            out.append(re)
    out.sort()
    return out
