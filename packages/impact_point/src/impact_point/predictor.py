"""impact_point 的核心编排实现。

两条入口：
    - 三点路径 `process_three_points`：点数很少时，直接对原始点做多项式拟合并在目标高度求根，
      给出一个早期近似落点（不计算着弹时间）。
    - 一般路径 `process_points`：可选 RANSAC 预清洗 -> 抛体参数拟合 -> 着弹点求解 -> 轨迹重采样。

实现原则：
    - 同步执行：若提供 callback，会在返回前恰好调用一次。
    - 预期内的失败不抛异常，统一表达为 PredictionResult(success=False, reason=...)。
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

import numpy as np

from impact_point.ballistic import fit_ballistic_trajectory, generate_trajectory_points
from impact_point.configs import ImpactPointConfig
from impact_point.fitting import find_xy_at_target_height, fit_cubic_curve, fit_cubic_curve_ransac
from impact_point.fitting.polynomial import as_points
from impact_point.impact import calculate_impact_point
from impact_point.types import Prediction, PredictionResult
from impact_point.utils import default_logger

ResultCallback = Callable[[PredictionResult], None]

MINIMAL_SAMPLE_COUNT = 3


class ImpactPointPredictor:
    """着弹点预测器（无状态编排器）。

    说明：
        - 预测器本身不保存点序列；episode 的缓冲与时钟由调用方（见 `impact_point.session`）维护。
        - 唯一的内部状态是 RANSAC 的随机源，可通过 rng 注入或 RansacConfig.seed 固定。
    """

    def __init__(
        self,
        config: ImpactPointConfig | None = None,
        logger: logging.Logger | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self._cfg = config or ImpactPointConfig()
        self._logger = logger or default_logger()
        self._rng = rng if rng is not None else np.random.default_rng(self._cfg.ransac.seed)

    @property
    def config(self) -> ImpactPointConfig:
        return self._cfg

    def process_three_points(
        self,
        points: np.ndarray | Sequence[Sequence[float]],
        times: np.ndarray | Sequence[float] | None = None,
        callback: ResultCallback | None = None,
    ) -> Prediction:
        """三点路径：多项式拟合 + 目标高度求根。

        说明：
            - 多项式次数取 min(3, N-1)，3 个点时为精确二次曲线。
            - 结果不含着弹时间与抛体参数（method="polynomial"），x/y 为目标坐标系。
        """

        pts = as_points(points)
        frame = self._cfg.frame
        degree = min(3, int(pts.shape[0]) - 1)

        fit = None
        if degree >= 1:
            fit = fit_cubic_curve(
                pts,
                times,
                degree=degree,
                num_curve_points=int(self._cfg.estimator.curve_num_points),
            )
        if fit is None:
            return self._deliver(
                Prediction(result=PredictionResult.failure("polynomial_fit_failed", method="polynomial")),
                callback,
            )

        hit = find_xy_at_target_height(
            fit,
            frame.target_plane_z(),
            max_extrapolation_ratio=float(self._cfg.estimator.max_extrapolation_ratio),
        )
        if hit is None:
            return self._deliver(
                Prediction(
                    result=PredictionResult.failure("no_target_crossing", method="polynomial"),
                    path=fit.curve_points,
                ),
                callback,
            )

        _p, x_l, y_l = hit
        result = PredictionResult(
            success=True,
            x_impact=float(x_l - frame.lidar_to_target_x),
            y_impact=float(y_l - frame.lidar_to_target_y),
            method="polynomial",
        )
        self._logger.info(
            "三点近似落点: (%.2f, %.2f), height=%.2f",
            result.x_impact,
            result.y_impact,
            float(frame.target_height),
        )
        return self._deliver(Prediction(result=result, path=fit.curve_points), callback)

    def process_points(
        self,
        points: np.ndarray | Sequence[Sequence[float]],
        times: np.ndarray | Sequence[float],
        callback: ResultCallback | None = None,
    ) -> Prediction:
        """一般路径：RANSAC 预清洗（可选）-> 抛体拟合 -> 着弹点 -> 轨迹重采样。"""

        pts = as_points(points)
        t = np.asarray(times, dtype=float).reshape(-1)
        if t.size != pts.shape[0]:
            raise ValueError(f"times length {t.size} != number of points {pts.shape[0]}")

        cfg = self._cfg
        if pts.shape[0] < int(cfg.estimator.min_points):
            return self._fail("insufficient_points", callback)

        inlier_mask: np.ndarray | None = None
        min_subset = int(cfg.ransac.degree) + 1
        if bool(cfg.ransac.enabled) and pts.shape[0] < min_subset:
            # 点数不足一个最小子集：跳过 RANSAC，直接做抛体拟合。
            self._logger.debug("点数 %d < RANSAC 最小子集 %d，跳过预清洗", int(pts.shape[0]), min_subset)
        elif bool(cfg.ransac.enabled):
            robust = fit_cubic_curve_ransac(
                pts,
                t,
                threshold=float(cfg.ransac.threshold),
                max_iterations=int(cfg.ransac.max_iterations),
                degree=int(cfg.ransac.degree),
                rng=self._rng,
                num_curve_points=int(cfg.estimator.curve_num_points),
            )
            if robust is None:
                return self._fail("consensus_failed", callback)
            inlier_mask = robust.inlier_mask
            if robust.num_inliers < pts.shape[0]:
                self._logger.debug("RANSAC 剔除离群点 %d 个", int(pts.shape[0] - robust.num_inliers))
            pts, t = pts[inlier_mask], t[inlier_mask]

        params = fit_ballistic_trajectory(pts, t, gravity=float(cfg.physics.gravity))
        if params is None:
            return self._fail("ballistic_fit_failed", callback, inlier_mask=inlier_mask)

        impact = calculate_impact_point(params, cfg.frame)
        if impact is None:
            return self._fail("no_impact", callback, inlier_mask=inlier_mask)

        result = PredictionResult(
            success=True,
            impact_time=impact.impact_time,
            x_impact=impact.x_impact,
            y_impact=impact.y_impact,
            x0=params.x0,
            y0=params.y0,
            z0=params.z0,
            vx=params.vx,
            vy=params.vy,
            vz=params.vz,
        )
        path = generate_trajectory_points(
            params,
            impact.impact_time,
            num_points=int(cfg.estimator.trajectory_num_points),
        )

        self._logger.info(
            "着弹时间: %.2f s, 着弹地点: (%.2f, %.2f), height=%.2f",
            result.impact_time,
            result.x_impact,
            result.y_impact,
            float(cfg.frame.target_height),
        )
        return self._deliver(Prediction(result=result, path=path, inlier_mask=inlier_mask), callback)

    def _fail(
        self,
        reason: str,
        callback: ResultCallback | None,
        *,
        inlier_mask: np.ndarray | None = None,
    ) -> Prediction:
        self._logger.debug("着弹点预测失败: %s", reason)
        return self._deliver(
            Prediction(result=PredictionResult.failure(reason), inlier_mask=inlier_mask),
            callback,
        )

    @staticmethod
    def _deliver(prediction: Prediction, callback: ResultCallback | None) -> Prediction:
        if callback is not None:
            callback(prediction.result)
        return prediction
