"""在线会话：把逐点到达的观测流组织成 episode，并在点数足够时触发预测。

状态机（与上游感知循环同线程、串行调用）：
    - 暂停中（上一次预测后的 pause_after_prediction_s 内）：忽略新点。
    - 相邻两点间隔超过 gap_timeout_s：清空当前 episode，并丢弃当前点。
      暂停期间的点不刷新上一点时刻；暂停时长超过 gap_timeout_s 时，暂停结束后的第一个点会因超时被丢弃。
    - 有效性检查（可选，由外部注入）：不通过则丢弃当前点，不影响时钟零点。
    - 点数达到 min_points：走一般路径预测，回调，进入暂停，清空 episode。
    - 可选：点数恰好为 3 时先走三点路径输出早期近似结果（不清空 episode）。
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Sequence

import numpy as np

from impact_point.configs import ImpactPointConfig
from impact_point.episode import Episode
from impact_point.predictor import MINIMAL_SAMPLE_COUNT, ImpactPointPredictor, ResultCallback
from impact_point.types import Prediction, Sample
from impact_point.utils import default_logger

# 外部点有效性检查：(x, y, z, 已接受的点序列) -> 是否接受。
PointFilter = Callable[[float, float, float, Sequence[Sample]], bool]


class ImpactPointEstimator:
    """在线着弹点估计会话。"""

    def __init__(
        self,
        config: ImpactPointConfig | None = None,
        *,
        on_result: ResultCallback | None = None,
        point_filter: PointFilter | None = None,
        logger: logging.Logger | None = None,
        rng: np.random.Generator | None = None,
        time_source: Callable[[], float] = time.monotonic,
    ) -> None:
        self._cfg = config or ImpactPointConfig()
        self._logger = logger or default_logger()
        self._predictor = ImpactPointPredictor(self._cfg, logger=self._logger, rng=rng)
        self._on_result = on_result
        self._point_filter = point_filter
        self._time_source = time_source

        self._episode = Episode()
        self._last_point_time: float | None = None
        self._pause_until: float | None = None

    @property
    def episode(self) -> Episode:
        return self._episode

    @property
    def predictor(self) -> ImpactPointPredictor:
        return self._predictor

    def reset(self) -> None:
        """清空当前 episode（点序列与时钟一起清空）。"""

        self._episode.reset()

    def is_paused(self, now: float | None = None) -> bool:
        if self._pause_until is None:
            return False
        now = self._time_source() if now is None else float(now)
        return now < self._pause_until

    def add_point(self, x: float, y: float, z: float, now: float | None = None) -> Prediction | None:
        """处理一个新到达的观测点。

        Args:
            x, y, z: lidar 坐标系下的位置（m）。
            now: 到达时刻（s，单调时钟）；None 时取 time_source()。

        Returns:
            若本次触发了预测（包括三点早期估计），返回 Prediction；否则返回 None。
        """

        now = self._time_source() if now is None else float(now)

        if self.is_paused(now):
            return None
        self._pause_until = None

        dt = None if self._last_point_time is None else now - self._last_point_time
        self._last_point_time = now
        if dt is not None and dt > float(self._cfg.estimator.gap_timeout_s):
            if self._episode.size:
                self._logger.debug("点间隔 %.3f s 超时，丢弃当前 episode（%d 点）", dt, self._episode.size)
            self._episode.reset()
            return None

        if self._point_filter is not None and not self._point_filter(
            float(x), float(y), float(z), tuple(self._episode.samples)
        ):
            return None

        self._episode.append(x, y, z, now=now)
        n = self._episode.size

        if n >= int(self._cfg.estimator.min_points):
            return self._run_prediction_cycle(now)

        if bool(self._cfg.estimator.early_estimate_enabled) and n == MINIMAL_SAMPLE_COUNT:
            points, times = self._episode.as_arrays()
            return self._predictor.process_three_points(points, times, callback=self._on_result)

        return None

    def _run_prediction_cycle(self, now: float) -> Prediction:
        points, times = self._episode.as_arrays()
        prediction = self._predictor.process_points(points, times, callback=self._on_result)

        # 无论成功与否，一个预测周期结束后都暂停接收并开始新的 episode。
        # _last_point_time 保留：暂停结束后的第一个点仍要经过间隔检查。
        self._pause_until = now + float(self._cfg.estimator.pause_after_prediction_s)
        self._episode.reset()
        return prediction
