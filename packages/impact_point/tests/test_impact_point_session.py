from __future__ import annotations

import numpy as np
import pytest

from impact_point import (
    EstimatorConfig,
    ImpactPointConfig,
    ImpactPointEstimator,
    PredictionResult,
)
from impact_point.testing import make_ballistic_samples


def _estimator(results: list[PredictionResult], **est_kwargs) -> ImpactPointEstimator:
    cfg = ImpactPointConfig(estimator=EstimatorConfig(**est_kwargs))
    return ImpactPointEstimator(
        cfg,
        on_result=results.append,
        rng=np.random.default_rng(0),
        time_source=lambda: pytest.fail("time_source should not be used when now is given"),
    )


def _feed(est: ImpactPointEstimator, samples, t0: float):
    out = []
    for s in samples:
        out.append(est.add_point(s.x, s.y, s.z, now=t0 + s.t))
    return out


def test_session_predicts_on_min_points_then_resets(example_params):
    results: list[PredictionResult] = []
    est = _estimator(results)

    samples = make_ballistic_samples(example_params, [0.0, 0.05, 0.1, 0.15, 0.2])
    out = _feed(est, samples, t0=100.0)

    assert out[:4] == [None] * 4
    assert out[4] is not None and out[4].success
    assert len(results) == 1
    assert results[0].vz == pytest.approx(2.0, abs=1e-6)

    # 预测后 episode 清空、时钟复位。
    assert est.episode.size == 0
    assert not est.episode.clock.is_started()


def test_session_ignores_points_while_paused(example_params):
    results: list[PredictionResult] = []
    est = _estimator(results, pause_after_prediction_s=1.0)

    samples = make_ballistic_samples(example_params, [0.0, 0.05, 0.1, 0.15, 0.2])
    _feed(est, samples, t0=0.0)
    assert est.is_paused(0.5)

    assert est.add_point(0.0, 0.0, 1.0, now=0.7) is None
    assert est.episode.size == 0

    # 暂停结束后的第一个点：距上一个被处理的点（t=0.2）已超过 gap_timeout_s，被丢弃。
    assert not est.is_paused(1.3)
    assert est.add_point(0.0, 0.0, 1.0, now=1.3) is None
    assert est.episode.size == 0
    assert not est.episode.clock.is_started()

    # 紧随其后的点被接受，并成为新的时间零点。
    assert est.add_point(0.0, 0.0, 1.0, now=1.35) is None
    assert est.episode.size == 1
    assert est.episode.samples[0].t == pytest.approx(0.0)
    assert est.episode.clock.start_time == pytest.approx(1.35)
    assert len(results) == 1


def test_session_short_pause_keeps_first_point_after_pause(example_params):
    results: list[PredictionResult] = []
    est = _estimator(results, pause_after_prediction_s=0.1, gap_timeout_s=0.3)

    samples = make_ballistic_samples(example_params, [0.0, 0.05, 0.1, 0.15, 0.2])
    _feed(est, samples, t0=0.0)

    # 暂停到 0.3 s 为止；0.32 s 到达的点距上一点（0.2 s）0.12 s，未超时，直接被接受。
    assert est.add_point(0.0, 0.0, 1.0, now=0.32) is None
    assert est.episode.size == 1
    assert est.episode.clock.start_time == pytest.approx(0.32)


def test_session_min_points_below_ransac_subset_still_predicts(example_params):
    results: list[PredictionResult] = []
    est = _estimator(results, min_points=3)

    samples = make_ballistic_samples(example_params, [0.0, 0.05, 0.1])
    out = _feed(est, samples, t0=0.0)

    assert out[2] is not None and out[2].success
    assert [(r.success, r.reason) for r in results] == [(True, None)]


def test_session_gap_timeout_discards_episode_and_point():
    results: list[PredictionResult] = []
    est = _estimator(results, gap_timeout_s=0.3)

    est.add_point(0.0, 0.0, 1.0, now=10.0)
    est.add_point(0.1, 0.0, 1.1, now=10.1)
    assert est.episode.size == 2

    # 间隔 0.5 s > 0.3 s：清空 episode，当前点也被丢弃。
    assert est.add_point(0.2, 0.0, 1.2, now=10.6) is None
    assert est.episode.size == 0
    assert not est.episode.clock.is_started()

    # 下一个点重新锚定时钟。
    est.add_point(0.3, 0.0, 1.3, now=10.7)
    assert est.episode.size == 1
    assert est.episode.samples[0].t == pytest.approx(0.0)
    assert results == []


def test_session_rejected_point_does_not_start_clock():
    seen: list[int] = []

    def reject_low(x, y, z, accepted):
        seen.append(len(accepted))
        return z > 0.5

    est = ImpactPointEstimator(point_filter=reject_low, rng=np.random.default_rng(0))
    est.add_point(0.0, 0.0, 0.1, now=5.0)
    assert est.episode.size == 0
    assert not est.episode.clock.is_started()

    est.add_point(0.0, 0.0, 1.0, now=5.1)
    est.add_point(0.0, 0.0, 1.0, now=5.2)
    assert est.episode.size == 2
    assert est.episode.clock.start_time == pytest.approx(5.1)
    assert seen == [0, 0, 1]


def test_session_early_estimate_on_third_point(example_params):
    results: list[PredictionResult] = []
    est = _estimator(results, early_estimate_enabled=True)

    samples = make_ballistic_samples(example_params, [0.0, 0.05, 0.1, 0.15, 0.2])
    out = _feed(est, samples, t0=0.0)

    assert out[2] is not None
    assert out[2].result.method == "polynomial"
    assert out[3] is None
    assert out[4] is not None and out[4].result.method == "ballistic"
    assert [r.method for r in results] == ["polynomial", "ballistic"]


def test_session_reset_clears_episode():
    est = ImpactPointEstimator(rng=np.random.default_rng(0))
    est.add_point(0.0, 0.0, 1.0, now=1.0)
    est.reset()
    assert est.episode.size == 0
    assert not est.episode.clock.is_started()
