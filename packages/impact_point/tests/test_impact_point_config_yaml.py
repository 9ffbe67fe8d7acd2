from __future__ import annotations

import textwrap

import pytest

from impact_point import ImpactPointConfig, PhysicsConfig
from impact_point.config_yaml import (
    _section_from_mapping,
    impact_point_config_from_dict,
    load_impact_point_config_yaml,
)


def test_load_impact_point_config_yaml_partial_override(tmp_path):
    p = tmp_path / "cfg.yaml"
    p.write_text(
        textwrap.dedent(
            """
            physics:
              gravity: 9.81
            frame:
              lidar_to_target_z: -1.2
              target_height: 0.8
            ransac:
              threshold: 0.05
              seed: 42
            estimator:
              early_estimate_enabled: true
            """
        ).strip()
        + "\n",
        encoding="utf-8",
    )

    cfg = load_impact_point_config_yaml(p)

    assert float(cfg.physics.gravity) == pytest.approx(9.81)
    assert cfg.frame.target_plane_z() == pytest.approx(-0.4)
    assert float(cfg.ransac.threshold) == pytest.approx(0.05)
    assert cfg.ransac.seed == 42
    assert cfg.estimator.early_estimate_enabled is True

    # 未覆盖的字段仍应使用默认值
    assert int(cfg.estimator.min_points) == 5
    assert int(cfg.ransac.max_iterations) == 1000
    assert float(cfg.frame.lidar_to_target_x) == 0.0


def test_load_impact_point_config_yaml_empty_file_gives_defaults(tmp_path):
    p = tmp_path / "cfg.yaml"
    p.write_text("", encoding="utf-8")

    assert load_impact_point_config_yaml(p) == ImpactPointConfig()


def test_load_impact_point_config_yaml_unknown_key_raises(tmp_path):
    p = tmp_path / "cfg.yaml"
    p.write_text("unknown_top_level: 1\n", encoding="utf-8")

    with pytest.raises(KeyError):
        _ = load_impact_point_config_yaml(p)


def test_config_from_dict_unknown_field_raises():
    with pytest.raises(KeyError):
        _ = impact_point_config_from_dict({"ransac": {"treshold": 0.2}})


def test_config_from_dict_section_must_be_mapping():
    with pytest.raises(TypeError):
        _ = impact_point_config_from_dict({"frame": [1, 2, 3]})


def test_config_rejects_non_positive_gravity():
    with pytest.raises(ValueError):
        _ = ImpactPointConfig(physics=PhysicsConfig(gravity=0.0))

    with pytest.raises(ValueError):
        _ = impact_point_config_from_dict({"estimator": {"min_points": 1}})


def test_section_from_mapping_requires_dataclass_type():
    with pytest.raises(TypeError):
        _ = _section_from_mapping(dict, {})


@pytest.mark.parametrize(
    "estimator",
    [
        {"max_extrapolation_ratio": -1.0},
        {"gap_timeout_s": 0.0},
        {"pause_after_prediction_s": -0.5},
    ],
)
def test_config_rejects_invalid_estimator_values(estimator):
    with pytest.raises(ValueError):
        _ = impact_point_config_from_dict({"estimator": estimator})


def test_config_accepts_zero_extrapolation_ratio():
    cfg = impact_point_config_from_dict({"estimator": {"max_extrapolation_ratio": 0.0}})
    assert float(cfg.estimator.max_extrapolation_ratio) == 0.0
