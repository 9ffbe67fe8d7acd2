"""离线/单测用的合成数据工具。"""

from impact_point.testing.synthetic import (
    SyntheticNoise,
    make_ballistic_points,
    make_ballistic_samples,
)

__all__ = [
    "SyntheticNoise",
    "make_ballistic_points",
    "make_ballistic_samples",
]
