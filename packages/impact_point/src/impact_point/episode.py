"""一次跟踪尝试（episode）内的观测缓冲。

设计目标：
    - 把“点序列 + 时间戳序列 + 时钟零点”放在一个对象里维护，保证三者一致：
        1) 点与时间戳始终等长、按下标对齐；
        2) 时钟已启动 <=> 缓冲非空；
        3) reset() 一次性清空三者。
    - 拟合/求解等算法编排属于 `impact_point.predictor`，这里不做任何拟合。
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from impact_point.clock import EpisodeClock
from impact_point.types import Sample


@dataclass
class Episode:
    """在线观测缓冲区。"""

    clock: EpisodeClock = field(default_factory=EpisodeClock)
    samples: list[Sample] = field(default_factory=list)

    def reset(self) -> None:
        """清空点序列与时间戳，并让时钟在下一个点重新锚定零点。"""

        self.samples.clear()
        self.clock.reset()

    @property
    def size(self) -> int:
        return int(len(self.samples))

    @property
    def timestamps(self) -> list[float]:
        return [float(s.t) for s in self.samples]

    def append(self, x: float, y: float, z: float, *, now: float) -> Sample:
        """追加一个已通过有效性检查的点，返回带相对时间戳的 Sample。"""

        # 时钟只在第一个被接受的点上启动，被拒绝的点不影响零点。
        if not self.clock.is_started():
            self.clock.start(now)

        s = Sample(x=float(x), y=float(y), z=float(z), t=float(self.clock.relative_time(now)))
        self.samples.append(s)
        return s

    def as_arrays(self) -> tuple[np.ndarray, np.ndarray]:
        """以 ndarray 形式返回 (points (N,3), times (N,))。"""

        return samples_to_arrays(self.samples)


def samples_to_arrays(samples: list[Sample] | tuple[Sample, ...]) -> tuple[np.ndarray, np.ndarray]:
    """把 Sample 序列拆成 (points (N,3), times (N,))。"""

    if not samples:
        return np.zeros((0, 3), dtype=float), np.zeros((0,), dtype=float)
    points = np.asarray([s.xyz() for s in samples], dtype=float)
    times = np.asarray([float(s.t) for s in samples], dtype=float)
    return points, times
