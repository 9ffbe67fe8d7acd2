"""episode 时钟：记录当前 episode 的时间零点。

说明：
    - 时间统一使用 float 秒，来源由调用方提供（在线会话默认 `time.monotonic()`）。
    - 不阻塞、不读系统时钟；便于离线回放与单测复现。
"""

from __future__ import annotations


class EpisodeClock:
    """相对时间时钟。

    用法：
        clock.start(now)            # 仅第一次调用生效
        t = clock.relative_time(now)
        clock.reset()               # 下一次 start() 重新锚定零点
    """

    def __init__(self) -> None:
        self._start: float | None = None

    def start(self, now: float) -> None:
        if self._start is None:
            self._start = float(now)

    def is_started(self) -> bool:
        return self._start is not None

    @property
    def start_time(self) -> float | None:
        return self._start

    def relative_time(self, now: float) -> float:
        """返回自零点以来的秒数；未启动时返回 0.0（调用方应先检查 is_started）。"""

        if self._start is None:
            return 0.0
        return float(now) - float(self._start)

    def reset(self) -> None:
        self._start = None
