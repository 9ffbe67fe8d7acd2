"""impact_point 预测器相关的日志工具。

说明：
    本包不强制要求外部提供特定的日志框架。这里提供一个默认 logger，
    避免在脚本/单测环境中因为没有 handler 而静默。
    脚本入口（例如 tools/replay_impact_points.py）可通过 level 调整输出级别。
"""

from __future__ import annotations

import logging

LOGGER_NAME = "impact_point"


def default_logger(level: int | str | None = None) -> logging.Logger:
    """获取 impact_point 的默认 logger。

    Args:
        level: 日志级别（如 logging.DEBUG 或 "DEBUG"）；None 表示保持现有级别
            （首次创建时为 INFO）。

    Returns:
        标准库 `logging.Logger` 实例。
    """

    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    if level is not None:
        logger.setLevel(level.upper() if isinstance(level, str) else int(level))
    return logger
