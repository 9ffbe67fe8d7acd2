"""impact_point 的 YAML 配置加载入口。

约定：
    - YAML 顶层为 mapping，键为 `ImpactPointConfig` 的子配置名（physics/frame/ransac/estimator）。
    - 子节点也是 mapping，键为对应 dataclass 的字段名。
    - 未提供的字段使用 dataclass 默认值；未知字段直接报错（KeyError），避免拼写错误静默失效。

依赖：
    - 本模块依赖 PyYAML（`pyyaml`）。
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from impact_point.configs import (
    EstimatorConfig,
    FrameConfig,
    ImpactPointConfig,
    PhysicsConfig,
    RansacConfig,
)

_SECTIONS: dict[str, type] = {
    "physics": PhysicsConfig,
    "frame": FrameConfig,
    "ransac": RansacConfig,
    "estimator": EstimatorConfig,
}


def _as_mapping(x: Any, *, where: str) -> Mapping[str, Any]:
    if x is None:
        return {}
    if isinstance(x, Mapping):
        return x
    raise TypeError(f"{where} 必须是 mapping，实际是：{type(x).__name__}")


def _section_from_mapping(cls: type, data: Mapping[str, Any]) -> Any:
    if not is_dataclass(cls):
        raise TypeError(f"期望 dataclass 类型，实际是：{cls}")

    allowed = {f.name for f in fields(cls)}
    unknown = sorted(set(data.keys()) - allowed)
    if unknown:
        raise KeyError(f"{cls.__name__} 出现未知字段：{unknown}")

    # YAML 的 list 统一转 tuple，保持 frozen dataclass 可哈希。
    kwargs = {k: (tuple(v) if isinstance(v, list) else v) for k, v in data.items()}
    return cls(**kwargs)


def impact_point_config_from_dict(data: Mapping[str, Any]) -> ImpactPointConfig:
    """从 dict（通常来自 YAML）构造 `ImpactPointConfig`。"""

    unknown = sorted(set(data.keys()) - set(_SECTIONS))
    if unknown:
        raise KeyError(f"ImpactPointConfig 出现未知字段：{unknown}")

    kwargs = {
        name: _section_from_mapping(cls, _as_mapping(data[name], where=name))
        for name, cls in _SECTIONS.items()
        if name in data
    }
    return ImpactPointConfig(**kwargs)


def load_impact_point_config_yaml(path: str | Path) -> ImpactPointConfig:
    """从 YAML 文件加载 `ImpactPointConfig`。"""

    text = Path(path).read_text(encoding="utf-8")
    payload = yaml.safe_load(text)
    return impact_point_config_from_dict(_as_mapping(payload, where="YAML 根节点"))
