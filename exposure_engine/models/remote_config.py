"""
远程配置与特性开关数据模型
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from exposure_engine.models.experiment import UserContext


@dataclass
class RemoteConfig:
    # 顺序有意义：单条记录路由按这个顺序逐个尝试场景
    scene_id_list: List[int] = field(default_factory=list)


@dataclass
class ConfigResult:
    """一次远程配置取值的结果"""

    key: str
    data: bytes = b""
    unit_id_type: int = 0
    user_ctx: Optional[UserContext] = None
    remote_config: RemoteConfig = field(default_factory=RemoteConfig)


@dataclass
class FeatureFlag:
    """特性开关，场景列表与取值都委托给包装的 ConfigResult"""

    config_result: Optional[ConfigResult] = None
