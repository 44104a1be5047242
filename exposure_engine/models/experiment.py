"""
实验分流结果数据模型

分流逻辑在引擎之外完成，这里只描述曝光上报需要读取的字段
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class UserContext:
    """
    一次上报的主体

    在调用任何曝光接口之前由调用方创建，引擎只读
    """

    unit_id: str  # 主标识
    new_unit_id: str = ""  # unit_id 的别名，非空时写入扩展字段 new_id
    decision_id: str = ""  # 集群/决策 ID
    expanded_data: Dict[str, str] = field(default_factory=dict)


@dataclass
class Group:
    """单个实验组的分流结果"""

    id: int
    layer_key: str = ""
    experiment_key: str = ""
    unit_id_type: int = 0
    scene_id_list: List[int] = field(default_factory=list)


@dataclass
class ExperimentList:
    """
    一次曝光调用的实验结果集合

    data: layer_key -> Group，同一次调用内 layer_key 唯一
    """

    user_ctx: Optional[UserContext]
    data: Dict[str, Group] = field(default_factory=dict)


@dataclass
class ExperimentResult:
    """单层的分流结果"""

    layer_key: str
    group: Optional[Group]
    user_ctx: Optional[UserContext]
