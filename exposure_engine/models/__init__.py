"""
数据模型模块

定义曝光上报引擎读取的分流结果与远程配置结构
"""

from exposure_engine.models.experiment import (
    ExperimentList,
    ExperimentResult,
    Group,
    UserContext,
)
from exposure_engine.models.remote_config import ConfigResult, FeatureFlag, RemoteConfig

__all__ = [
    "UserContext",
    "Group",
    "ExperimentList",
    "ExperimentResult",
    "RemoteConfig",
    "ConfigResult",
    "FeatureFlag",
]
