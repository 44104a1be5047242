"""
曝光上报模块

记录构建、场景路由、上报入口与运行监控事件
"""

from exposure_engine.exposure.builder import ExposureBuilder
from exposure_engine.exposure.monitoring import MonitorEventEmitter
from exposure_engine.exposure.router import SceneBuckets, SceneFanOutRouter, SingleRecordRouter
from exposure_engine.exposure.service import ExposureService

__all__ = [
    "ExposureBuilder",
    "ExposureService",
    "MonitorEventEmitter",
    "SceneBuckets",
    "SceneFanOutRouter",
    "SingleRecordRouter",
]
