"""
上报插件接口定义

每个具体上报目标（内存、日志、远端服务...）实现同一组三种调用形态，
彼此之间没有继承关系。
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from exposure_engine.metrics.metadata import Metadata
from exposure_engine.schemas.exposure_schema import ExposureGroup
from exposure_engine.schemas.monitor_schema import MonitorEventGroup


class IMetricsSink(ABC):
    """
    上报插件接口

    任何一个方法失败都应抛出异常（一般为 SinkDispatchError），
    由调用方决定是否传播。
    """

    @abstractmethod
    def log_exposure(self, metadata: Metadata, group: ExposureGroup) -> None:
        """结构化上报一批实验曝光记录"""

    @abstractmethod
    def send_data(self, metadata: Metadata, rows: Sequence[List[str]]) -> None:
        """按行上报，每行是按位置排列的字符串列表"""

    @abstractmethod
    def log_monitor_event(self, metadata: Metadata, events: MonitorEventGroup) -> None:
        """上报运行监控事件"""
