"""
上报插件注册与分发

按 Metadata.metrics_plugin_name 找到已注册的插件并转发调用
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from loguru import logger

from exposure_engine.core.errors import MetricsPluginNotFoundError
from exposure_engine.metrics.base import IMetricsSink
from exposure_engine.metrics.metadata import Metadata
from exposure_engine.schemas.exposure_schema import ExposureGroup
from exposure_engine.schemas.monitor_schema import MonitorEventGroup


class MetricsClient:
    def __init__(self, sinks: Optional[Dict[str, IMetricsSink]] = None):
        self._sinks: Dict[str, IMetricsSink] = dict(sinks or {})

    def register(self, plugin_name: str, sink: IMetricsSink) -> None:
        if not plugin_name:
            raise ValueError("plugin_name 不能为空")
        if plugin_name in self._sinks:
            logger.warning(f"[MetricsClient] 覆盖已注册的插件: {plugin_name}")
        self._sinks[plugin_name] = sink
        logger.info(f"[MetricsClient] 注册插件: {plugin_name} -> {type(sink).__name__}")

    def get(self, plugin_name: str) -> IMetricsSink:
        sink = self._sinks.get(plugin_name)
        if sink is None:
            raise MetricsPluginNotFoundError(plugin_name)
        return sink

    @property
    def plugin_names(self) -> List[str]:
        return sorted(self._sinks)

    def log_exposure(self, metadata: Metadata, group: ExposureGroup) -> None:
        self.get(metadata.metrics_plugin_name).log_exposure(metadata, group)

    def send_data(self, metadata: Metadata, rows: Sequence[List[str]]) -> None:
        self.get(metadata.metrics_plugin_name).send_data(metadata, rows)

    def log_monitor_event(self, metadata: Metadata, events: MonitorEventGroup) -> None:
        self.get(metadata.metrics_plugin_name).log_monitor_event(metadata, events)
