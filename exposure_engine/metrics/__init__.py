"""
上报插件模块

提供插件接口、插件注册分发与内置插件
"""

from exposure_engine.metrics.base import IMetricsSink
from exposure_engine.metrics.client import MetricsClient
from exposure_engine.metrics.metadata import Metadata
from exposure_engine.metrics.sampling import Sampler, random_sampler
from exposure_engine.metrics.sinks import LoguruSink, MemorySink

__all__ = [
    "IMetricsSink",
    "MetricsClient",
    "Metadata",
    "Sampler",
    "random_sampler",
    "LoguruSink",
    "MemorySink",
]
