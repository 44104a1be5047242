"""
上报客户端配置工厂

根据配置注册内置插件
"""

from typing import Optional

from loguru import logger

from exposure_engine.core.config import settings
from exposure_engine.metrics.client import MetricsClient
from exposure_engine.metrics.sinks import LoguruSink, MemorySink


def create_metrics_client(
    default_plugin: Optional[str] = None,
    alias_default_to_log: Optional[bool] = None,
) -> MetricsClient:
    """
    创建上报客户端

    内置插件以 "loguru" 和 "memory" 注册。

    alias_default_to_log 开启时，default_plugin 若不是内置插件名，
    会把日志插件也注册到该名字下：项目配置里指向该插件的上报只会写日志，
    不会报 MetricsPluginNotFoundError。只应在没有真实上报后端的本地环境开启。

    Args:
        default_plugin: 默认插件名（可选，默认取 DEFAULT_METRICS_PLUGIN）
        alias_default_to_log: 是否做上述别名（可选，默认取 ALIAS_DEFAULT_PLUGIN_TO_LOG）
    """
    default_plugin = default_plugin or settings.DEFAULT_METRICS_PLUGIN
    if alias_default_to_log is None:
        alias_default_to_log = settings.ALIAS_DEFAULT_PLUGIN_TO_LOG

    client = MetricsClient()
    loguru_sink = LoguruSink(level=settings.LOGURU_SINK_LEVEL)
    client.register("loguru", loguru_sink)
    client.register("memory", MemorySink())

    if alias_default_to_log and default_plugin not in ("loguru", "memory"):
        logger.warning(f"[MetricsFactory] 插件 {default_plugin} 以日志插件代替（仅限本地环境）")
        client.register(default_plugin, loguru_sink)

    logger.info(f"[MetricsFactory] 上报客户端创建完成: plugins={client.plugin_names}")
    return client
