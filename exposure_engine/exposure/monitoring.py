"""
运行监控事件

初始化、实验分流、远程配置调用各自上报一条固定结构的事件，
与曝光上报互不依赖。监控是尽力而为：没有配置、未命中采样、上报失败
都不会影响调用方。
"""

from __future__ import annotations

from datetime import timedelta
from typing import Iterable, Optional

from loguru import logger

from exposure_engine.cache import ApplicationCache
from exposure_engine.core.environment import Environment
from exposure_engine.exposure.extra_data import data_as_text, int_list_join
from exposure_engine.metrics.client import MetricsClient
from exposure_engine.metrics.metadata import Metadata
from exposure_engine.metrics.sampling import Sampler, random_sampler
from exposure_engine.models.experiment import ExperimentList
from exposure_engine.models.remote_config import ConfigResult
from exposure_engine.schemas.control_data import MetricsConfig
from exposure_engine.schemas.monitor_schema import MonitorEvent, MonitorEventGroup

EVENT_EXPERIMENT = "exp"
EVENT_REMOTE_CONFIG = "rc"
EVENT_INIT = "init"

# 跳过 4 层调用栈
INVOKE_PATH_SKIP = 4

STATUS_SUCCESS = 0
STATUS_FAILURE = 1


def event_status(err: Optional[BaseException]) -> int:
    if err is None:
        return STATUS_SUCCESS
    code = getattr(err, "code", None)
    if isinstance(code, int) and not isinstance(code, bool):
        return code
    return STATUS_FAILURE


def err_msg(err: Optional[BaseException]) -> str:
    return "" if err is None else str(err)


def latency_us(latency: timedelta) -> float:
    return float(latency // timedelta(microseconds=1))


def experiment_id_list(exp_list: Optional[ExperimentList]) -> str:
    """实验组 ID 列表，用 ; 分隔"""
    if exp_list is None:  # 错误上报时可能没有结果
        return ""
    return int_list_join((group.id for group in exp_list.data.values()), ";")


class MonitorEventEmitter:
    def __init__(
        self,
        cache: ApplicationCache,
        client: MetricsClient,
        *,
        env: Environment | None = None,
        sampler: Sampler = random_sampler,
    ) -> None:
        self._cache = cache
        self._client = client
        self._env = env or Environment()
        self._sampler = sampler

    def experiment_event(
        self,
        project_id: str,
        exp_list: Optional[ExperimentList],
        latency: timedelta,
        option_str: str = "",
        err: Optional[BaseException] = None,
    ) -> None:
        config = self._event_config(project_id)
        if config is None:
            return
        self._emit(
            project_id,
            config,
            config.sampling_interval,
            EVENT_EXPERIMENT,
            latency,
            err,
            input_data=option_str,
            output_data=experiment_id_list(exp_list),
        )

    def remote_config_event(
        self,
        project_id: str,
        config_result: Optional[ConfigResult],
        latency: timedelta,
        option_str: str = "",
        err: Optional[BaseException] = None,
    ) -> None:
        config = self._event_config(project_id)
        if config is None:
            return
        output = ""
        if config_result is not None:
            output = data_as_text(config_result.data)
        self._emit(
            project_id,
            config,
            config.sampling_interval,
            EVENT_REMOTE_CONFIG,
            latency,
            err,
            input_data=option_str,
            output_data=output,
        )

    def init_event(
        self,
        project_ids: Iterable[str],
        latency: timedelta,
        err: Optional[BaseException] = None,
    ) -> None:
        """每个项目独立上报，一个项目失败不影响其他项目"""
        for project_id in project_ids:
            config = self._event_config(project_id)
            if config is None:
                continue
            interval = config.sampling_interval if err is None else config.err_sampling_interval
            self._emit(project_id, config, interval, EVENT_INIT, latency, err)

    def _event_config(self, project_id: str) -> Optional[MetricsConfig]:
        application = self._cache.get_application(project_id)
        if application is None:
            return None
        config = application.control_data.event_metrics_config
        if config is None or not config.is_available:
            return None
        return config

    def _emit(
        self,
        project_id: str,
        config: MetricsConfig,
        interval: int,
        event_name: str,
        latency: timedelta,
        err: Optional[BaseException],
        *,
        input_data: str = "",
        output_data: str = "",
    ) -> None:
        # 先采样，已命中的事件以间隔 1 上报，插件侧不再重复采样
        if not self._sampler(interval):
            return
        # 构造事件会读取环境信息，失败同样只记日志
        try:
            event = MonitorEvent(
                time=int(self._env.now().timestamp()),
                ip=self._env.local_ip(),
                project_id=project_id,
                event_name=event_name,
                latency=latency_us(latency),
                status_code=event_status(err),
                message=err_msg(err),
                sdk_type=self._env.sdk_type,
                sdk_version=self._env.sdk_version,
                invoke_path=self._env.invoke_path(INVOKE_PATH_SKIP),
                input_data=input_data,
                output_data=output_data,
                ext_info=None,
            )
            self._client.log_monitor_event(
                Metadata.from_config(config, sampling_interval=1),
                MonitorEventGroup(events=[event]),
            )
        except Exception as e:
            logger.error(f"[MonitorEventEmitter] 监控事件上报失败: {e}")
