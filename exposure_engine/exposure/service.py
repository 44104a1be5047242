from __future__ import annotations

from typing import Optional

from loguru import logger

from exposure_engine.cache import ApplicationCache
from exposure_engine.core.environment import Environment
from exposure_engine.exposure.builder import ExposureBuilder
from exposure_engine.exposure.router import SceneFanOutRouter, SingleRecordRouter
from exposure_engine.metrics.client import MetricsClient
from exposure_engine.models.experiment import ExperimentList, ExperimentResult
from exposure_engine.models.remote_config import ConfigResult, FeatureFlag
from exposure_engine.schemas.control_data import Application
from exposure_engine.schemas.exposure_schema import ExposureType


class ExposureService:
    """曝光上报入口。

    关闭自动曝光时由调用方手动记录曝光，避免先取实验结果再决定是否使用时产生的过度曝光。
    没有上报配置、没有数据都视为无事可做，直接返回；
    上报插件失败时记录日志并向调用方抛出。
    """

    def __init__(
        self,
        cache: ApplicationCache,
        client: MetricsClient,
        *,
        env: Environment | None = None,
        disable_report: bool = False,
    ) -> None:
        self._cache = cache
        self._disable_report = disable_report
        builder = ExposureBuilder(env or Environment())
        self._builder = builder
        self._experiment_router = SceneFanOutRouter(client, builder)
        self._single_router = SingleRecordRouter(client)

    def log_experiments_exposure(self, project_id: str, exp_list: Optional[ExperimentList]) -> None:
        self._exposure_experiments(project_id, exp_list, ExposureType.EXPOSURE_TYPE_MANUAL)

    def log_experiment_exposure(self, project_id: str, result: Optional[ExperimentResult]) -> None:
        if result is None or result.user_ctx is None or result.group is None:
            return
        self._exposure_experiments(
            project_id,
            ExperimentList(user_ctx=result.user_ctx, data={result.layer_key: result.group}),
            ExposureType.EXPOSURE_TYPE_MANUAL,
        )

    def log_feature_flag_exposure(self, project_id: str, feature_flag: Optional[FeatureFlag]) -> None:
        self._exposure_feature_flag(project_id, feature_flag, ExposureType.EXPOSURE_TYPE_MANUAL)

    def log_remote_config_exposure(self, project_id: str, config: Optional[ConfigResult]) -> None:
        self._exposure_remote_config(project_id, config, ExposureType.EXPOSURE_TYPE_MANUAL)

    def _application(self, project_id: str) -> Optional[Application]:
        if self._disable_report:
            return None
        application = self._cache.get_application(project_id)
        if application is None:
            logger.debug(f"[ExposureService] 项目没有缓存配置: project={project_id}")
            return None
        if application.control_data.is_disable_report:
            return None
        return application

    def _exposure_experiments(
        self,
        project_id: str,
        exp_list: Optional[ExperimentList],
        exposure_type: ExposureType,
    ) -> None:
        if exp_list is None or exp_list.user_ctx is None or not exp_list.data:
            return
        application = self._application(project_id)
        if application is None:
            return
        control = application.control_data
        scene_configs = control.experiment_metrics_config
        default_config = control.default_experiment_metrics_config
        if not scene_configs and default_config is None:
            return
        self._experiment_router.route(
            project_id,
            exp_list,
            exposure_type,
            scene_configs,
            default_config,
            control.ignore_report_group_id,
        )

    def _exposure_feature_flag(
        self,
        project_id: str,
        feature_flag: Optional[FeatureFlag],
        exposure_type: ExposureType,
    ) -> None:
        if feature_flag is None or feature_flag.config_result is None:
            return
        config = feature_flag.config_result
        if config.user_ctx is None:
            return
        application = self._application(project_id)
        if application is None:
            return
        control = application.control_data
        scene_configs = control.feature_flag_metrics_config
        default_config = control.default_feature_flag_metrics_config
        if not scene_configs and default_config is None:
            return
        row = self._builder.build_feature_flag_row(project_id, feature_flag, exposure_type)
        self._single_router.route(row, config.remote_config.scene_id_list, scene_configs, default_config)

    def _exposure_remote_config(
        self,
        project_id: str,
        config: Optional[ConfigResult],
        exposure_type: ExposureType,
    ) -> None:
        if config is None or config.user_ctx is None:
            return
        application = self._application(project_id)
        if application is None:
            return
        control = application.control_data
        scene_configs = control.remote_config_metrics_config
        default_config = control.default_remote_config_metrics_config
        if not scene_configs and default_config is None:
            return
        row = self._builder.build_remote_config_row(project_id, config, exposure_type)
        self._single_router.route(row, config.remote_config.scene_id_list, scene_configs, default_config)
