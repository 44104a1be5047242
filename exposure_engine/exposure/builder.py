"""
曝光记录构建

把分流结果 / 远程配置 / 特性开关转换成上报记录，无副作用
"""

from __future__ import annotations

from typing import List

from exposure_engine.core.environment import Environment
from exposure_engine.exposure.extra_data import (
    data_as_text,
    extra_data_from_user_ctx,
    int_list_join,
    marshal_expanded_data,
)
from exposure_engine.models.experiment import Group, UserContext
from exposure_engine.models.remote_config import ConfigResult, FeatureFlag
from exposure_engine.schemas.exposure_schema import Exposure, ExposureType

# 远程配置曝光行的上传时间格式（本地时钟）
ROW_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class ExposureBuilder:
    def __init__(self, env: Environment):
        self.env = env

    def upload_time(self) -> int:
        """一次调用内所有实验曝光共用的时间戳（秒）"""
        return int(self.env.now().timestamp())

    def build_experiment(
        self,
        project_id: str,
        group: Group,
        user_ctx: UserContext,
        exposure_type: ExposureType,
        upload_time: int,
    ) -> Exposure:
        return Exposure(
            unit_id=user_ctx.unit_id,
            group_id=group.id,
            project_id=project_id,
            time=upload_time,
            layer_key=group.layer_key,
            exp_key=group.experiment_key,
            unit_type=str(int(group.unit_id_type)),
            cluster_id=user_ctx.decision_id,
            sdk_type=self.env.sdk_type,
            sdk_version=self.env.sdk_version,
            exposure_type=exposure_type,
            extra_data=extra_data_from_user_ctx(user_ctx),
        )

    def build_remote_config_row(
        self,
        project_id: str,
        config: ConfigResult,
        exposure_type: ExposureType,
    ) -> List[str]:
        """
        远程配置曝光行

        字段位置是对外的上报协议，不能调整顺序
        """
        user_ctx = config.user_ctx
        return [
            user_ctx.unit_id,
            project_id,
            config.key,
            self.env.sdk_version,
            data_as_text(config.data),
            self.env.now().strftime(ROW_TIME_FORMAT),
            self.env.env_type,
            str(int(config.unit_id_type)),
            int_list_join(config.remote_config.scene_id_list, "#"),
            exposure_type.name,
            marshal_expanded_data(user_ctx),
        ]

    def build_feature_flag_row(
        self,
        project_id: str,
        feature_flag: FeatureFlag,
        exposure_type: ExposureType,
    ) -> List[str]:
        return self.build_remote_config_row(project_id, feature_flag.config_result, exposure_type)
