from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class MetricsMetadata(BaseModel):
    """上报目标表信息"""

    name: str
    id: str = ""
    token: str = ""

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class MetricsConfig(BaseModel):
    """单个上报目标的路由策略"""

    is_enable: bool = Field(default=False, alias="isEnable")
    plugin_name: str = Field(default="", alias="pluginName")
    sampling_interval: int = Field(default=1, alias="samplingInterval")
    err_sampling_interval: int = Field(default=1, alias="errSamplingInterval")
    metadata: Optional[MetricsMetadata] = None

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @property
    def is_available(self) -> bool:
        """开启且配置了目标表"""
        return self.is_enable and self.metadata is not None


class ControlData(BaseModel):
    """
    项目级上报控制数据

    每个类别（实验 / 远程配置 / 特性开关）各有一份 场景ID -> MetricsConfig 的映射
    以及一个默认配置；监控事件只有一份配置。
    """

    is_disable_report: bool = Field(default=False, alias="isDisableReport")

    experiment_metrics_config: Dict[int, MetricsConfig] = Field(
        default_factory=dict, alias="experimentMetricsConfig"
    )
    default_experiment_metrics_config: Optional[MetricsConfig] = Field(
        default=None, alias="defaultExperimentMetricsConfig"
    )

    remote_config_metrics_config: Dict[int, MetricsConfig] = Field(
        default_factory=dict, alias="remoteConfigMetricsConfig"
    )
    default_remote_config_metrics_config: Optional[MetricsConfig] = Field(
        default=None, alias="defaultRemoteConfigMetricsConfig"
    )

    feature_flag_metrics_config: Dict[int, MetricsConfig] = Field(
        default_factory=dict, alias="featureFlagMetricsConfig"
    )
    default_feature_flag_metrics_config: Optional[MetricsConfig] = Field(
        default=None, alias="defaultFeatureFlagMetricsConfig"
    )

    event_metrics_config: Optional[MetricsConfig] = Field(default=None, alias="eventMetricsConfig")

    # 不上报曝光的实验组 ID，值为 True 时生效
    ignore_report_group_id: Dict[int, bool] = Field(default_factory=dict, alias="ignoreReportGroupId")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class Application(BaseModel):
    """按项目缓存的配置快照，一次调用内视为不可变"""

    project_id: str = Field(..., alias="projectId")
    control_data: ControlData = Field(default_factory=ControlData, alias="controlData")

    model_config = ConfigDict(populate_by_name=True, frozen=True)
