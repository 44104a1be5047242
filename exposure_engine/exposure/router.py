"""
场景路由

两种回退策略，行为不同，刻意分成两个类：

- SceneFanOutRouter：实验曝光。一条记录复制到它的每个场景；
  没有场景配置的批次合并进默认批次。
- SingleRecordRouter：远程配置 / 特性开关曝光。一条记录按场景顺序逐个发送；
  只要有一个场景发送成功，默认目标就不再使用。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

from loguru import logger

from exposure_engine.exposure.builder import ExposureBuilder
from exposure_engine.metrics.client import MetricsClient
from exposure_engine.metrics.metadata import Metadata
from exposure_engine.models.experiment import ExperimentList
from exposure_engine.schemas.control_data import MetricsConfig
from exposure_engine.schemas.exposure_schema import ExposureGroup, ExposureType


@dataclass
class SceneBuckets:
    """实验曝光按场景分桶的结果"""

    scenes: Dict[int, ExposureGroup] = field(default_factory=dict)
    default: ExposureGroup = field(default_factory=ExposureGroup)


class SceneFanOutRouter:
    """
    实验曝光路由（一对多复制，未匹配合并到默认）

    场景批次按场景 ID 升序发送，任何一次发送失败立即中止并抛出，
    后面的批次不再发送。
    """

    def __init__(self, client: MetricsClient, builder: ExposureBuilder):
        self._client = client
        self._builder = builder

    def split(
        self,
        project_id: str,
        exp_list: ExperimentList,
        exposure_type: ExposureType,
        ignore_report_group_id: Mapping[int, bool],
    ) -> SceneBuckets:
        buckets = SceneBuckets()
        upload_time = self._builder.upload_time()
        for group in exp_list.data.values():
            if ignore_report_group_id.get(group.id, False):
                continue
            if not group.scene_id_list:
                buckets.default.exposures.append(
                    self._builder.build_experiment(
                        project_id, group, exp_list.user_ctx, exposure_type, upload_time
                    )
                )
                continue
            # 每个场景各自一份记录
            for scene_id in group.scene_id_list:
                bucket = buckets.scenes.setdefault(scene_id, ExposureGroup())
                bucket.exposures.append(
                    self._builder.build_experiment(
                        project_id, group, exp_list.user_ctx, exposure_type, upload_time
                    )
                )
        return buckets

    def route(
        self,
        project_id: str,
        exp_list: ExperimentList,
        exposure_type: ExposureType,
        scene_configs: Mapping[int, MetricsConfig],
        default_config: Optional[MetricsConfig],
        ignore_report_group_id: Mapping[int, bool],
    ) -> None:
        buckets = self.split(project_id, exp_list, exposure_type, ignore_report_group_id)
        default_group = buckets.default

        for scene_id in sorted(buckets.scenes):
            group = buckets.scenes[scene_id]
            config = scene_configs.get(scene_id)
            if config is None:
                default_group.exposures.extend(group.exposures)
                continue
            if not config.is_available:
                logger.debug(f"[SceneFanOutRouter] 场景配置未开启，丢弃: project={project_id} scene={scene_id}")
                continue
            self._send(Metadata.from_config(config), group)

        if default_config is None or not default_config.is_available:
            return
        if not default_group.exposures:
            return
        self._send(Metadata.from_config(default_config), default_group)

    def _send(self, metadata: Metadata, group: ExposureGroup) -> None:
        try:
            self._client.log_exposure(metadata, group)
        except Exception as e:
            logger.error(f"sendData fail:{e}")
            raise


class SingleRecordRouter:
    """
    远程配置 / 特性开关曝光路由（按顺序独立发送，任一成功则跳过默认）

    同一行可能发往多个场景目标，场景列表不会提前结束。
    """

    def __init__(self, client: MetricsClient):
        self._client = client

    def route(
        self,
        row: List[str],
        scene_id_list: Sequence[int],
        scene_configs: Mapping[int, MetricsConfig],
        default_config: Optional[MetricsConfig],
    ) -> bool:
        """返回是否发送过（场景或默认）"""
        sent = False
        for scene_id in scene_id_list:
            config = scene_configs.get(scene_id)
            if config is None or not config.is_available:
                continue
            self._send(Metadata.from_config(config), row)
            sent = True

        if sent or default_config is None or not default_config.is_available:
            return sent
        self._send(Metadata.from_config(default_config), row)
        return True

    def _send(self, metadata: Metadata, row: List[str]) -> None:
        try:
            self._client.send_data(metadata, [row])
        except Exception as e:
            logger.error(f"sendData fail:{e}")
            raise
