from __future__ import annotations

from typing import Dict, Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from exposure_engine.models.experiment import ExperimentList, Group, UserContext
from exposure_engine.models.remote_config import ConfigResult, RemoteConfig


T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """通用接口响应包装。"""

    code: int = 200
    msg: str = "success"
    data: T

    model_config = ConfigDict(populate_by_name=True)


class UserContextIn(BaseModel):
    unit_id: str = Field(..., alias="unitId")
    new_unit_id: str = Field(default="", alias="newUnitId")
    decision_id: str = Field(default="", alias="decisionId")
    expanded_data: Dict[str, str] = Field(default_factory=dict, alias="expandedData")

    model_config = ConfigDict(populate_by_name=True)

    def to_domain(self) -> UserContext:
        return UserContext(
            unit_id=self.unit_id,
            new_unit_id=self.new_unit_id,
            decision_id=self.decision_id,
            expanded_data=dict(self.expanded_data),
        )


class GroupIn(BaseModel):
    id: int
    layer_key: str = Field(..., alias="layerKey")
    experiment_key: str = Field(default="", alias="experimentKey")
    unit_id_type: int = Field(default=0, alias="unitIdType")
    scene_id_list: List[int] = Field(default_factory=list, alias="sceneIdList")

    model_config = ConfigDict(populate_by_name=True)


class ExperimentExposureRequest(BaseModel):
    user_ctx: UserContextIn = Field(..., alias="userCtx")
    groups: List[GroupIn] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    def to_domain(self) -> ExperimentList:
        # 同一个 layerKey 出现多次时以最后一个为准
        return ExperimentList(
            user_ctx=self.user_ctx.to_domain(),
            data={
                g.layer_key: Group(
                    id=g.id,
                    layer_key=g.layer_key,
                    experiment_key=g.experiment_key,
                    unit_id_type=g.unit_id_type,
                    scene_id_list=list(g.scene_id_list),
                )
                for g in self.groups
            },
        )


class ConfigExposureRequest(BaseModel):
    user_ctx: UserContextIn = Field(..., alias="userCtx")
    key: str
    data: str = ""
    unit_id_type: int = Field(default=0, alias="unitIdType")
    scene_id_list: List[int] = Field(default_factory=list, alias="sceneIdList")

    model_config = ConfigDict(populate_by_name=True)

    def to_domain(self) -> ConfigResult:
        return ConfigResult(
            key=self.key,
            data=self.data.encode("utf-8"),
            unit_id_type=self.unit_id_type,
            user_ctx=self.user_ctx.to_domain(),
            remote_config=RemoteConfig(scene_id_list=list(self.scene_id_list)),
        )
