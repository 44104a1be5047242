from __future__ import annotations

from enum import IntEnum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ExposureType(IntEnum):
    EXPOSURE_TYPE_UNKNOWN = 0
    EXPOSURE_TYPE_AUTOMATIC = 1
    EXPOSURE_TYPE_MANUAL = 2


class Exposure(BaseModel):
    """实验曝光记录（结构化上报）"""

    unit_id: str = Field(..., alias="unitId")
    group_id: int = Field(..., alias="groupId")
    project_id: str = Field(..., alias="projectId")
    time: int
    layer_key: str = Field(..., alias="layerKey")
    exp_key: str = Field(..., alias="expKey")
    unit_type: str = Field(..., alias="unitType")
    cluster_id: str = Field(..., alias="clusterId")
    sdk_type: str = Field(..., alias="sdkType")
    sdk_version: str = Field(..., alias="sdkVersion")
    exposure_type: ExposureType = Field(..., alias="exposureType")
    extra_data: Optional[Dict[str, str]] = Field(default=None, alias="extraData")

    model_config = ConfigDict(populate_by_name=True)


class ExposureGroup(BaseModel):
    """发往同一个上报目标的一批曝光记录"""

    exposures: List[Exposure] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)
