from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MonitorEvent(BaseModel):
    """运行监控事件（初始化 / 实验分流 / 远程配置调用）"""

    time: int
    ip: str
    project_id: str = Field(..., alias="projectId")
    event_name: str = Field(..., alias="eventName")
    latency: float = Field(..., description="耗时，单位微秒")
    status_code: int = Field(..., alias="statusCode")
    message: str = ""
    sdk_type: str = Field(..., alias="sdkType")
    sdk_version: str = Field(..., alias="sdkVersion")
    invoke_path: str = Field(default="", alias="invokePath")
    input_data: str = Field(default="", alias="inputData")
    output_data: str = Field(default="", alias="outputData")
    ext_info: Optional[Dict[str, str]] = Field(default=None, alias="extInfo")

    model_config = ConfigDict(populate_by_name=True)


class MonitorEventGroup(BaseModel):
    events: List[MonitorEvent] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)
