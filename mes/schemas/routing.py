"""工艺路线数据结构定义"""

from datetime import datetime
from typing import List, Literal, Optional, Union

from pydantic import Field

from .common import CamelModel
from ..utils.helpers import next_temporary_id


class RoutingCreate(CamelModel):
    code: str = ""
    name: str = ""
    status: str = "active"


class RoutingRead(CamelModel):
    id: int
    code: str
    name: str
    status: str
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None


class RoutingStepDraft(CamelModel):
    """编辑中的工序步骤，新增步骤使用临时ID"""
    id: int = Field(default_factory=next_temporary_id)
    routing_id: int = 0
    sequence: int = 0
    line: str = ""
    process: str = ""
    main_equipment: str = ""
    standard_man_hours: float = 0
    previous_process: str = "-"
    next_process: str = "-"


class RoutingStepRead(RoutingStepDraft):
    id: int


class RoutingStepsSave(CamelModel):
    routing_id: Optional[int] = None
    steps: Optional[List[RoutingStepDraft]] = None


# 无状态编辑请求：传入当前编辑列表，返回编辑后的列表

class StepAppendRequest(CamelModel):
    routing_id: int
    steps: List[RoutingStepDraft] = []


class StepDeleteRequest(CamelModel):
    steps: List[RoutingStepDraft]
    step_id: int


class StepMoveRequest(CamelModel):
    steps: List[RoutingStepDraft]
    step_id: int
    direction: Literal["up", "down"]


class StepChangeRequest(CamelModel):
    steps: List[RoutingStepDraft]
    step_id: int
    field: str
    value: Union[float, str]
