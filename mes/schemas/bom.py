"""BOM 数据结构定义"""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import Field, field_validator

from .common import CamelModel
from ..utils.helpers import next_temporary_id


class BOMCreate(CamelModel):
    product_code: str = ""
    product_name: str = ""
    routing_id: Optional[int] = None
    routing_name: str = ""
    revision: Optional[str] = None  # 为空时自动生成 Rev.NN
    status: str = "active"


class BOMRead(CamelModel):
    id: int
    product_code: str
    product_name: str
    routing_id: Optional[int] = None
    routing_name: str = ""
    revision: str
    status: str
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None


class BOMItemDraft(CamelModel):
    """编辑中的 BOM 物料行，新增行使用临时ID"""
    id: int = Field(default_factory=next_temporary_id)
    bom_id: int = 0
    process_sequence: int = 0
    process_name: str = ""
    material_code: str = ""
    material_name: str = ""
    quantity: float = 0
    unit: str = "EA"
    loss_rate: float = 0
    alternate_material: str = ""

    @field_validator("alternate_material", "process_name", mode="before")
    @classmethod
    def _none_to_blank(cls, value):
        return "" if value is None else value

    @field_validator("loss_rate", mode="before")
    @classmethod
    def _none_to_zero(cls, value):
        return 0 if value is None else value


class BOMItemRead(BOMItemDraft):
    id: int


class ProcessStepRead(CamelModel):
    """BOM 工序信息（快照或当前路线的步骤）"""
    id: int
    sequence: int
    line: str
    process: str
    main_equipment: str
    standard_man_hours: float
    previous_process: str
    next_process: str


class BOMRoutingStepRead(CamelModel):
    id: int
    bom_id: int
    sequence: int
    line: str
    process: str
    main_equipment: str
    standard_man_hours: float
    previous_process: str
    next_process: str


class BOMItemsSave(CamelModel):
    bom_id: Optional[int] = None
    items: Optional[List[BOMItemDraft]] = None


class ItemAddRequest(CamelModel):
    bom_id: int
    items: List[BOMItemDraft] = []
    process_sequence: Optional[int] = None


class ItemChangeRequest(CamelModel):
    items: List[BOMItemDraft]
    item_id: int
    field: str
    value: Union[float, str]


class ItemDeleteRequest(CamelModel):
    items: List[BOMItemDraft]
    item_id: int
