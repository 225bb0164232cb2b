"""生产计划 / 作业指示数据结构定义"""

from datetime import date, datetime
from typing import Optional

from .common import CamelModel, OptionalDate


class ProductionPlanCreate(CamelModel):
    plan_code: Optional[str] = None  # 为空时自动生成
    plan_date: OptionalDate = None
    product_code: str = ""
    product_name: str = ""
    plan_quantity: float = 0
    unit: Optional[str] = None
    start_date: OptionalDate = None
    end_date: OptionalDate = None
    status: Optional[str] = None
    manager: str = ""
    note: str = ""


class ProductionPlanUpdate(CamelModel):
    id: Optional[int] = None
    plan_date: OptionalDate = None
    product_code: Optional[str] = None
    product_name: Optional[str] = None
    plan_quantity: Optional[float] = None
    unit: Optional[str] = None
    start_date: OptionalDate = None
    end_date: OptionalDate = None
    status: Optional[str] = None
    manager: Optional[str] = None
    note: Optional[str] = None


class ProductionPlanRead(CamelModel):
    id: int
    plan_code: str
    plan_date: date
    product_code: str
    product_name: str
    plan_quantity: float
    unit: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: str
    manager: str = ""
    note: str = ""
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None


class WorkOrderCreate(CamelModel):
    order_code: Optional[str] = None  # 为空时自动生成
    order_date: OptionalDate = None
    plan_code: str = ""
    product_code: str = ""
    product_name: str = ""
    order_quantity: float = 0
    unit: Optional[str] = None
    line: str = ""
    start_date: OptionalDate = None
    end_date: OptionalDate = None
    status: Optional[str] = None
    worker: str = ""
    note: str = ""


class WorkOrderUpdate(CamelModel):
    id: Optional[int] = None
    order_date: OptionalDate = None
    plan_code: Optional[str] = None
    product_code: Optional[str] = None
    product_name: Optional[str] = None
    order_quantity: Optional[float] = None
    unit: Optional[str] = None
    line: Optional[str] = None
    start_date: OptionalDate = None
    end_date: OptionalDate = None
    status: Optional[str] = None
    worker: Optional[str] = None
    note: Optional[str] = None


class WorkOrderRead(CamelModel):
    id: int
    order_code: str
    order_date: date
    plan_code: str
    product_code: str
    product_name: str
    order_quantity: float
    unit: str
    line: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: str
    worker: str = ""
    note: str = ""
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None


class WorkOrderRoutingStepRead(CamelModel):
    id: int
    work_order_id: int
    sequence: int
    line: str
    process: str
    main_equipment: str
    standard_man_hours: float
    previous_process: str
    next_process: str


class WorkOrderMaterialRead(CamelModel):
    id: int
    work_order_id: int
    process_sequence: int
    process_name: str
    material_code: str
    material_name: str
    quantity: float
    unit: str
    loss_rate: float
    alternate_material: str
