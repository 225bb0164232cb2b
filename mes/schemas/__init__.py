"""API数据模型模块

定义所有 Pydantic 模型（请求/响应结构体）
"""

from .common import CamelModel, OptionalDate
from .master import (
    LineCreate, LineUpdate, LineRead,
    ProcessCreate, ProcessUpdate, ProcessRead,
    EquipmentCreate, EquipmentUpdate, EquipmentRead,
    MaterialCreate, MaterialUpdate, MaterialRead,
    ProductCreate, ProductUpdate, ProductRead,
)
from .routing import (
    RoutingCreate,
    RoutingRead,
    RoutingStepDraft,
    RoutingStepRead,
    RoutingStepsSave,
    StepAppendRequest,
    StepDeleteRequest,
    StepMoveRequest,
    StepChangeRequest,
)
from .bom import (
    BOMCreate,
    BOMRead,
    BOMItemDraft,
    BOMItemRead,
    ProcessStepRead,
    BOMRoutingStepRead,
    BOMItemsSave,
    ItemAddRequest,
    ItemChangeRequest,
    ItemDeleteRequest,
)
from .production import (
    ProductionPlanCreate,
    ProductionPlanUpdate,
    ProductionPlanRead,
    WorkOrderCreate,
    WorkOrderUpdate,
    WorkOrderRead,
    WorkOrderRoutingStepRead,
    WorkOrderMaterialRead,
)
