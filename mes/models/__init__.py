"""数据库模型模块

定义所有 SQLAlchemy ORM 模型
"""

from ..database.connection import Base
from .master import Line, Process, Equipment, Material, Product
from .routing import Routing, RoutingStep
from .bom import BOM, BOMItem, BOMRoutingStep
from .production import (
    PlanStatus,
    OrderStatus,
    ProductionPlan,
    WorkOrder,
    WorkOrderRoutingStep,
    WorkOrderMaterial,
)

__all__ = [
    "Base",
    "Line",
    "Process",
    "Equipment",
    "Material",
    "Product",
    "Routing",
    "RoutingStep",
    "BOM",
    "BOMItem",
    "BOMRoutingStep",
    "PlanStatus",
    "OrderStatus",
    "ProductionPlan",
    "WorkOrder",
    "WorkOrderRoutingStep",
    "WorkOrderMaterial",
]
