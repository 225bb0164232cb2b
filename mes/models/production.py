"""生产计划 / 作业指示数据库模型

WorkOrder 通过 plan_code 字符串引用 ProductionPlan（不是外键），
二者互不拥有。作业指示创建时会复制最新 BOM 的工序与物料快照。
"""

import enum

from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database.connection import Base


class PlanStatus(str, enum.Enum):
    planned = "계획"
    in_progress = "진행중"
    completed = "완료"
    cancelled = "취소"


class OrderStatus(str, enum.Enum):
    waiting = "대기"
    in_progress = "진행중"
    completed = "완료"
    on_hold = "보류"


class ProductionPlan(Base):
    """生产计划表"""
    __tablename__ = "production_plans"

    id = Column(Integer, primary_key=True, index=True)
    plan_code = Column(String(50), unique=True, nullable=False, index=True)  # PLAN-YYYY-NNN
    plan_date = Column(Date, nullable=False)
    product_code = Column(String(50), nullable=False)
    product_name = Column(String(255), nullable=False)
    plan_quantity = Column(Float, nullable=False)
    unit = Column(String(20), nullable=False, default="EA")
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    status = Column(String(10), nullable=False, default=PlanStatus.planned.value)
    manager = Column(String(100), nullable=False, default="")
    note = Column(String(500), nullable=False, default="")
    created_at = Column(DateTime, server_default=func.now())
    modified_at = Column(DateTime, nullable=True)


class WorkOrder(Base):
    """作业指示表"""
    __tablename__ = "work_orders"

    id = Column(Integer, primary_key=True, index=True)
    order_code = Column(String(50), unique=True, nullable=False, index=True)  # WO-YYYY-NNN
    order_date = Column(Date, nullable=False)
    plan_code = Column(String(50), nullable=False, default="", index=True)
    product_code = Column(String(50), nullable=False)
    product_name = Column(String(255), nullable=False)
    order_quantity = Column(Float, nullable=False)
    unit = Column(String(20), nullable=False, default="EA")
    line = Column(String(255), nullable=False, default="")
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    status = Column(String(10), nullable=False, default=OrderStatus.waiting.value)
    worker = Column(String(100), nullable=False, default="")
    note = Column(String(500), nullable=False, default="")
    created_at = Column(DateTime, server_default=func.now())
    modified_at = Column(DateTime, nullable=True)

    routing_steps = relationship(
        "WorkOrderRoutingStep",
        cascade="all, delete-orphan",
        order_by="WorkOrderRoutingStep.sequence",
    )
    materials = relationship(
        "WorkOrderMaterial",
        cascade="all, delete-orphan",
        order_by="WorkOrderMaterial.process_sequence",
    )


class WorkOrderRoutingStep(Base):
    """作业指示工序快照"""
    __tablename__ = "work_order_routing_steps"

    id = Column(Integer, primary_key=True, index=True)
    work_order_id = Column(Integer, ForeignKey("work_orders.id", ondelete="CASCADE"), nullable=False, index=True)
    sequence = Column(Integer, nullable=False)
    line = Column(String(255), nullable=False)
    process = Column(String(255), nullable=False)
    main_equipment = Column(String(255), nullable=False)
    standard_man_hours = Column(Float, nullable=False, default=0)
    previous_process = Column(String(255), nullable=False, default="-")
    next_process = Column(String(255), nullable=False, default="-")


class WorkOrderMaterial(Base):
    """作业指示物料快照"""
    __tablename__ = "work_order_materials"

    id = Column(Integer, primary_key=True, index=True)
    work_order_id = Column(Integer, ForeignKey("work_orders.id", ondelete="CASCADE"), nullable=False, index=True)
    process_sequence = Column(Integer, nullable=False)
    process_name = Column(String(255), nullable=False, default="")
    material_code = Column(String(50), nullable=False)
    material_name = Column(String(255), nullable=False)
    quantity = Column(Float, nullable=False)
    unit = Column(String(20), nullable=False, default="EA")
    loss_rate = Column(Float, nullable=False, default=0)
    alternate_material = Column(String(50), nullable=False, default="")
