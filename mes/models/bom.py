"""BOM 数据库模型

- BOM：每个产品可以有多个版本（revision）
- BOMItem：按工序记录的物料需求行
- BOMRoutingStep：创建 BOM 时复制的工艺路线快照
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database.connection import Base


class BOM(Base):
    """BOM 表头"""
    __tablename__ = "boms"

    id = Column(Integer, primary_key=True, index=True)
    product_code = Column(String(50), nullable=False, index=True)
    product_name = Column(String(255), nullable=False)  # 冗余副本
    routing_id = Column(Integer, nullable=True)
    routing_name = Column(String(255), nullable=False, default="")  # 冗余副本
    revision = Column(String(20), nullable=False)  # Rev.01, Rev.02 ...
    status = Column(String(20), nullable=False, default="active")
    created_at = Column(DateTime, server_default=func.now())
    modified_at = Column(DateTime, nullable=True)

    items = relationship(
        "BOMItem",
        back_populates="bom",
        cascade="all, delete-orphan",
        order_by="BOMItem.process_sequence",
    )
    routing_steps = relationship(
        "BOMRoutingStep",
        cascade="all, delete-orphan",
        order_by="BOMRoutingStep.sequence",
    )


class BOMItem(Base):
    """BOM 物料行"""
    __tablename__ = "bom_items"

    id = Column(Integer, primary_key=True, index=True)
    bom_id = Column(Integer, ForeignKey("boms.id", ondelete="CASCADE"), nullable=False, index=True)
    process_sequence = Column(Integer, nullable=False)  # RoutingStep.sequence 的副本，不是实时引用
    process_name = Column(String(255), nullable=False, default="")
    material_code = Column(String(50), nullable=False)
    material_name = Column(String(255), nullable=False)
    quantity = Column(Float, nullable=False)
    unit = Column(String(20), nullable=False, default="EA")
    loss_rate = Column(Float, nullable=False, default=0)  # 损耗率（%）
    alternate_material = Column(String(50), nullable=False, default="")

    bom = relationship("BOM", back_populates="items")


class BOMRoutingStep(Base):
    """BOM 创建时的工艺路线快照"""
    __tablename__ = "bom_routing_steps"

    id = Column(Integer, primary_key=True, index=True)
    bom_id = Column(Integer, ForeignKey("boms.id", ondelete="CASCADE"), nullable=False, index=True)
    sequence = Column(Integer, nullable=False)
    line = Column(String(255), nullable=False)
    process = Column(String(255), nullable=False)
    main_equipment = Column(String(255), nullable=False)
    standard_man_hours = Column(Float, nullable=False, default=0)
    previous_process = Column(String(255), nullable=False, default="-")
    next_process = Column(String(255), nullable=False, default="-")
