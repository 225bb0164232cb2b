"""工艺路线数据库模型

Routing 独占其 RoutingStep，删除路线时级联删除全部工序步骤
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database.connection import Base


class Routing(Base):
    """工艺路线表"""
    __tablename__ = "routings"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), unique=True, nullable=False)  # 人工指定，唯一
    name = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False, default="active")
    created_at = Column(DateTime, server_default=func.now())
    modified_at = Column(DateTime, nullable=True)

    steps = relationship(
        "RoutingStep",
        back_populates="routing",
        cascade="all, delete-orphan",
        order_by="RoutingStep.sequence",
    )


class RoutingStep(Base):
    """工艺路线工序步骤表"""
    __tablename__ = "routing_steps"

    id = Column(Integer, primary_key=True, index=True)
    routing_id = Column(Integer, ForeignKey("routings.id", ondelete="CASCADE"), nullable=False, index=True)
    sequence = Column(Integer, nullable=False)  # 1..N，同一路线内连续且唯一
    line = Column(String(255), nullable=False)
    process = Column(String(255), nullable=False)
    main_equipment = Column(String(255), nullable=False)
    standard_man_hours = Column(Float, nullable=False, default=0)
    previous_process = Column(String(255), nullable=False, default="-")
    next_process = Column(String(255), nullable=False, default="-")

    routing = relationship("Routing", back_populates="steps")
