"""基准信息数据库模型

定义产线、工序、设备、物料、产品等主数据模型。
工艺路线与 BOM 通过名称（而非外键）引用这些记录。
"""

from sqlalchemy import Column, Integer, String, Float, DateTime
from sqlalchemy.sql import func
from ..database.connection import Base


class Line(Base):
    """产线表"""
    __tablename__ = "lines"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), unique=True, nullable=False)
    name = Column(String(255), nullable=False, index=True)
    location = Column(String(255), nullable=True)
    capacity = Column(Integer, nullable=True)  # 日产能
    manager = Column(String(100), nullable=True)
    description = Column(String(500), nullable=True)
    status = Column(String(20), nullable=False, default="active")
    created_at = Column(DateTime, server_default=func.now())
    modified_at = Column(DateTime, nullable=True)


class Process(Base):
    """工序表"""
    __tablename__ = "processes"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), unique=True, nullable=False)
    name = Column(String(255), nullable=False, index=True)
    type = Column(String(50), nullable=True)
    standard_time = Column(Float, nullable=True)  # 标准工时（分钟）
    line = Column(String(255), nullable=True, index=True)  # 所属产线名称
    warehouse = Column(String(255), nullable=True)
    description = Column(String(500), nullable=True)
    status = Column(String(20), nullable=False, default="active")
    created_at = Column(DateTime, server_default=func.now())
    modified_at = Column(DateTime, nullable=True)


class Equipment(Base):
    """设备表"""
    __tablename__ = "equipments"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), unique=True, nullable=False)
    name = Column(String(255), nullable=False, index=True)
    type = Column(String(50), nullable=True)
    manufacturer = Column(String(255), nullable=True)
    model = Column(String(255), nullable=True)
    purchase_date = Column(String(10), nullable=True)  # yyyy-MM-dd
    line = Column(String(255), nullable=True, index=True)  # 所属产线名称
    manager = Column(String(100), nullable=True)
    description = Column(String(500), nullable=True)
    status = Column(String(20), nullable=False, default="active")
    created_at = Column(DateTime, server_default=func.now())
    modified_at = Column(DateTime, nullable=True)


class Material(Base):
    """物料表"""
    __tablename__ = "materials"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    category = Column(String(20), nullable=True)  # 원자재 / 부자재
    specification = Column(String(255), nullable=True)
    unit = Column(String(20), nullable=False, default="EA")
    purchase_price = Column(Float, nullable=True)
    supplier = Column(String(255), nullable=True)
    description = Column(String(500), nullable=True)
    status = Column(String(20), nullable=False, default="active")
    created_at = Column(DateTime, server_default=func.now())
    modified_at = Column(DateTime, nullable=True)


class Product(Base):
    """产品表"""
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    category = Column(String(20), nullable=True)  # 제품 / 반제품 / 상품
    specification = Column(String(255), nullable=True)
    unit = Column(String(20), nullable=False, default="EA")
    standard_cost = Column(Float, nullable=True)
    selling_price = Column(Float, nullable=True)
    customer = Column(String(255), nullable=True)
    description = Column(String(500), nullable=True)
    status = Column(String(20), nullable=False, default="active")
    created_at = Column(DateTime, server_default=func.now())
    modified_at = Column(DateTime, nullable=True)
