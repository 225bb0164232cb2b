"""基准信息数据结构定义

产线、工序、设备、物料、产品的请求/响应模型
"""

from datetime import datetime
from typing import Optional

from .common import CamelModel


class LineBase(CamelModel):
    code: str = ""
    name: str = ""
    location: Optional[str] = None
    capacity: Optional[int] = None
    manager: Optional[str] = None
    description: Optional[str] = None
    status: str = "active"


class LineCreate(LineBase):
    pass


class LineUpdate(CamelModel):
    id: Optional[int] = None
    code: Optional[str] = None
    name: Optional[str] = None
    location: Optional[str] = None
    capacity: Optional[int] = None
    manager: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None


class LineRead(LineBase):
    id: int
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None


class ProcessBase(CamelModel):
    code: str = ""
    name: str = ""
    type: Optional[str] = None
    standard_time: Optional[float] = None
    line: Optional[str] = None
    warehouse: Optional[str] = None
    description: Optional[str] = None
    status: str = "active"


class ProcessCreate(ProcessBase):
    pass


class ProcessUpdate(CamelModel):
    id: Optional[int] = None
    code: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    standard_time: Optional[float] = None
    line: Optional[str] = None
    warehouse: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None


class ProcessRead(ProcessBase):
    id: int
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None


class EquipmentBase(CamelModel):
    code: str = ""
    name: str = ""
    type: Optional[str] = None
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    purchase_date: Optional[str] = None
    line: Optional[str] = None
    manager: Optional[str] = None
    description: Optional[str] = None
    status: str = "active"


class EquipmentCreate(EquipmentBase):
    pass


class EquipmentUpdate(CamelModel):
    id: Optional[int] = None
    code: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    purchase_date: Optional[str] = None
    line: Optional[str] = None
    manager: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None


class EquipmentRead(EquipmentBase):
    id: int
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None


class MaterialBase(CamelModel):
    code: str = ""
    name: str = ""
    category: Optional[str] = None
    specification: Optional[str] = None
    unit: str = "EA"
    purchase_price: Optional[float] = None
    supplier: Optional[str] = None
    description: Optional[str] = None
    status: str = "active"


class MaterialCreate(MaterialBase):
    pass


class MaterialUpdate(CamelModel):
    id: Optional[int] = None
    code: Optional[str] = None
    name: Optional[str] = None
    category: Optional[str] = None
    specification: Optional[str] = None
    unit: Optional[str] = None
    purchase_price: Optional[float] = None
    supplier: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None


class MaterialRead(MaterialBase):
    id: int
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None


class ProductBase(CamelModel):
    code: str = ""
    name: str = ""
    category: Optional[str] = None
    specification: Optional[str] = None
    unit: str = "EA"
    standard_cost: Optional[float] = None
    selling_price: Optional[float] = None
    customer: Optional[str] = None
    description: Optional[str] = None
    status: str = "active"


class ProductCreate(ProductBase):
    pass


class ProductUpdate(CamelModel):
    id: Optional[int] = None
    code: Optional[str] = None
    name: Optional[str] = None
    category: Optional[str] = None
    specification: Optional[str] = None
    unit: Optional[str] = None
    standard_cost: Optional[float] = None
    selling_price: Optional[float] = None
    customer: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None


class ProductRead(ProductBase):
    id: int
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
