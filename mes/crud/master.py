"""基准信息数据操作

产线、工序、设备、物料、产品的增删改查。
工艺路线与 BOM 只读取这些目录，用于填充默认值和写入时的引用校验。
"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session
from .. import models


def list_records(db: Session, model, status: Optional[str] = None, line: Optional[str] = None):
    """按状态/产线过滤，按ID排序"""
    query = db.query(model)
    if status:
        query = query.filter(model.status == status)
    if line is not None and hasattr(model, "line"):
        query = query.filter(model.line == line)
    return query.order_by(model.id).all()


def get_record(db: Session, model, record_id: int):
    return db.query(model).filter(model.id == record_id).first()


def get_record_by_code(db: Session, model, code: str):
    return db.query(model).filter(model.code == code).first()


def create_record(db: Session, model, data: dict):
    db_record = model(**data)
    db.add(db_record)
    db.commit()
    db.refresh(db_record)
    return db_record


def update_record(db: Session, model, record_id: int, data: dict):
    db_record = get_record(db, model, record_id)
    if not db_record:
        return None
    for field, value in data.items():
        setattr(db_record, field, value)
    db_record.modified_at = datetime.now()
    db.commit()
    db.refresh(db_record)
    return db_record


def delete_record(db: Session, model, record_id: int):
    db_record = get_record(db, model, record_id)
    if not db_record:
        return None
    db.delete(db_record)
    db.commit()
    return db_record


def list_lines(db: Session, status: Optional[str] = None):
    return list_records(db, models.Line, status=status)


def list_processes(db: Session, status: Optional[str] = None, line: Optional[str] = None):
    return list_records(db, models.Process, status=status, line=line)


def list_equipments(db: Session, status: Optional[str] = None, line: Optional[str] = None):
    return list_records(db, models.Equipment, status=status, line=line)


def list_materials(db: Session, status: Optional[str] = None):
    return list_records(db, models.Material, status=status)


def list_products(db: Session, status: Optional[str] = None):
    return list_records(db, models.Product, status=status)


def get_material_by_code(db: Session, code: str):
    return get_record_by_code(db, models.Material, code)


def existing_names(db: Session, model, names) -> set:
    """返回 names 中在目录里存在的名称"""
    names = {n for n in names if n}
    if not names:
        return set()
    rows = db.query(model.name).filter(model.name.in_(names)).all()
    return {row[0] for row in rows}


def existing_codes(db: Session, model, codes) -> set:
    codes = {c for c in codes if c}
    if not codes:
        return set()
    rows = db.query(model.code).filter(model.code.in_(codes)).all()
    return {row[0] for row in rows}
