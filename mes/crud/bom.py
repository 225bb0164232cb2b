"""数据库操作（CRUD）- BOM 相关

- create_bom 创建 BOM 时复制工艺路线的工序步骤作为快照
- replace_bom_items 在一个事务内整体替换物料行（先删后插）
- get_latest_active_bom 按版本号、创建时间取产品的最新启用 BOM
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session
from .. import models
from ..utils.helpers import revision_number


def snapshot_step(model, step):
    return model(
        sequence=step.sequence,
        line=step.line,
        process=step.process,
        main_equipment=step.main_equipment,
        standard_man_hours=step.standard_man_hours,
        previous_process=step.previous_process,
        next_process=step.next_process,
    )


def create_bom(db: Session, data: dict, routing_steps=()):
    db_bom = models.BOM(**data)
    db_bom.routing_steps = [snapshot_step(models.BOMRoutingStep, s) for s in routing_steps]
    db.add(db_bom)
    db.commit()
    db.refresh(db_bom)
    return db_bom


def get_bom(db: Session, bom_id: int):
    return db.query(models.BOM).filter(models.BOM.id == bom_id).first()


def list_boms(db: Session, product_code: Optional[str] = None):
    """获取 BOM 列表，按创建时间倒序"""
    query = db.query(models.BOM)
    if product_code:
        query = query.filter(models.BOM.product_code == product_code)
    return query.order_by(models.BOM.created_at.desc(), models.BOM.id.desc()).all()


def list_revisions(db: Session, product_code: str):
    rows = db.query(models.BOM.revision).filter(models.BOM.product_code == product_code).all()
    return [row[0] for row in rows]


def get_latest_active_bom(db: Session, product_code: str):
    boms = (
        db.query(models.BOM)
        .filter(models.BOM.product_code == product_code, models.BOM.status == "active")
        .all()
    )
    if not boms:
        return None
    return max(boms, key=lambda b: (revision_number(b.revision), b.created_at or datetime.min, b.id))


def delete_bom(db: Session, bom_id: int):
    """删除 BOM，物料行与工序快照随之级联删除"""
    db_bom = get_bom(db, bom_id)
    if not db_bom:
        return False
    db.delete(db_bom)
    db.commit()
    return True


def list_bom_items(db: Session, bom_id: Optional[int] = None):
    query = db.query(models.BOMItem)
    if bom_id is not None:
        query = query.filter(models.BOMItem.bom_id == bom_id)
    return query.order_by(models.BOMItem.bom_id, models.BOMItem.process_sequence, models.BOMItem.id).all()


def get_bom_items_by_bom_id(db: Session, bom_id: int):
    return list_bom_items(db, bom_id)


def list_bom_routing_steps(db: Session, bom_id: Optional[int] = None):
    query = db.query(models.BOMRoutingStep)
    if bom_id is not None:
        query = query.filter(models.BOMRoutingStep.bom_id == bom_id)
    return query.order_by(models.BOMRoutingStep.bom_id, models.BOMRoutingStep.sequence).all()


def max_bom_item_id(db: Session) -> int:
    return db.query(func.max(models.BOMItem.id)).scalar() or 0


def item_ids_owned_elsewhere(db: Session, bom_id: int, item_ids) -> set:
    item_ids = set(item_ids)
    if not item_ids:
        return set()
    rows = (
        db.query(models.BOMItem.id)
        .filter(models.BOMItem.id.in_(item_ids), models.BOMItem.bom_id != bom_id)
        .all()
    )
    return {row[0] for row in rows}


def replace_bom_items(db: Session, bom_id: int, items):
    """整体替换 BOM 物料行并更新 BOM 修改时间"""
    try:
        for old in get_bom_items_by_bom_id(db, bom_id):
            db.delete(old)
        db.flush()
        for item in items:
            db.add(models.BOMItem(**item.model_dump()))
        db_bom = get_bom(db, bom_id)
        db_bom.modified_at = datetime.now()
        db.commit()
    except Exception:
        db.rollback()
        raise
    return get_bom_items_by_bom_id(db, bom_id)
