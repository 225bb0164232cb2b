"""数据库操作（CRUD）- 工艺路线相关

- replace_routing_steps 在一个事务内整体替换某条路线的工序步骤（先删后插）
- get_routing_steps_by_routing_id 返回按 sequence 排序的步骤
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session
from .. import models


def create_routing(db: Session, code: str, name: str, status: str = "active"):
    db_routing = models.Routing(code=code, name=name, status=status)
    db.add(db_routing)
    db.commit()
    db.refresh(db_routing)
    return db_routing


def get_routing(db: Session, routing_id: int):
    return db.query(models.Routing).filter(models.Routing.id == routing_id).first()


def get_routing_by_code(db: Session, code: str):
    return db.query(models.Routing).filter(models.Routing.code == code).first()


def list_routings(db: Session, status: Optional[str] = None):
    """获取路线列表，按创建时间倒序"""
    query = db.query(models.Routing)
    if status:
        query = query.filter(models.Routing.status == status)
    return query.order_by(models.Routing.created_at.desc(), models.Routing.id.desc()).all()


def delete_routing(db: Session, routing_id: int):
    """删除路线，工序步骤随之级联删除"""
    db_routing = get_routing(db, routing_id)
    if not db_routing:
        return False
    db.delete(db_routing)
    db.commit()
    return True


def list_routing_steps(db: Session, routing_id: Optional[int] = None):
    query = db.query(models.RoutingStep)
    if routing_id is not None:
        query = query.filter(models.RoutingStep.routing_id == routing_id)
    return query.order_by(models.RoutingStep.routing_id, models.RoutingStep.sequence).all()


def get_routing_steps_by_routing_id(db: Session, routing_id: int):
    """获取路线的工序步骤（按 sequence 排序）"""
    return (
        db.query(models.RoutingStep)
        .filter(models.RoutingStep.routing_id == routing_id)
        .order_by(models.RoutingStep.sequence)
        .all()
    )


def max_routing_step_id(db: Session) -> int:
    return db.query(func.max(models.RoutingStep.id)).scalar() or 0


def step_ids_owned_elsewhere(db: Session, routing_id: int, step_ids) -> set:
    """返回已属于其他路线的步骤ID"""
    step_ids = set(step_ids)
    if not step_ids:
        return set()
    rows = (
        db.query(models.RoutingStep.id)
        .filter(models.RoutingStep.id.in_(step_ids), models.RoutingStep.routing_id != routing_id)
        .all()
    )
    return {row[0] for row in rows}


def replace_routing_steps(db: Session, routing_id: int, steps):
    """整体替换路线的工序步骤

    steps 必须已分配正式ID并完成编号。失败时回滚，原有步骤保持不变。
    """
    try:
        for old in get_routing_steps_by_routing_id(db, routing_id):
            db.delete(old)
        db.flush()
        for step in steps:
            db.add(models.RoutingStep(**step.model_dump()))
        db_routing = get_routing(db, routing_id)
        db_routing.modified_at = datetime.now()
        db.commit()
    except Exception:
        db.rollback()
        raise
    return get_routing_steps_by_routing_id(db, routing_id)
