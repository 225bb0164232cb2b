"""数据库操作（CRUD）- 生产计划 / 作业指示相关

作业指示通过 plan_code 字符串关联生产计划。
summarize_orders_by_plan 用一次分组查询汇总各计划的指示数量与件数，供状态联动使用。
"""

from datetime import date, datetime
from typing import Iterable, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session
from .. import models
from .bom import snapshot_step


# ---- 生产计划 ----

def create_production_plan(db: Session, data: dict):
    db_plan = models.ProductionPlan(**data)
    db.add(db_plan)
    db.commit()
    db.refresh(db_plan)
    return db_plan


def get_production_plan(db: Session, plan_id: int):
    return db.query(models.ProductionPlan).filter(models.ProductionPlan.id == plan_id).first()


def get_plan_by_code(db: Session, plan_code: str):
    return db.query(models.ProductionPlan).filter(models.ProductionPlan.plan_code == plan_code).first()


def get_plans_by_codes(db: Session, plan_codes: Iterable[str]):
    codes = list(plan_codes)
    if not codes:
        return []
    return db.query(models.ProductionPlan).filter(models.ProductionPlan.plan_code.in_(codes)).all()


def list_production_plans(db: Session, status: Optional[str] = None, start_date: Optional[date] = None,
                          end_date: Optional[date] = None, search: Optional[str] = None):
    """获取生产计划列表，按计划日期倒序"""
    model = models.ProductionPlan
    query = db.query(model)
    if status:
        query = query.filter(model.status == status)
    if start_date:
        query = query.filter(model.plan_date >= start_date)
    if end_date:
        query = query.filter(model.plan_date <= end_date)
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(
            model.plan_code.like(pattern),
            model.product_code.like(pattern),
            model.product_name.like(pattern),
        ))
    return query.order_by(model.plan_date.desc(), model.id.desc()).all()


def list_plan_dates_and_codes(db: Session):
    rows = db.query(models.ProductionPlan.plan_date, models.ProductionPlan.plan_code).all()
    return [row[0] for row in rows], [row[1] for row in rows]


def update_production_plan(db: Session, plan_id: int, data: dict):
    db_plan = get_production_plan(db, plan_id)
    if not db_plan:
        return None
    for field, value in data.items():
        setattr(db_plan, field, value)
    db_plan.modified_at = datetime.now()
    db.commit()
    db.refresh(db_plan)
    return db_plan


def delete_production_plan(db: Session, plan_id: int):
    db_plan = get_production_plan(db, plan_id)
    if not db_plan:
        return None
    plan_code = db_plan.plan_code
    db.delete(db_plan)
    db.commit()
    return plan_code


def summarize_orders_by_plan(db: Session, plan_codes: Iterable[str]) -> dict:
    """返回 {plan_code: (指示数量合计, 指示件数)}"""
    codes = [c for c in plan_codes if c]
    if not codes:
        return {}
    rows = (
        db.query(
            models.WorkOrder.plan_code,
            func.coalesce(func.sum(models.WorkOrder.order_quantity), 0),
            func.count(models.WorkOrder.id),
        )
        .filter(models.WorkOrder.plan_code.in_(codes))
        .group_by(models.WorkOrder.plan_code)
        .all()
    )
    return {code: (total or 0, count) for code, total, count in rows}


# ---- 作业指示 ----

def _snapshot_material(item):
    return models.WorkOrderMaterial(
        process_sequence=item.process_sequence,
        process_name=item.process_name,
        material_code=item.material_code,
        material_name=item.material_name,
        quantity=item.quantity,
        unit=item.unit,
        loss_rate=item.loss_rate,
        alternate_material=item.alternate_material,
    )


def create_work_order(db: Session, data: dict, routing_steps=(), materials=()):
    """创建作业指示并复制 BOM 的工序与物料快照"""
    db_order = models.WorkOrder(**data)
    db_order.routing_steps = [snapshot_step(models.WorkOrderRoutingStep, s) for s in routing_steps]
    db_order.materials = [_snapshot_material(m) for m in materials]
    db.add(db_order)
    db.commit()
    db.refresh(db_order)
    return db_order


def get_work_order(db: Session, order_id: int):
    return db.query(models.WorkOrder).filter(models.WorkOrder.id == order_id).first()


def list_work_orders(db: Session, status: Optional[str] = None, start_date: Optional[date] = None,
                     end_date: Optional[date] = None, search: Optional[str] = None):
    """获取作业指示列表，按指示日期倒序"""
    model = models.WorkOrder
    query = db.query(model)
    if status:
        query = query.filter(model.status == status)
    if start_date:
        query = query.filter(model.order_date >= start_date)
    if end_date:
        query = query.filter(model.order_date <= end_date)
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(
            model.order_code.like(pattern),
            model.plan_code.like(pattern),
            model.product_code.like(pattern),
            model.product_name.like(pattern),
        ))
    return query.order_by(model.order_date.desc(), model.id.desc()).all()


def list_order_dates_and_codes(db: Session):
    rows = db.query(models.WorkOrder.order_date, models.WorkOrder.order_code).all()
    return [row[0] for row in rows], [row[1] for row in rows]


def list_work_order_routing_steps(db: Session, work_order_ids: Optional[Iterable[int]] = None):
    query = db.query(models.WorkOrderRoutingStep)
    if work_order_ids is not None:
        query = query.filter(models.WorkOrderRoutingStep.work_order_id.in_(list(work_order_ids)))
    return query.order_by(models.WorkOrderRoutingStep.work_order_id, models.WorkOrderRoutingStep.sequence).all()


def list_work_order_materials(db: Session, work_order_ids: Optional[Iterable[int]] = None):
    query = db.query(models.WorkOrderMaterial)
    if work_order_ids is not None:
        query = query.filter(models.WorkOrderMaterial.work_order_id.in_(list(work_order_ids)))
    return query.order_by(models.WorkOrderMaterial.work_order_id, models.WorkOrderMaterial.process_sequence).all()


def update_work_order(db: Session, order_id: int, data: dict):
    db_order = get_work_order(db, order_id)
    if not db_order:
        return None
    for field, value in data.items():
        setattr(db_order, field, value)
    db_order.modified_at = datetime.now()
    db.commit()
    db.refresh(db_order)
    return db_order


def delete_work_order(db: Session, order_id: int):
    """删除作业指示及其快照，返回被删除指示的 plan_code"""
    db_order = get_work_order(db, order_id)
    if not db_order:
        return None
    plan_code = db_order.plan_code
    db.delete(db_order)
    db.commit()
    return plan_code
