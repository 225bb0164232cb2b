"""MES 数据存储

MesStore 封装数据库会话与事件总线：
- 所有写操作先校验，校验失败抛出 ValidationError / NotFoundError，数据库不发生变化
- 写操作成功后同步发布 "<集合>.<动作>" 事件（见 core.events）
- 整体替换（工序步骤、BOM 物料行）在一个事务内完成

计划状态联动（core.reconciler）通过订阅本存储的事件实现。
"""

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from . import crud, models, schemas
from .config.settings import settings
from .core import bom_editor, sequencer
from .core.events import EventBus
from .core.exceptions import NotFoundError, ValidationError
from .utils.helpers import (
    blank,
    generate_order_code,
    generate_plan_code,
    is_temporary_id,
    next_revision,
)

logger = logging.getLogger(__name__)

REQUIRED_MISSING_MESSAGE = "필수 항목 누락"
ORDER_REQUIRED_MESSAGE = "필수 항목을 입력해주세요"
CLOSED_PLAN_MESSAGE = "완료 또는 취소된 생산계획에는 작업지시를 등록할 수 없습니다."

MASTER_MODELS = {
    "lines": models.Line,
    "processes": models.Process,
    "equipments": models.Equipment,
    "materials": models.Material,
    "products": models.Product,
}

PLAN_STATUSES = {s.value for s in models.PlanStatus}
ORDER_STATUSES = {s.value for s in models.OrderStatus}


class MesStore:
    """数据存储，一个请求（或一个脚本）使用一个实例"""

    def __init__(self, db: Session, bus: Optional[EventBus] = None):
        self.db = db
        self.bus = bus or EventBus()

    def subscribe(self, pattern: str, listener):
        return self.bus.subscribe(pattern, listener)

    def _notify(self, topic: str, **payload):
        return self.bus.publish(topic, **payload)

    # ---- 基准信息 ----

    def _master_model(self, kind: str):
        model = MASTER_MODELS.get(kind)
        if model is None:
            raise NotFoundError(f"알 수 없는 기준정보입니다: {kind}")
        return model

    def list_master(self, kind: str, status: Optional[str] = None, line: Optional[str] = None):
        return crud.list_records(self.db, self._master_model(kind), status=status, line=line)

    def add_master(self, kind: str, data: dict):
        model = self._master_model(kind)
        if blank(data.get("code")) or blank(data.get("name")):
            raise ValidationError(REQUIRED_MISSING_MESSAGE)
        if crud.get_record_by_code(self.db, model, data["code"]):
            raise ValidationError("이미 존재하는 코드입니다. 다른 코드를 사용해주세요.")
        record = crud.create_record(self.db, model, data)
        self._notify(f"{kind}.created", id=record.id)
        return record

    def update_master(self, kind: str, record_id: Optional[int], data: dict):
        model = self._master_model(kind)
        if record_id is None:
            raise ValidationError("id는 필수입니다")
        if not data:
            raise ValidationError("수정할 항목이 없습니다")
        if "code" in data:
            existing = crud.get_record_by_code(self.db, model, data["code"])
            if existing and existing.id != record_id:
                raise ValidationError("이미 존재하는 코드입니다. 다른 코드를 사용해주세요.")
        record = crud.update_record(self.db, model, record_id, data)
        if record is None:
            raise NotFoundError("대상 정보를 찾을 수 없습니다.")
        self._notify(f"{kind}.updated", id=record.id)
        return record

    def delete_master(self, kind: str, record_id: int):
        if crud.delete_record(self.db, self._master_model(kind), record_id) is None:
            raise NotFoundError("대상 정보를 찾을 수 없습니다.")
        self._notify(f"{kind}.deleted", id=record_id)

    def _active(self, kind: str, line: Optional[str] = None):
        return crud.list_records(self.db, MASTER_MODELS[kind], status="active", line=line)

    def _check_names(self, kind: str, names, label: str):
        missing = {n for n in names if n} - crud.existing_names(self.db, MASTER_MODELS[kind], names)
        if missing:
            raise ValidationError(f"존재하지 않는 {label}입니다: {', '.join(sorted(missing))}")

    # ---- 工艺路线 ----

    def list_routings(self):
        return crud.list_routings(self.db)

    def list_routing_steps(self, routing_id: Optional[int] = None):
        return crud.list_routing_steps(self.db, routing_id)

    def get_routing_steps_by_routing_id(self, routing_id: int):
        return crud.get_routing_steps_by_routing_id(self.db, routing_id)

    def _require_routing(self, routing_id: Optional[int]):
        routing = crud.get_routing(self.db, routing_id) if routing_id is not None else None
        if routing is None:
            raise NotFoundError("라우팅을 찾을 수 없습니다.")
        return routing

    def add_routing(self, data: schemas.RoutingCreate):
        if blank(data.code) or blank(data.name):
            raise ValidationError(REQUIRED_MISSING_MESSAGE)
        if crud.get_routing_by_code(self.db, data.code):
            raise ValidationError("이미 존재하는 라우팅 코드입니다.")
        routing = crud.create_routing(self.db, data.code, data.name, data.status or "active")
        logger.info("라우팅 등록: %s (%s)", routing.code, routing.name)
        self._notify("routings.created", id=routing.id)
        return routing

    def delete_routing(self, routing_id: int):
        """删除路线及其全部工序步骤"""
        if not crud.delete_routing(self.db, routing_id):
            raise NotFoundError("라우팅을 찾을 수 없습니다.")
        logger.info("라우팅 삭제: id=%s", routing_id)
        self._notify("routings.deleted", id=routing_id)

    def append_step_draft(self, routing_id: int, steps: List[schemas.RoutingStepDraft]):
        self._require_routing(routing_id)
        return sequencer.append_step(
            steps, routing_id,
            self._active("lines"), self._active("processes"), self._active("equipments"),
        )

    def change_step_draft(self, steps: List[schemas.RoutingStepDraft], step_id: int, field: str, value):
        return sequencer.change_step(
            steps, step_id, field, value,
            self._active("processes"), self._active("equipments"),
        )

    def save_routing_steps(self, routing_id: Optional[int], steps: Optional[List[schemas.RoutingStepDraft]]):
        """保存路线的全部工序步骤（先删后插）"""
        if routing_id is None or steps is None:
            raise ValidationError("라우팅 ID와 공정 정보가 필요합니다.")
        self._require_routing(routing_id)
        sequencer.validate_steps(steps)

        self._check_names("lines", [s.line for s in steps], "라인")
        self._check_names("processes", [s.process for s in steps], "공정")
        self._check_names("equipments", [s.main_equipment for s in steps], "설비")
        permanent = [s.id for s in steps if not is_temporary_id(s.id)]
        if crud.step_ids_owned_elsewhere(self.db, routing_id, permanent):
            raise ValidationError("다른 라우팅의 공정 단계가 포함되어 있습니다.")

        prepared = sequencer.prepare_for_save(steps, routing_id, crud.max_routing_step_id(self.db))
        saved = crud.replace_routing_steps(self.db, routing_id, prepared)
        logger.info("라우팅 공정 저장: routing_id=%s, %d건", routing_id, len(saved))
        self._notify("routing_steps.saved", routing_id=routing_id, count=len(saved))
        return saved

    # ---- BOM ----

    def list_boms(self, product_code: Optional[str] = None):
        return crud.list_boms(self.db, product_code)

    def list_bom_items(self, bom_id: Optional[int] = None):
        return crud.list_bom_items(self.db, bom_id)

    def list_bom_routing_steps(self, bom_id: Optional[int] = None):
        return crud.list_bom_routing_steps(self.db, bom_id)

    def get_bom_items_by_bom_id(self, bom_id: int):
        return crud.get_bom_items_by_bom_id(self.db, bom_id)

    def _require_bom(self, bom_id: Optional[int]):
        bom = crud.get_bom(self.db, bom_id) if bom_id is not None else None
        if bom is None:
            raise NotFoundError("BOM을 찾을 수 없습니다.")
        return bom

    def add_bom(self, data: schemas.BOMCreate):
        """创建 BOM 版本

        版本号为空时按同一产品的最大版本号 +1 生成；
        指定了工艺路线时复制其工序步骤作为快照。
        """
        if blank(data.product_code) or blank(data.product_name):
            raise ValidationError(REQUIRED_MISSING_MESSAGE)

        routing_name = data.routing_name or ""
        routing_steps = []
        if data.routing_id is not None:
            routing = crud.get_routing(self.db, data.routing_id)
            if routing is None:
                raise ValidationError("존재하지 않는 라우팅입니다.")
            routing_name = routing_name or routing.name
            routing_steps = crud.get_routing_steps_by_routing_id(self.db, routing.id)

        revision = data.revision
        if blank(revision):
            revision = next_revision(crud.list_revisions(self.db, data.product_code))

        bom = crud.create_bom(self.db, {
            "product_code": data.product_code,
            "product_name": data.product_name,
            "routing_id": data.routing_id,
            "routing_name": routing_name,
            "revision": revision,
            "status": data.status or "active",
        }, routing_steps)
        logger.info("BOM 등록: %s %s (공정 %d건 복사)", bom.product_code, bom.revision, len(routing_steps))
        self._notify("boms.created", id=bom.id, product_code=bom.product_code)
        return bom

    def delete_bom(self, bom_id: int):
        """删除 BOM；目标不存在时视为已删除"""
        if not crud.delete_bom(self.db, bom_id):
            return False
        logger.info("BOM 삭제: id=%s", bom_id)
        self._notify("boms.deleted", id=bom_id)
        return True

    def get_bom_routing_info(self, bom_id: int):
        """BOM 的工序信息：优先使用创建时的快照，没有快照时读取当前路线"""
        bom = self._require_bom(bom_id)
        snapshot = crud.list_bom_routing_steps(self.db, bom.id)
        if snapshot:
            return snapshot
        if bom.routing_id is None:
            return []
        return crud.get_routing_steps_by_routing_id(self.db, bom.routing_id)

    def add_item_draft(self, bom_id: int, items: List[schemas.BOMItemDraft], process_sequence: Optional[int]):
        routing_steps = self.get_bom_routing_info(bom_id)
        return bom_editor.add_item(items, bom_id, routing_steps, process_sequence, self._active("materials"))

    def change_item_draft(self, items: List[schemas.BOMItemDraft], item_id: int, field: str, value):
        return bom_editor.change_item(items, item_id, field, value, self._active("materials"))

    def reset_items_draft(self, bom_id: int) -> List[schemas.BOMItemDraft]:
        """放弃编辑，恢复为已保存的物料行"""
        self._require_bom(bom_id)
        return [schemas.BOMItemDraft.model_validate(item) for item in self.get_bom_items_by_bom_id(bom_id)]

    def save_bom_items(self, bom_id: Optional[int], items: Optional[List[schemas.BOMItemDraft]]):
        """保存 BOM 的全部物料行（先删后插）"""
        if bom_id is None or items is None:
            raise ValidationError("BOM ID와 자재 정보가 필요합니다.")
        self._require_bom(bom_id)
        bom_editor.validate_items(items)

        codes = {i.material_code for i in items}
        missing = codes - crud.existing_codes(self.db, models.Material, codes)
        if missing:
            raise ValidationError(f"존재하지 않는 자재입니다: {', '.join(sorted(missing))}")
        permanent = [i.id for i in items if not is_temporary_id(i.id)]
        if crud.item_ids_owned_elsewhere(self.db, bom_id, permanent):
            raise ValidationError("다른 BOM의 자재 항목이 포함되어 있습니다.")

        prepared = bom_editor.prepare_for_save(items, bom_id, crud.max_bom_item_id(self.db))
        saved = crud.replace_bom_items(self.db, bom_id, prepared)
        logger.info("BOM 자재 저장: bom_id=%s, %d건", bom_id, len(saved))
        self._notify("bom_items.saved", bom_id=bom_id, count=len(saved))
        return saved

    # ---- 生产计划 ----

    def list_production_plans(self, **filters):
        return crud.list_production_plans(self.db, **filters)

    def _check_plan_status(self, status: Optional[str]):
        if status is not None and status not in PLAN_STATUSES:
            raise ValidationError(f"올바르지 않은 생산계획 상태입니다: {status}")

    def add_production_plan(self, data: schemas.ProductionPlanCreate):
        if blank(data.product_code) or blank(data.product_name) or not data.plan_quantity or data.plan_quantity <= 0:
            raise ValidationError(REQUIRED_MISSING_MESSAGE)
        self._check_plan_status(data.status)

        plan_date = data.plan_date or date.today()
        plan_code = data.plan_code
        if blank(plan_code):
            dates, codes = crud.list_plan_dates_and_codes(self.db)
            plan_code = generate_plan_code(plan_date, dates, codes)
        elif crud.get_plan_by_code(self.db, plan_code):
            raise ValidationError("이미 존재하는 생산계획 번호입니다.")

        plan = crud.create_production_plan(self.db, {
            "plan_code": plan_code,
            "plan_date": plan_date,
            "product_code": data.product_code,
            "product_name": data.product_name,
            "plan_quantity": data.plan_quantity,
            "unit": data.unit or settings.DEFAULT_UNIT,
            "start_date": data.start_date,
            "end_date": data.end_date,
            "status": data.status or models.PlanStatus.planned.value,
            "manager": data.manager or "",
            "note": data.note or "",
        })
        logger.info("생산계획 등록: %s (%s %s)", plan.plan_code, plan.product_code, plan.plan_quantity)
        self._notify("production_plans.created", id=plan.id, plan_code=plan.plan_code)
        return plan

    def update_production_plan(self, plan_id: Optional[int], data: schemas.ProductionPlanUpdate):
        if plan_id is None:
            raise ValidationError("id는 필수입니다")
        changes = data.model_dump(exclude_unset=True, exclude={"id"})
        if not changes:
            raise ValidationError("수정할 항목이 없습니다")
        self._check_plan_status(changes.get("status"))
        if "plan_quantity" in changes and (changes["plan_quantity"] is None or changes["plan_quantity"] <= 0):
            raise ValidationError("계획수량은 0보다 커야 합니다.")

        plan = crud.update_production_plan(self.db, plan_id, changes)
        if plan is None:
            raise NotFoundError("생산계획을 찾을 수 없습니다.")
        self._notify("production_plans.updated", id=plan.id, plan_code=plan.plan_code)
        return plan

    def set_plan_status(self, plan_id: int, status: str):
        plan = crud.update_production_plan(self.db, plan_id, {"status": status})
        if plan is None:
            raise NotFoundError("생산계획을 찾을 수 없습니다.")
        self._notify("production_plans.updated", id=plan.id, plan_code=plan.plan_code, status=status)
        return plan

    def delete_production_plan(self, plan_id: int):
        """删除计划；引用该计划编号的作业指示保留"""
        plan_code = crud.delete_production_plan(self.db, plan_id)
        if plan_code is None:
            raise NotFoundError("생산계획을 찾을 수 없습니다.")
        logger.info("생산계획 삭제: %s", plan_code)
        self._notify("production_plans.deleted", id=plan_id, plan_code=plan_code)

    # ---- 作业指示 ----

    def list_work_orders(self, **filters):
        return crud.list_work_orders(self.db, **filters)

    def list_work_order_routing_steps(self, work_order_ids=None):
        return crud.list_work_order_routing_steps(self.db, work_order_ids)

    def list_work_order_materials(self, work_order_ids=None):
        return crud.list_work_order_materials(self.db, work_order_ids)

    def _check_order_status(self, status: Optional[str]):
        if status is not None and status not in ORDER_STATUSES:
            raise ValidationError(f"올바르지 않은 작업지시 상태입니다: {status}")

    def _check_plan_reference(self, plan_code: str):
        """作业指示引用的计划必须存在，且不能是 완료/취소"""
        if blank(plan_code):
            return
        plan = crud.get_plan_by_code(self.db, plan_code)
        if plan is None:
            raise ValidationError(f"존재하지 않는 생산계획입니다: {plan_code}")
        if plan.status in (models.PlanStatus.completed.value, models.PlanStatus.cancelled.value):
            raise ValidationError(CLOSED_PLAN_MESSAGE)

    def add_work_order(self, data: schemas.WorkOrderCreate):
        """创建作业指示，复制产品最新启用 BOM 的工序与物料"""
        if blank(data.product_code) or blank(data.product_name) or not data.order_quantity or data.order_quantity <= 0:
            raise ValidationError(ORDER_REQUIRED_MESSAGE)
        self._check_order_status(data.status)
        self._check_plan_reference(data.plan_code)
        self._check_names("lines", [data.line], "라인")

        order_date = data.order_date or date.today()
        order_code = data.order_code
        if blank(order_code):
            dates, codes = crud.list_order_dates_and_codes(self.db)
            order_code = generate_order_code(order_date, dates, codes)

        routing_steps, materials = [], []
        bom = crud.get_latest_active_bom(self.db, data.product_code)
        if bom is not None:
            routing_steps = self.get_bom_routing_info(bom.id)
            materials = crud.get_bom_items_by_bom_id(self.db, bom.id)

        order = crud.create_work_order(self.db, {
            "order_code": order_code,
            "order_date": order_date,
            "plan_code": data.plan_code or "",
            "product_code": data.product_code,
            "product_name": data.product_name,
            "order_quantity": data.order_quantity,
            "unit": data.unit or settings.DEFAULT_UNIT,
            "line": data.line or "",
            "start_date": data.start_date,
            "end_date": data.end_date,
            "status": data.status or models.OrderStatus.waiting.value,
            "worker": data.worker or "",
            "note": data.note or "",
        }, routing_steps, materials)
        logger.info("작업지시 등록: %s (계획 %s, 수량 %s, BOM %s)",
                    order.order_code, order.plan_code or "-", order.order_quantity,
                    bom.revision if bom is not None else "-")
        self._notify("work_orders.created", id=order.id, plan_codes=[order.plan_code])
        return order

    def update_work_order(self, order_id: Optional[int], data: schemas.WorkOrderUpdate):
        if order_id is None:
            raise ValidationError("id는 필수입니다")
        changes = data.model_dump(exclude_unset=True, exclude={"id"})
        if not changes:
            raise ValidationError("수정할 항목이 없습니다")
        current = crud.get_work_order(self.db, order_id)
        if current is None:
            raise NotFoundError("작업지시를 찾을 수 없습니다.")
        self._check_order_status(changes.get("status"))
        if "order_quantity" in changes and (changes["order_quantity"] is None or changes["order_quantity"] <= 0):
            raise ValidationError("지시수량은 0보다 커야 합니다.")
        if changes.get("plan_code") and changes["plan_code"] != current.plan_code:
            self._check_plan_reference(changes["plan_code"])
        if changes.get("line"):
            self._check_names("lines", [changes["line"]], "라인")

        previous_plan_code = current.plan_code
        order = crud.update_work_order(self.db, order_id, changes)
        self._notify("work_orders.updated", id=order.id, plan_codes=[previous_plan_code, order.plan_code])
        return order

    def delete_work_order(self, order_id: int):
        plan_code = crud.delete_work_order(self.db, order_id)
        if plan_code is None:
            raise NotFoundError("작업지시를 찾을 수 없습니다.")
        logger.info("작업지시 삭제: id=%s", order_id)
        self._notify("work_orders.deleted", id=order_id, plan_codes=[plan_code])
