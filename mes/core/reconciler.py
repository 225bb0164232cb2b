"""生产计划状态联动

计划状态由引用该计划编号（plan_code）的作业指示汇总推导：

    remaining = plan_quantity - sum(order_quantity)

1. remaining <= 0 且状态不是 완료          -> 완료（优先级最高，超额也算）
2. 否则作业指示数为 0 且状态不是 계획      -> 계획
3. 否则作业指示数 >= 1 且状态是 계획       -> 진행중
4. 其他情况不变（취소 只会因规则 1/2 离开）

PlanStatusReconciler 订阅数据存储的变更事件，只重算受影响的计划。
"""

import logging
from typing import Iterable, Optional

from .. import crud
from ..config.settings import settings
from ..models import PlanStatus

logger = logging.getLogger(__name__)


def next_plan_status(status: str, plan_quantity: float, total_ordered: float, order_count: int,
                     keep_cancelled: bool = False) -> Optional[str]:
    """返回应迁移到的状态，无需迁移时返回 None"""
    remaining = (plan_quantity or 0) - (total_ordered or 0)
    if remaining <= 0 and status != PlanStatus.completed.value:
        return PlanStatus.completed.value
    if order_count == 0 and status != PlanStatus.planned.value:
        if keep_cancelled and status == PlanStatus.cancelled.value:
            return None
        return PlanStatus.planned.value
    if order_count >= 1 and status == PlanStatus.planned.value:
        return PlanStatus.in_progress.value
    return None


class PlanStatusReconciler:
    """作业指示/生产计划变更时自动更新计划状态"""

    def __init__(self, store, keep_cancelled: Optional[bool] = None):
        self.store = store
        self.keep_cancelled = settings.KEEP_CANCELLED_PLANS if keep_cancelled is None else keep_cancelled
        self._unsubscribers = []

    def attach(self):
        self._unsubscribers = [
            self.store.subscribe("work_orders.", self._on_work_orders),
            self.store.subscribe("production_plans.", self._on_production_plans),
        ]
        return self

    def detach(self):
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def _on_work_orders(self, event):
        self.reconcile(event.payload.get("plan_codes", ()))

    def _on_production_plans(self, event):
        if event.action == "deleted":
            return
        self.reconcile([event.payload.get("plan_code")])

    def reconcile(self, plan_codes: Iterable[str]) -> int:
        """重算指定计划，返回发生迁移的计划数"""
        codes = {code for code in plan_codes if code}
        if not codes:
            return 0
        return self._apply(crud.get_plans_by_codes(self.store.db, codes))

    def reconcile_all(self) -> int:
        return self._apply(crud.list_production_plans(self.store.db))

    def _apply(self, plans) -> int:
        totals = crud.summarize_orders_by_plan(self.store.db, [p.plan_code for p in plans])
        changed = 0
        for plan in plans:
            total_ordered, order_count = totals.get(plan.plan_code, (0, 0))
            new_status = next_plan_status(plan.status, plan.plan_quantity, total_ordered, order_count,
                                          self.keep_cancelled)
            if new_status is None:
                continue
            logger.info("생산계획 %s 상태 변경: %s -> %s (지시수량 %s / 계획수량 %s, 지시 %d건)",
                        plan.plan_code, plan.status, new_status, total_ordered, plan.plan_quantity, order_count)
            self.store.set_plan_status(plan.id, new_status)
            changed += 1
        return changed
