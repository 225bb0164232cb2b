"""接口依赖

每个请求使用一个数据库会话和一个 MesStore，并挂载计划状态联动。
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from ..core.reconciler import PlanStatusReconciler
from ..database.connection import get_db
from ..store import MesStore


def get_store(db: Session = Depends(get_db)) -> MesStore:
    store = MesStore(db)
    PlanStatusReconciler(store).attach()
    return store
