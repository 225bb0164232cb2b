from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from ... import schemas
from ...api.deps import get_store
from ...core.responses import dump, success_response
from ...store import MesStore

router = APIRouter(prefix="/production-plans", tags=["production-plans"])


@router.get("")
def list_production_plans_endpoint(
    status: Optional[str] = Query(None, description="계획/진행중/완료/취소"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    search: Optional[str] = Query(None),
    store: MesStore = Depends(get_store),
):
    plans = store.list_production_plans(status=status, start_date=start_date, end_date=end_date, search=search)
    return success_response(dump(schemas.ProductionPlanRead, plans), count=len(plans))


@router.post("", status_code=201)
def create_production_plan_endpoint(payload: schemas.ProductionPlanCreate, store: MesStore = Depends(get_store)):
    """新增生产计划，计划编号为空时自动生成"""
    plan = store.add_production_plan(payload)
    return success_response(schemas.ProductionPlanRead.model_validate(plan).to_json(),
                            message="생산계획이 추가되었습니다")


@router.put("")
def update_production_plan_endpoint(payload: schemas.ProductionPlanUpdate, store: MesStore = Depends(get_store)):
    plan = store.update_production_plan(payload.id, payload)
    return success_response(schemas.ProductionPlanRead.model_validate(plan).to_json(),
                            message="생산계획이 수정되었습니다")


@router.delete("")
def delete_production_plan_endpoint(id: Optional[int] = Query(None), store: MesStore = Depends(get_store)):
    if id is None:
        return JSONResponse(status_code=400, content={"success": False, "message": "id 필수"})
    store.delete_production_plan(id)
    return success_response(message="생산계획이 삭제되었습니다")
