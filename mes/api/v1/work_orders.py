from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from ... import schemas
from ...api.deps import get_store
from ...core.responses import dump, success_response
from ...store import MesStore

router = APIRouter(prefix="/work-orders", tags=["work-orders"])


@router.get("")
def list_work_orders_endpoint(
    status: Optional[str] = Query(None, description="대기/진행중/완료/보류"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    search: Optional[str] = Query(None, description="지시번호/계획번호/품목 검색"),
    store: MesStore = Depends(get_store),
):
    """获取作业指示及其工序、物料快照"""
    orders = store.list_work_orders(status=status, start_date=start_date, end_date=end_date, search=search)
    order_ids = [o.id for o in orders]
    data = {
        "workOrders": dump(schemas.WorkOrderRead, orders),
        "workOrderRoutingSteps": dump(schemas.WorkOrderRoutingStepRead, store.list_work_order_routing_steps(order_ids)),
        "workOrderMaterials": dump(schemas.WorkOrderMaterialRead, store.list_work_order_materials(order_ids)),
    }
    return success_response(data, count=len(orders))


@router.post("", status_code=201)
def create_work_order_endpoint(payload: schemas.WorkOrderCreate, store: MesStore = Depends(get_store)):
    """新增作业指示，复制最新 BOM 的工序与物料"""
    order = store.add_work_order(payload)
    return success_response(schemas.WorkOrderRead.model_validate(order).to_json(),
                            message="작업지시가 추가되었습니다")


@router.put("")
def update_work_order_endpoint(payload: schemas.WorkOrderUpdate, store: MesStore = Depends(get_store)):
    order = store.update_work_order(payload.id, payload)
    return success_response(schemas.WorkOrderRead.model_validate(order).to_json(),
                            message="작업지시가 수정되었습니다")


@router.delete("")
def delete_work_order_endpoint(id: Optional[int] = Query(None), store: MesStore = Depends(get_store)):
    if id is None:
        return JSONResponse(status_code=400, content={"success": False, "message": "id는 필수입니다"})
    store.delete_work_order(id)
    return success_response(message="작업지시가 삭제되었습니다")
