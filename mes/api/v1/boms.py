from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from ... import schemas
from ...api.deps import get_store
from ...core import bom_editor
from ...core.responses import dump, success_response
from ...store import MesStore

router = APIRouter(prefix="/boms", tags=["boms"])


@router.get("")
def list_boms_endpoint(product_code: Optional[str] = Query(None, alias="productCode"), store: MesStore = Depends(get_store)):
    """获取 BOM、物料行与工序快照"""
    boms = store.list_boms(product_code)
    data = {
        "boms": dump(schemas.BOMRead, boms),
        "bomItems": dump(schemas.BOMItemRead, store.list_bom_items()),
        "bomRoutingSteps": dump(schemas.BOMRoutingStepRead, store.list_bom_routing_steps()),
    }
    return success_response(data, count=len(boms))


@router.post("", status_code=201)
def create_bom_endpoint(payload: schemas.BOMCreate, store: MesStore = Depends(get_store)):
    bom = store.add_bom(payload)
    return success_response({"bomId": bom.id, "revision": bom.revision}, message="BOM이 등록되었습니다.")


@router.put("")
def save_bom_items_endpoint(payload: schemas.BOMItemsSave, store: MesStore = Depends(get_store)):
    """整体保存 BOM 物料行"""
    items = store.save_bom_items(payload.bom_id, payload.items)
    return success_response({"bomItems": dump(schemas.BOMItemRead, items)}, message="BOM 자재가 저장되었습니다.")


@router.delete("")
def delete_bom_endpoint(id: Optional[int] = Query(None), store: MesStore = Depends(get_store)):
    if id is None:
        return JSONResponse(status_code=400, content={"success": False})
    store.delete_bom(id)
    return success_response()


@router.get("/{bom_id}/items")
def get_bom_items_endpoint(bom_id: int, store: MesStore = Depends(get_store)):
    items = store.get_bom_items_by_bom_id(bom_id)
    return success_response({"bomItems": dump(schemas.BOMItemRead, items)}, count=len(items))


@router.get("/{bom_id}/routing")
def get_bom_routing_endpoint(bom_id: int, store: MesStore = Depends(get_store)):
    """BOM 的工序信息（快照优先）"""
    steps = store.get_bom_routing_info(bom_id)
    return success_response({"routingSteps": dump(schemas.ProcessStepRead, steps)}, count=len(steps))


# 物料行编辑：传入当前编辑列表，返回编辑后的列表，不写数据库

@router.post("/draft/add")
def add_item_draft_endpoint(payload: schemas.ItemAddRequest, store: MesStore = Depends(get_store)):
    items = store.add_item_draft(payload.bom_id, payload.items, payload.process_sequence)
    return success_response({"items": [i.to_json() for i in items]})


@router.post("/draft/change")
def change_item_draft_endpoint(payload: schemas.ItemChangeRequest, store: MesStore = Depends(get_store)):
    items = store.change_item_draft(payload.items, payload.item_id, payload.field, payload.value)
    return success_response({"items": [i.to_json() for i in items]})


@router.post("/draft/delete")
def delete_item_draft_endpoint(payload: schemas.ItemDeleteRequest):
    items = bom_editor.delete_item(payload.items, payload.item_id)
    return success_response({"items": [i.to_json() for i in items]})


@router.post("/draft/reset")
def reset_item_draft_endpoint(bom_id: int = Query(..., alias="bomId"), store: MesStore = Depends(get_store)):
    items = store.reset_items_draft(bom_id)
    return success_response({"items": [i.to_json() for i in items]})
