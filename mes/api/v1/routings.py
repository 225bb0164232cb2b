from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from ... import schemas
from ...api.deps import get_store
from ...core import sequencer
from ...core.responses import dump, success_response
from ...store import MesStore

router = APIRouter(prefix="/routings", tags=["routings"])


@router.get("")
def list_routings_endpoint(store: MesStore = Depends(get_store)):
    """获取路线及全部工序步骤"""
    routings = store.list_routings()
    data = {
        "routings": dump(schemas.RoutingRead, routings),
        "routingSteps": dump(schemas.RoutingStepRead, store.list_routing_steps()),
    }
    return success_response(data, count=len(routings))


@router.get("/{routing_id}/steps")
def get_routing_steps_endpoint(routing_id: int, store: MesStore = Depends(get_store)):
    steps = store.get_routing_steps_by_routing_id(routing_id)
    return success_response({"routingSteps": dump(schemas.RoutingStepRead, steps)}, count=len(steps))


@router.post("", status_code=201)
def create_routing_endpoint(payload: schemas.RoutingCreate, store: MesStore = Depends(get_store)):
    routing = store.add_routing(payload)
    return success_response({"routingId": routing.id}, message="라우팅이 등록되었습니다.")


@router.put("")
def save_routing_steps_endpoint(payload: schemas.RoutingStepsSave, store: MesStore = Depends(get_store)):
    """整体保存路线的工序步骤"""
    steps = store.save_routing_steps(payload.routing_id, payload.steps)
    return success_response({"routingSteps": dump(schemas.RoutingStepRead, steps)}, message="공정 정보가 저장되었습니다.")


@router.delete("")
def delete_routing_endpoint(id: Optional[int] = Query(None), store: MesStore = Depends(get_store)):
    if id is None:
        return JSONResponse(status_code=400, content={"success": False})
    store.delete_routing(id)
    return success_response()


# 工序步骤编辑：传入当前编辑列表，返回编辑后的列表，不写数据库

@router.post("/draft/append")
def append_step_draft_endpoint(payload: schemas.StepAppendRequest, store: MesStore = Depends(get_store)):
    steps = store.append_step_draft(payload.routing_id, payload.steps)
    return success_response({"steps": [s.to_json() for s in steps]})


@router.post("/draft/delete")
def delete_step_draft_endpoint(payload: schemas.StepDeleteRequest):
    steps = sequencer.delete_step(payload.steps, payload.step_id)
    return success_response({"steps": [s.to_json() for s in steps]})


@router.post("/draft/move")
def move_step_draft_endpoint(payload: schemas.StepMoveRequest):
    steps = sequencer.move_step(payload.steps, payload.step_id, payload.direction)
    return success_response({"steps": [s.to_json() for s in steps]})


@router.post("/draft/change")
def change_step_draft_endpoint(payload: schemas.StepChangeRequest, store: MesStore = Depends(get_store)):
    steps = store.change_step_draft(payload.steps, payload.step_id, payload.field, payload.value)
    return success_response({"steps": [s.to_json() for s in steps]})
