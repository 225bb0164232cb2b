"""基准信息接口

产线、工序、设备、物料、产品五类目录的接口结构相同，由 build_master_router 统一生成。
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from ... import schemas
from ...api.deps import get_store
from ...core.responses import dump, success_response
from ...store import MesStore


def build_master_router(kind: str, create_schema, update_schema, read_schema, label: str) -> APIRouter:
    router = APIRouter(prefix=f"/{kind}", tags=["master"])

    @router.get("")
    def list_endpoint(
        status: Optional[str] = Query(None, description="active/inactive"),
        line: Optional[str] = Query(None, description="소속 라인명"),
        store: MesStore = Depends(get_store),
    ):
        records = store.list_master(kind, status=status, line=line)
        return success_response(dump(read_schema, records), count=len(records))

    @router.post("", status_code=201)
    def create_endpoint(payload: create_schema, store: MesStore = Depends(get_store)):
        record = store.add_master(kind, payload.model_dump())
        return success_response(read_schema.model_validate(record).to_json(), message=f"{label}이(가) 추가되었습니다")

    @router.put("")
    def update_endpoint(payload: update_schema, store: MesStore = Depends(get_store)):
        changes = payload.model_dump(exclude_unset=True, exclude={"id"})
        record = store.update_master(kind, payload.id, changes)
        return success_response(read_schema.model_validate(record).to_json(), message=f"{label} 정보가 수정되었습니다")

    @router.delete("")
    def delete_endpoint(id: Optional[int] = Query(None), store: MesStore = Depends(get_store)):
        if id is None:
            return JSONResponse(status_code=400, content={"success": False, "message": "id는 필수입니다"})
        store.delete_master(kind, id)
        return success_response(message=f"{label}이(가) 삭제되었습니다")

    return router


lines_router = build_master_router("lines", schemas.LineCreate, schemas.LineUpdate, schemas.LineRead, "라인")
processes_router = build_master_router(
    "processes", schemas.ProcessCreate, schemas.ProcessUpdate, schemas.ProcessRead, "공정")
equipments_router = build_master_router(
    "equipments", schemas.EquipmentCreate, schemas.EquipmentUpdate, schemas.EquipmentRead, "설비")
materials_router = build_master_router(
    "materials", schemas.MaterialCreate, schemas.MaterialUpdate, schemas.MaterialRead, "자재")
products_router = build_master_router(
    "products", schemas.ProductCreate, schemas.ProductUpdate, schemas.ProductRead, "제품")
