from fastapi.testclient import TestClient

from mes.main import app
from mes.schemas import BOMCreate, BOMItemDraft, RoutingCreate, RoutingStepDraft
from mes.store import CLOSED_PLAN_MESSAGE, MesStore

client = TestClient(app)


def setup_env(db):
    """主数据、工艺路线，以及 FG-100 的两个 BOM 版本"""
    store = MesStore(db)
    store.add_master("lines", {"code": "L01", "name": "조립1라인"})
    store.add_master("processes", {"code": "P01", "name": "절단", "line": "조립1라인"})
    store.add_master("equipments", {"code": "E01", "name": "레이저절단기", "line": "조립1라인"})
    store.add_master("materials", {"code": "M001", "name": "강판 1.2T", "unit": "EA"})
    store.add_master("materials", {"code": "M002", "name": "용접봉", "unit": "KG"})
    routing = store.add_routing(RoutingCreate(code="RT100", name="브라켓 라우팅"))
    store.save_routing_steps(routing.id, [RoutingStepDraft(line="조립1라인", process="절단", main_equipment="레이저절단기")])

    for code, name in [("M001", "강판 1.2T"), ("M002", "용접봉")]:
        bom = store.add_bom(BOMCreate(product_code="FG-100", product_name="브라켓 A", routing_id=routing.id))
        store.save_bom_items(bom.id, [BOMItemDraft(process_sequence=1, process_name="절단",
                                                   material_code=code, material_name=name, quantity=2)])
    return store


def create_plan(quantity=1000, plan_date="2024-03-05"):
    r = client.post("/api/mes/production-plans", json={
        "planDate": plan_date, "productCode": "FG-100", "productName": "브라켓 A", "planQuantity": quantity,
    })
    assert r.status_code == 201
    return r.json()["data"]


def create_order(plan_code, quantity, **extra):
    payload = {
        "orderDate": "2024-03-06", "planCode": plan_code, "productCode": "FG-100",
        "productName": "브라켓 A", "orderQuantity": quantity,
    }
    payload.update(extra)
    return client.post("/api/mes/work-orders", json=payload)


def get_plan(plan_code):
    plans = client.get("/api/mes/production-plans").json()["data"]
    return next(p for p in plans if p["planCode"] == plan_code)


def test_plan_codes_and_required_fields():
    first = create_plan()
    second = create_plan(plan_date="2024-03-20")
    assert (first["planCode"], second["planCode"]) == ("PLAN-2024-001", "PLAN-2024-002")
    assert first["status"] == "계획"
    assert first["unit"] == "EA"

    r = client.post("/api/mes/production-plans", json={"productCode": "FG-100", "planQuantity": 10})
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "필수 항목 누락"}


def test_plan_status_follows_orders():
    plan_code = create_plan()["planCode"]

    r = create_order(plan_code, 400)
    assert r.status_code == 201
    assert r.json()["data"]["orderCode"] == "WO-2024-001"
    assert r.json()["data"]["status"] == "대기"
    assert get_plan(plan_code)["status"] == "진행중"

    assert create_order(plan_code, 600).status_code == 201
    assert get_plan(plan_code)["status"] == "완료"

    r = create_order(plan_code, 1)
    assert r.status_code == 400
    assert r.json()["message"] == CLOSED_PLAN_MESSAGE

    orders = client.get("/api/mes/work-orders").json()["data"]["workOrders"]
    for order in orders:
        assert client.delete(f"/api/mes/work-orders?id={order['id']}").json()["success"] is True
    assert get_plan(plan_code)["status"] == "계획"


def test_order_requires_existing_plan_and_fields():
    r = create_order("PLAN-2099-001", 10)
    assert r.status_code == 400
    assert "PLAN-2099-001" in r.json()["message"]

    r = create_order("", 0)
    assert r.status_code == 400
    assert r.json()["message"] == "필수 항목을 입력해주세요"

    r = create_order("", 10, line="없는라인")
    assert r.status_code == 400


def test_order_without_plan_is_allowed():
    r = create_order("", 10)
    assert r.status_code == 201
    assert r.json()["data"]["planCode"] == ""


def test_order_copies_latest_bom(db):
    setup_env(db)
    plan_code = create_plan()["planCode"]
    order_id = create_order(plan_code, 100, line="조립1라인").json()["data"]["id"]

    body = client.get("/api/mes/work-orders").json()["data"]
    steps = body["workOrderRoutingSteps"]
    materials = body["workOrderMaterials"]
    assert [(s["workOrderId"], s["sequence"], s["process"]) for s in steps] == [(order_id, 1, "절단")]
    # Rev.02 的物料
    assert [(m["workOrderId"], m["materialCode"], m["quantity"]) for m in materials] == [(order_id, "M002", 2)]

    client.delete(f"/api/mes/work-orders?id={order_id}")
    body = client.get("/api/mes/work-orders").json()["data"]
    assert body["workOrderRoutingSteps"] == []
    assert body["workOrderMaterials"] == []


def test_work_order_filters():
    plan_code = create_plan()["planCode"]
    create_order(plan_code, 100, orderDate="2024-03-01")
    create_order(plan_code, 100, orderDate="2024-03-10", status="보류")
    create_order("", 5, orderDate="2024-04-02", productCode="FG-200", productName="커버 B")

    def codes(**params):
        body = client.get("/api/mes/work-orders", params=params).json()
        return sorted(o["orderCode"] for o in body["data"]["workOrders"])

    assert len(codes()) == 3
    assert codes(status="보류") == ["WO-2024-002"]
    assert codes(startDate="2024-03-05", endDate="2024-03-31") == ["WO-2024-002"]
    # 4月的序号 001、002 已被占用，顺延为 003
    assert codes(search="커버") == ["WO-2024-003"]


def test_update_and_delete_work_order():
    plan_code = create_plan()["planCode"]
    order = create_order(plan_code, 100).json()["data"]

    r = client.put("/api/mes/work-orders", json={"id": order["id"]})
    assert r.status_code == 400
    assert r.json()["message"] == "수정할 항목이 없습니다"

    r = client.put("/api/mes/work-orders", json={"id": order["id"], "status": "진행중", "worker": "김작업"})
    assert r.status_code == 200
    assert (r.json()["data"]["status"], r.json()["data"]["worker"]) == ("진행중", "김작업")

    r = client.put("/api/mes/work-orders", json={"id": order["id"], "status": "없음"})
    assert r.status_code == 400

    assert client.delete("/api/mes/work-orders").status_code == 400
    assert client.delete("/api/mes/work-orders?id=999").status_code == 404


def test_update_and_delete_plan():
    plan = create_plan()

    r = client.put("/api/mes/production-plans", json={"planQuantity": 10})
    assert r.status_code == 400
    assert r.json()["message"] == "id는 필수입니다"

    r = client.put("/api/mes/production-plans", json={"id": plan["id"], "manager": "이계획", "endDate": "2024-03-31"})
    assert r.json()["data"]["manager"] == "이계획"
    assert r.json()["data"]["endDate"] == "2024-03-31"

    r = client.delete(f"/api/mes/production-plans?id={plan['id']}")
    assert r.json() == {"success": True, "message": "생산계획이 삭제되었습니다"}
    assert client.get("/api/mes/production-plans").json()["count"] == 0
