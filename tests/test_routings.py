import pytest
from fastapi.testclient import TestClient

from mes.main import app
from mes import crud
from mes.core import sequencer
from mes.core.exceptions import NotFoundError, ValidationError
from mes.schemas import RoutingCreate, RoutingStepDraft
from mes.store import MesStore

client = TestClient(app)


def setup_master(store):
    store.add_master("lines", {"code": "L01", "name": "Line A"})
    store.add_master("lines", {"code": "L02", "name": "Line B"})
    for code, name, line in [("P01", "Cut", "Line A"), ("P02", "Weld", "Line A"), ("P03", "Paint", "Line B")]:
        store.add_master("processes", {"code": code, "name": name, "line": line})
    for code, name, line in [("E01", "Saw", "Line A"), ("E02", "Welder", "Line A"), ("E03", "Booth", "Line B")]:
        store.add_master("equipments", {"code": code, "name": name, "line": line})


def three_steps():
    return [
        RoutingStepDraft(line="Line A", process="Cut", main_equipment="Saw"),
        RoutingStepDraft(line="Line A", process="Weld", main_equipment="Welder"),
        RoutingStepDraft(line="Line B", process="Paint", main_equipment="Booth"),
    ]


def test_rt100_delete_middle_step(db):
    store = MesStore(db)
    setup_master(store)
    routing = store.add_routing(RoutingCreate(code="RT100", name="Test Routing"))

    saved = store.save_routing_steps(routing.id, three_steps())
    assert [s.sequence for s in saved] == [1, 2, 3]
    assert [s.id for s in saved] == [1, 2, 3]
    assert [s.previous_process for s in saved] == ["-", "Cut", "Weld"]
    assert [s.next_process for s in saved] == ["Weld", "Paint", "-"]

    draft = [RoutingStepDraft.model_validate(s) for s in saved]
    draft = sequencer.delete_step(draft, draft[1].id)
    store.save_routing_steps(routing.id, draft)

    steps = store.get_routing_steps_by_routing_id(routing.id)
    assert [s.sequence for s in steps] == [1, 2]
    assert [(s.line, s.process) for s in steps] == [("Line A", "Cut"), ("Line B", "Paint")]
    assert [s.id for s in steps] == [1, 3]
    assert steps[0].next_process == "Paint"
    assert steps[1].previous_process == "Cut"


def test_routing_code_and_name_required(db):
    store = MesStore(db)
    with pytest.raises(ValidationError):
        store.add_routing(RoutingCreate(code="RT100", name=""))
    store.add_routing(RoutingCreate(code="RT100", name="Test Routing"))
    with pytest.raises(ValidationError):
        store.add_routing(RoutingCreate(code="RT100", name="Other"))


def test_failed_save_leaves_steps_untouched(db):
    store = MesStore(db)
    setup_master(store)
    routing = store.add_routing(RoutingCreate(code="RT100", name="Test Routing"))
    store.save_routing_steps(routing.id, three_steps())

    broken = three_steps()
    broken[2] = broken[2].model_copy(update={"main_equipment": ""})
    with pytest.raises(ValidationError) as exc:
        store.save_routing_steps(routing.id, broken)
    assert exc.value.message == sequencer.MISSING_FIELDS_MESSAGE

    unknown = three_steps()
    unknown[0] = unknown[0].model_copy(update={"process": "Drill"})
    with pytest.raises(ValidationError) as exc:
        store.save_routing_steps(routing.id, unknown)
    assert "Drill" in exc.value.message

    assert len(store.get_routing_steps_by_routing_id(routing.id)) == 3


def test_save_rejects_steps_of_other_routing(db):
    store = MesStore(db)
    setup_master(store)
    first = store.add_routing(RoutingCreate(code="RT100", name="First"))
    second = store.add_routing(RoutingCreate(code="RT200", name="Second"))
    saved = store.save_routing_steps(first.id, three_steps())

    stolen = [RoutingStepDraft.model_validate(saved[0])]
    with pytest.raises(ValidationError):
        store.save_routing_steps(second.id, stolen)


def test_delete_routing_cascades_to_steps(db):
    store = MesStore(db)
    setup_master(store)
    keep = store.add_routing(RoutingCreate(code="RT100", name="Keep"))
    drop = store.add_routing(RoutingCreate(code="RT200", name="Drop"))
    store.save_routing_steps(keep.id, three_steps())
    store.save_routing_steps(drop.id, three_steps())

    drop_id = drop.id
    store.delete_routing(drop_id)
    assert crud.get_routing(db, drop_id) is None
    assert crud.list_routing_steps(db, drop_id) == []
    assert len(crud.list_routing_steps(db, keep.id)) == 3

    with pytest.raises(NotFoundError):
        store.delete_routing(drop_id)


def test_routing_api_flow(db):
    setup_master(MesStore(db))

    r = client.post("/api/mes/routings", json={"code": "RT100", "name": "Test Routing"})
    assert r.status_code == 201
    routing_id = r.json()["data"]["routingId"]

    r = client.post("/api/mes/routings", json={"code": "", "name": "x"})
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "필수 항목 누락"}

    # 追加两个步骤后修改第二步的产线
    steps = []
    for _ in range(2):
        r = client.post("/api/mes/routings/draft/append", json={"routingId": routing_id, "steps": steps})
        assert r.status_code == 200
        steps = r.json()["data"]["steps"]
    assert [s["sequence"] for s in steps] == [1, 2]
    assert steps[0]["nextProcess"] == "Cut"
    assert steps[1]["previousProcess"] == "Cut"

    r = client.post("/api/mes/routings/draft/change", json={
        "steps": steps, "stepId": steps[1]["id"], "field": "line", "value": "Line B",
    })
    steps = r.json()["data"]["steps"]
    assert (steps[1]["process"], steps[1]["mainEquipment"]) == ("Paint", "Booth")
    assert steps[0]["nextProcess"] == "Paint"

    r = client.post("/api/mes/routings/draft/move", json={"steps": steps, "stepId": steps[1]["id"], "direction": "up"})
    steps = r.json()["data"]["steps"]
    assert [s["process"] for s in steps] == ["Paint", "Cut"]

    r = client.put("/api/mes/routings", json={"routingId": routing_id, "steps": steps})
    assert r.status_code == 200
    saved = r.json()["data"]["routingSteps"]
    assert [s["id"] for s in saved] == [1, 2]

    r = client.get("/api/mes/routings")
    body = r.json()
    assert body["count"] == 1
    assert [s["process"] for s in body["data"]["routingSteps"]] == ["Paint", "Cut"]

    r = client.get(f"/api/mes/routings/{routing_id}/steps")
    assert [s["sequence"] for s in r.json()["data"]["routingSteps"]] == [1, 2]

    assert client.delete("/api/mes/routings").status_code == 400
    r = client.delete(f"/api/mes/routings?id={routing_id}")
    assert r.json() == {"success": True}
    assert client.get("/api/mes/routings").json()["data"]["routingSteps"] == []


def test_draft_append_requires_existing_routing():
    r = client.post("/api/mes/routings/draft/append", json={"routingId": 999, "steps": []})
    assert r.status_code == 404
    assert r.json()["success"] is False


def test_save_without_steps_is_rejected():
    r = client.put("/api/mes/routings", json={"routingId": 1})
    assert r.status_code == 400
    assert r.json()["message"] == "라우팅 ID와 공정 정보가 필요합니다."


def test_save_with_stale_permanent_id_allocates_above_it(db):
    store = MesStore(db)
    setup_master(store)
    routing = store.add_routing(RoutingCreate(code="RT100", name="Test Routing"))
    saved = store.save_routing_steps(routing.id, three_steps())
    stale = [RoutingStepDraft.model_validate(s) for s in saved]

    # 另一位编辑者删掉了第3步
    store.save_routing_steps(routing.id, stale[:2])

    draft = stale + [RoutingStepDraft(line="Line B", process="Paint", main_equipment="Booth")]
    steps = store.save_routing_steps(routing.id, draft)
    assert [s.id for s in steps] == [1, 2, 3, 4]
    assert [s.sequence for s in steps] == [1, 2, 3, 4]


def test_save_rejects_duplicate_step_ids(db):
    store = MesStore(db)
    setup_master(store)
    routing = store.add_routing(RoutingCreate(code="RT100", name="Test Routing"))
    store.save_routing_steps(routing.id, three_steps())

    steps = [s.model_copy(update={"id": 1}) for s in three_steps()[:2]]
    with pytest.raises(ValidationError):
        store.save_routing_steps(routing.id, steps)
    assert [s.id for s in store.get_routing_steps_by_routing_id(routing.id)] == [1, 2, 3]
