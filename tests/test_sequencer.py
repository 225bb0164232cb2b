from types import SimpleNamespace

import pytest

from mes.core import sequencer
from mes.core.exceptions import NotFoundError, ValidationError
from mes.schemas import RoutingStepDraft


LINES = [SimpleNamespace(name="조립1라인"), SimpleNamespace(name="포장라인"), SimpleNamespace(name="빈라인")]
PROCESSES = [
    SimpleNamespace(name="절단", line="조립1라인"),
    SimpleNamespace(name="용접", line="조립1라인"),
    SimpleNamespace(name="포장", line="포장라인"),
]
EQUIPMENTS = [
    SimpleNamespace(name="레이저절단기", line="조립1라인"),
    SimpleNamespace(name="포장기", line="포장라인"),
]


def make_steps(*processes):
    steps = [
        RoutingStepDraft(id=idx, routing_id=1, sequence=idx, line="조립1라인", process=p, main_equipment="레이저절단기")
        for idx, p in enumerate(processes, start=1)
    ]
    return sequencer.normalize(steps)


def test_append_first_step_uses_first_active_options():
    steps = sequencer.append_step([], 1, LINES, PROCESSES, EQUIPMENTS)
    assert len(steps) == 1
    step = steps[0]
    assert step.sequence == 1
    assert step.routing_id == 1
    assert (step.line, step.process, step.main_equipment) == ("조립1라인", "절단", "레이저절단기")
    assert step.previous_process == "-"
    assert step.next_process == "-"
    assert step.id > 1_000_000_000


def test_append_links_new_step_and_former_last_step():
    steps = sequencer.append_step([], 1, LINES, PROCESSES, EQUIPMENTS)
    steps = sequencer.change_step(steps, steps[0].id, "process", "용접", PROCESSES, EQUIPMENTS)
    steps = sequencer.append_step(steps, 1, LINES, PROCESSES, EQUIPMENTS)

    assert [s.sequence for s in steps] == [1, 2]
    assert steps[1].previous_process == "용접"
    assert steps[0].next_process == "절단"
    assert steps[1].next_process == "-"


def test_append_does_not_modify_input_list():
    original = make_steps("절단")
    sequencer.append_step(original, 1, LINES, PROCESSES, EQUIPMENTS)
    assert len(original) == 1
    assert original[0].next_process == "-"


def test_delete_renumbers_densely():
    steps = make_steps("절단", "용접", "포장")
    result = sequencer.delete_step(steps, 2)
    assert [s.sequence for s in result] == [1, 2]
    assert [s.process for s in result] == ["절단", "포장"]
    assert result[0].next_process == "포장"
    assert result[1].previous_process == "절단"


def test_delete_unknown_step_raises():
    with pytest.raises(NotFoundError):
        sequencer.delete_step(make_steps("절단"), 99)


def test_move_swaps_adjacent_and_renumbers():
    steps = make_steps("절단", "용접", "포장")
    result = sequencer.move_step(steps, 3, "up")
    assert [s.process for s in result] == ["절단", "포장", "용접"]
    assert [s.sequence for s in result] == [1, 2, 3]
    assert [s.id for s in result] == [1, 3, 2]
    assert result[1].previous_process == "절단"
    assert result[1].next_process == "용접"


def test_move_at_edges_is_noop():
    steps = make_steps("절단", "용접")
    assert [s.process for s in sequencer.move_step(steps, 1, "up")] == ["절단", "용접"]
    assert [s.process for s in sequencer.move_step(steps, 2, "down")] == ["절단", "용접"]


def test_change_line_resets_process_and_equipment():
    steps = make_steps("절단")
    result = sequencer.change_step(steps, 1, "line", "포장라인", PROCESSES, EQUIPMENTS)
    assert result[0].line == "포장라인"
    assert result[0].process == "포장"
    assert result[0].main_equipment == "포장기"


def test_change_line_without_processes_uses_empty_sentinel():
    steps = make_steps("절단", "용접")
    result = sequencer.change_step(steps, 1, "line", "빈라인", PROCESSES, EQUIPMENTS)
    assert result[0].process == ""
    assert result[0].main_equipment == ""
    assert result[1].previous_process == "-"


def test_change_man_hours_accepts_camel_case_field():
    steps = make_steps("절단")
    result = sequencer.change_step(steps, 1, "standardManHours", "2.5", PROCESSES, EQUIPMENTS)
    assert result[0].standard_man_hours == 2.5

    with pytest.raises(ValidationError):
        sequencer.change_step(steps, 1, "standardManHours", "-1", PROCESSES, EQUIPMENTS)
    with pytest.raises(ValidationError):
        sequencer.change_step(steps, 1, "sequence", 5, PROCESSES, EQUIPMENTS)


def test_validate_rejects_missing_fields():
    steps = make_steps("절단", "용접")
    broken = [steps[0], steps[1].model_copy(update={"main_equipment": " "})]
    with pytest.raises(ValidationError) as exc:
        sequencer.validate_steps(broken)
    assert exc.value.message == sequencer.MISSING_FIELDS_MESSAGE


def test_prepare_for_save_assigns_permanent_ids():
    steps = sequencer.append_step(make_steps("절단"), 1, LINES, PROCESSES, EQUIPMENTS)
    steps = sequencer.append_step(steps, 1, LINES, PROCESSES, EQUIPMENTS)
    prepared = sequencer.prepare_for_save(steps, 7, max_id=40)
    assert [s.id for s in prepared] == [1, 41, 42]
    assert all(s.routing_id == 7 for s in prepared)
    assert [s.sequence for s in prepared] == [1, 2, 3]
