"""工艺路线工序排序

维护单条路线内按顺序排列、连续编号（1..N）的工序步骤列表。
所有函数都不修改传入的列表，返回新的列表。

前/后工序（previous_process / next_process）由列表顺序推导：
追加时同时更新新步骤与原末尾步骤，删除、移动、修改工序后整体重新链接。
"""

from typing import List, Optional

from .exceptions import NotFoundError, ValidationError
from ..schemas.routing import RoutingStepDraft
from ..utils.helpers import assign_permanent_ids, blank, first_name

NO_LINK = "-"
NO_OPTION = ""  # 产线下没有可选工序/设备，界面显示为 "공정 없음"

# 接口字段名（camelCase）与模型字段名的对应关系
EDITABLE_FIELDS = {
    "line": "line",
    "process": "process",
    "mainEquipment": "main_equipment",
    "main_equipment": "main_equipment",
    "standardManHours": "standard_man_hours",
    "standard_man_hours": "standard_man_hours",
}

MISSING_FIELDS_MESSAGE = "모든 공정 단계의 라인, 공정, 주설비를 입력해주세요."


def renumber(steps: List[RoutingStepDraft]) -> List[RoutingStepDraft]:
    """按列表顺序重新编号为 1..N"""
    return [step.model_copy(update={"sequence": idx}) for idx, step in enumerate(steps, start=1)]


def relink(steps: List[RoutingStepDraft]) -> List[RoutingStepDraft]:
    """根据相邻步骤重新计算前/后工序名称"""
    result = []
    last = len(steps) - 1
    for idx, step in enumerate(steps):
        previous_process = steps[idx - 1].process if idx > 0 else NO_LINK
        next_process = steps[idx + 1].process if idx < last else NO_LINK
        result.append(step.model_copy(update={
            "previous_process": previous_process or NO_LINK,
            "next_process": next_process or NO_LINK,
        }))
    return result


def normalize(steps: List[RoutingStepDraft]) -> List[RoutingStepDraft]:
    return relink(renumber(steps))


def _index_of(steps: List[RoutingStepDraft], step_id: int) -> int:
    for idx, step in enumerate(steps):
        if step.id == step_id:
            return idx
    raise NotFoundError("공정 단계를 찾을 수 없습니다.")


def _on_line(records, line: str) -> list:
    return [r for r in records if r.line == line]


def append_step(steps: List[RoutingStepDraft], routing_id: int, lines, processes, equipments) -> List[RoutingStepDraft]:
    """在末尾追加一个步骤

    默认值取第一个启用的产线，以及该产线下第一个启用的工序和设备。
    新步骤的前工序与原末尾步骤的后工序在同一次操作中更新。
    """
    line = first_name(lines)
    last_step: Optional[RoutingStepDraft] = steps[-1] if steps else None

    new_step = RoutingStepDraft(
        routing_id=routing_id,
        sequence=len(steps) + 1,
        line=line,
        process=first_name(_on_line(processes, line)),
        main_equipment=first_name(_on_line(equipments, line)),
        standard_man_hours=0,
        previous_process=(last_step.process or NO_LINK) if last_step else NO_LINK,
        next_process=NO_LINK,
    )

    if last_step is None:
        return [new_step]
    linked_last = last_step.model_copy(update={"next_process": new_step.process or NO_LINK})
    return list(steps[:-1]) + [linked_last, new_step]


def delete_step(steps: List[RoutingStepDraft], step_id: int) -> List[RoutingStepDraft]:
    """删除步骤后重新编号"""
    idx = _index_of(steps, step_id)
    return normalize(list(steps[:idx]) + list(steps[idx + 1:]))


def move_step(steps: List[RoutingStepDraft], step_id: int, direction: str) -> List[RoutingStepDraft]:
    """与相邻步骤交换位置；第一步上移或最后一步下移时不变"""
    idx = _index_of(steps, step_id)
    target = idx - 1 if direction == "up" else idx + 1
    moved = list(steps)
    if 0 <= target < len(moved):
        moved[idx], moved[target] = moved[target], moved[idx]
    return normalize(moved)


def change_step(steps: List[RoutingStepDraft], step_id: int, field: str, value, processes, equipments) -> List[RoutingStepDraft]:
    """修改单个步骤的字段

    修改产线时，若当前工序/设备不属于新产线，则重置为新产线的第一个选项；
    新产线没有可选项时置为空。
    """
    attr = EDITABLE_FIELDS.get(field)
    if attr is None:
        raise ValidationError(f"수정할 수 없는 항목입니다: {field}")
    idx = _index_of(steps, step_id)
    step = steps[idx]

    if attr == "standard_man_hours":
        try:
            hours = float(value)
        except (TypeError, ValueError):
            raise ValidationError("표준공수는 숫자로 입력해주세요.")
        if hours < 0:
            raise ValidationError("표준공수는 0 이상이어야 합니다.")
        updates = {"standard_man_hours": hours}
    elif attr == "line":
        new_line = str(value)
        line_processes = _on_line(processes, new_line)
        line_equipments = _on_line(equipments, new_line)
        updates = {"line": new_line}
        if step.process not in {p.name for p in line_processes}:
            updates["process"] = first_name(line_processes, NO_OPTION)
        if step.main_equipment not in {e.name for e in line_equipments}:
            updates["main_equipment"] = first_name(line_equipments, NO_OPTION)
    else:
        updates = {attr: str(value)}

    changed = list(steps)
    changed[idx] = step.model_copy(update=updates)
    return relink(changed)


def validate_steps(steps: List[RoutingStepDraft]) -> None:
    for step in steps:
        if blank(step.line) or blank(step.process) or blank(step.main_equipment):
            raise ValidationError(MISSING_FIELDS_MESSAGE)


def prepare_for_save(steps: List[RoutingStepDraft], routing_id: int, max_id: int) -> List[RoutingStepDraft]:
    """保存前校验、规范化并为临时ID分配正式ID

    任一步骤缺少产线/工序/主设备时整批失败。
    """
    validate_steps(steps)
    owned = [step.model_copy(update={"routing_id": routing_id}) for step in steps]
    return assign_permanent_ids(normalize(owned), max_id)
