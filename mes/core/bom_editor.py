"""BOM 物料行编辑

单个 BOM 版本下的物料需求列表。物料行只关联工序序号（process_sequence），
不参与编号，因此删除后无需重排。所有函数返回新的列表。
"""

from typing import List, Optional

from .exceptions import NotFoundError, ValidationError
from ..config.settings import settings
from ..schemas.bom import BOMItemDraft
from ..utils.helpers import assign_permanent_ids, blank

SELECT_PROCESS_MESSAGE = "공정 라우팅 리스트에서 공정을 먼저 선택해주세요."
PROCESS_NOT_FOUND_MESSAGE = "선택된 공정을 찾을 수 없습니다."
INVALID_ITEMS_MESSAGE = "모든 자재 항목의 자재코드, 자재명, 수량을 입력해주세요."

EDITABLE_FIELDS = {
    "materialCode": "material_code",
    "material_code": "material_code",
    "materialName": "material_name",
    "material_name": "material_name",
    "quantity": "quantity",
    "unit": "unit",
    "lossRate": "loss_rate",
    "loss_rate": "loss_rate",
    "alternateMaterial": "alternate_material",
    "alternate_material": "alternate_material",
}
NUMERIC_FIELDS = {"quantity", "loss_rate"}


def _sorted(items: List[BOMItemDraft]) -> List[BOMItemDraft]:
    # sorted 是稳定排序，同一工序内保持添加顺序
    return sorted(items, key=lambda item: item.process_sequence)


def _index_of(items: List[BOMItemDraft], item_id: int) -> int:
    for idx, item in enumerate(items):
        if item.id == item_id:
            return idx
    raise NotFoundError("자재 항목을 찾을 수 없습니다.")


def add_item(items: List[BOMItemDraft], bom_id: int, routing_steps, process_sequence: Optional[int], materials) -> List[BOMItemDraft]:
    """在选中的工序下新增一行物料

    必须先从该 BOM 的工艺路线中选择工序；默认物料取第一个启用物料。
    """
    if process_sequence is None:
        raise ValidationError(SELECT_PROCESS_MESSAGE)
    step = next((s for s in routing_steps if s.sequence == process_sequence), None)
    if step is None:
        raise ValidationError(PROCESS_NOT_FOUND_MESSAGE)

    material = materials[0] if materials else None
    new_item = BOMItemDraft(
        bom_id=bom_id,
        process_sequence=step.sequence,
        process_name=step.process,
        material_code=material.code if material else "",
        material_name=material.name if material else "",
        quantity=0,
        unit=(material.unit if material else None) or settings.DEFAULT_UNIT,
        loss_rate=0,
        alternate_material="",
    )
    return _sorted(list(items) + [new_item])


def change_item(items: List[BOMItemDraft], item_id: int, field: str, value, materials) -> List[BOMItemDraft]:
    """修改物料行字段

    修改物料编码时，物料名称和单位在同一次更新中从物料主数据刷新。
    """
    attr = EDITABLE_FIELDS.get(field)
    if attr is None:
        raise ValidationError(f"수정할 수 없는 항목입니다: {field}")
    idx = _index_of(items, item_id)

    if attr in NUMERIC_FIELDS:
        try:
            updates = {attr: float(value)}
        except (TypeError, ValueError):
            raise ValidationError("수량과 손실율은 숫자로 입력해주세요.")
    elif attr == "material_code":
        code = str(value)
        updates = {"material_code": code}
        material = next((m for m in materials if m.code == code), None)
        updates["material_name"] = material.name if material else ""
        updates["unit"] = (material.unit if material else None) or settings.DEFAULT_UNIT
    else:
        updates = {attr: str(value)}

    changed = list(items)
    changed[idx] = items[idx].model_copy(update=updates)
    return changed


def delete_item(items: List[BOMItemDraft], item_id: int) -> List[BOMItemDraft]:
    idx = _index_of(items, item_id)
    return list(items[:idx]) + list(items[idx + 1:])


def find_duplicates(items: List[BOMItemDraft]) -> List[BOMItemDraft]:
    """同一工序内重复出现的物料（每组只返回第一行）"""
    seen = {}
    duplicates = []
    for item in items:
        if blank(item.material_code):
            continue
        key = (item.process_sequence, item.material_code)
        if key in seen and seen[key] is not None:
            duplicates.append(seen[key])
            seen[key] = None
        elif key not in seen:
            seen[key] = item
    return duplicates


def validate_items(items: List[BOMItemDraft]) -> None:
    """保存前校验，任一行不合格则整批失败"""
    for item in items:
        if blank(item.material_code) or blank(item.material_name) or item.quantity <= 0:
            raise ValidationError(INVALID_ITEMS_MESSAGE)

    duplicates = find_duplicates(items)
    if duplicates:
        listing = ", ".join(
            f"공정 {d.process_sequence} ({d.process_name})에 자재 {d.material_code} ({d.material_name})"
            for d in duplicates
        )
        raise ValidationError(f"동일 공정에 동일한 자재가 중복되었습니다: {listing}")


def prepare_for_save(items: List[BOMItemDraft], bom_id: int, max_id: int) -> List[BOMItemDraft]:
    validate_items(items)
    owned = [item.model_copy(update={"bom_id": bom_id}) for item in items]
    return assign_permanent_ids(owned, max_id)
