from types import SimpleNamespace

import pytest

from mes.core import bom_editor
from mes.core.exceptions import ValidationError
from mes.schemas import BOMItemDraft


ROUTING_STEPS = [SimpleNamespace(sequence=1, process="절단"), SimpleNamespace(sequence=2, process="용접")]
MATERIALS = [
    SimpleNamespace(code="M001", name="강판 1.2T", unit="EA"),
    SimpleNamespace(code="M002", name="용접봉", unit="KG"),
]


def item(item_id, seq, code="M001", name="강판 1.2T", qty=1.0):
    return BOMItemDraft(id=item_id, bom_id=1, process_sequence=seq, process_name="절단",
                        material_code=code, material_name=name, quantity=qty)


def test_add_requires_selected_process():
    with pytest.raises(ValidationError) as exc:
        bom_editor.add_item([], 1, ROUTING_STEPS, None, MATERIALS)
    assert exc.value.message == bom_editor.SELECT_PROCESS_MESSAGE

    with pytest.raises(ValidationError):
        bom_editor.add_item([], 1, ROUTING_STEPS, 9, MATERIALS)


def test_add_seeds_defaults_and_keeps_process_order():
    items = bom_editor.add_item([], 1, ROUTING_STEPS, 2, MATERIALS)
    items = bom_editor.add_item(items, 1, ROUTING_STEPS, 1, MATERIALS)

    assert [i.process_sequence for i in items] == [1, 2]
    first = items[0]
    assert first.process_name == "절단"
    assert first.material_code == "M001"
    assert first.material_name == "강판 1.2T"
    assert first.quantity == 0
    assert first.unit == "EA"
    assert first.id > 1_000_000_000


def test_add_without_materials_uses_default_unit():
    items = bom_editor.add_item([], 1, ROUTING_STEPS, 1, [])
    assert items[0].material_code == ""
    assert items[0].unit == "EA"


def test_change_material_refreshes_name_and_unit():
    items = [item(1, 1)]
    result = bom_editor.change_item(items, 1, "materialCode", "M002", MATERIALS)
    assert (result[0].material_code, result[0].material_name, result[0].unit) == ("M002", "용접봉", "KG")
    assert items[0].material_code == "M001"


def test_change_to_unknown_material_clears_name():
    items = [item(1, 1, code="M002", name="용접봉").model_copy(update={"unit": "KG"})]
    result = bom_editor.change_item(items, 1, "materialCode", "M999", MATERIALS)
    assert (result[0].material_code, result[0].material_name, result[0].unit) == ("M999", "", "EA")


def test_change_numeric_field():
    result = bom_editor.change_item([item(1, 1)], 1, "lossRate", "3.5", MATERIALS)
    assert result[0].loss_rate == 3.5
    with pytest.raises(ValidationError):
        bom_editor.change_item([item(1, 1)], 1, "quantity", "abc", MATERIALS)


def test_delete_does_not_renumber():
    items = [item(1, 1), item(2, 2, code="M002", name="용접봉")]
    result = bom_editor.delete_item(items, 1)
    assert [i.id for i in result] == [2]
    assert result[0].process_sequence == 2


@pytest.mark.parametrize("broken", [
    {"material_code": ""},
    {"material_name": "  "},
    {"quantity": 0},
    {"quantity": -1},
])
def test_validate_fails_whole_batch(broken):
    items = [item(1, 1), item(2, 2).model_copy(update=broken)]
    with pytest.raises(ValidationError) as exc:
        bom_editor.validate_items(items)
    assert exc.value.message == bom_editor.INVALID_ITEMS_MESSAGE


def test_validate_rejects_duplicate_material_in_same_process():
    items = [item(1, 1), item(2, 1), item(3, 2)]
    with pytest.raises(ValidationError) as exc:
        bom_editor.validate_items(items)
    assert "M001" in exc.value.message
    assert "공정 1" in exc.value.message


def test_prepare_for_save_assigns_ids_and_owner():
    items = [item(5, 1), item(1_700_000_000_000, 2, code="M002", name="용접봉")]
    prepared = bom_editor.prepare_for_save(items, 3, max_id=10)
    assert [i.id for i in prepared] == [5, 11]
    assert all(i.bom_id == 3 for i in prepared)
