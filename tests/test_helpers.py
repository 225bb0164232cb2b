from datetime import date

import pytest

from mes.core.exceptions import ValidationError
from mes.schemas import RoutingStepDraft
from mes.utils.helpers import (
    assign_permanent_ids,
    generate_order_code,
    generate_plan_code,
    is_temporary_id,
    next_revision,
    revision_number,
)


def test_plan_code_counts_same_month():
    existing = [date(2024, 3, 1), date(2024, 3, 20), date(2024, 2, 28), date(2023, 3, 5)]
    assert generate_plan_code(date(2024, 3, 5), existing) == "PLAN-2024-003"
    assert generate_plan_code(date(2024, 4, 1), existing) == "PLAN-2024-001"


def test_codes_skip_existing():
    # 3月已有1条，但 002 已被其他月份占用
    code = generate_order_code(date(2024, 3, 5), [date(2024, 3, 1)], ["WO-2024-001", "WO-2024-002"])
    assert code == "WO-2024-003"


def test_revision_numbers():
    assert revision_number("Rev.07") == 7
    assert revision_number("draft") == 0
    assert revision_number(None) == 0
    assert next_revision([]) == "Rev.01"
    assert next_revision(["Rev.01", "Rev.03", "x"]) == "Rev.04"


def test_temporary_ids():
    assert is_temporary_id(None)
    assert is_temporary_id(1_700_000_000_000)
    assert not is_temporary_id(42)
    assert not is_temporary_id(1_000_000_000)


def test_assign_permanent_ids_keeps_existing():
    records = [RoutingStepDraft(id=3), RoutingStepDraft(), RoutingStepDraft()]
    result = assign_permanent_ids(records, 10)
    assert [r.id for r in result] == [3, 11, 12]
    assert records[1].id > 1_000_000_000


def test_assign_permanent_ids_skips_payload_ids():
    records = [RoutingStepDraft(id=1), RoutingStepDraft(id=7), RoutingStepDraft()]
    assert [r.id for r in assign_permanent_ids(records, 2)] == [1, 7, 8]

    with pytest.raises(ValidationError):
        assign_permanent_ids([RoutingStepDraft(id=4), RoutingStepDraft(id=4)], 10)
