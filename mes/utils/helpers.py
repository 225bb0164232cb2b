"""工具函数模块

包含编号生成、版本号解析、临时ID处理等常用工具函数
"""

import itertools
import re
import time
from datetime import date
from typing import Iterable, List, Optional

from ..config.settings import settings
from ..core.exceptions import ValidationError

REVISION_PATTERN = re.compile(r"Rev\.(\d+)")

# 与前端一致：临时ID使用毫秒时间戳，递增保证同一毫秒内不重复
_temporary_ids = itertools.count(int(time.time() * 1000))


def next_temporary_id() -> int:
    """生成客户端风格的临时ID"""
    return next(_temporary_ids)


def is_temporary_id(record_id: Optional[int]) -> bool:
    """大于阈值的ID视为客户端生成的占位ID"""
    return record_id is None or record_id > settings.TEMPORARY_ID_THRESHOLD


def assign_permanent_ids(records: list, max_id: int) -> list:
    """为临时ID分配从 max_id+1 开始的连续正式ID

    返回新的列表，原有正式ID保持不变。新ID同时避开本批中已有的正式ID，
    这些ID可能已被他人从数据库删除。同一正式ID出现多次时整批失败。
    """
    permanent = [r.id for r in records if not is_temporary_id(r.id)]
    if len(permanent) != len(set(permanent)):
        raise ValidationError("중복된 ID가 포함되어 있습니다.")
    max_id = max([max_id] + permanent)

    result = []
    for record in records:
        if is_temporary_id(record.id):
            max_id += 1
            record = record.model_copy(update={"id": max_id})
        result.append(record)
    return result


def revision_number(revision: Optional[str]) -> int:
    """解析 "Rev.NN" 中的数字，无法解析时返回 0"""
    if not revision:
        return 0
    match = REVISION_PATTERN.search(revision)
    return int(match.group(1)) if match else 0


def next_revision(revisions: Iterable[str]) -> str:
    """计算同一产品的下一个版本号

    Rev.01, Rev.03 -> Rev.04
    """
    highest = max((revision_number(r) for r in revisions), default=0)
    return f"Rev.{highest + 1:02d}"


def _monthly_code(prefix: str, reference: date, dates: Iterable[date], taken: Iterable[str]) -> str:
    # 序号按同年同月的记录数计算，编号中只包含年份，因此跨月可能重名，重名时顺延
    month_count = sum(1 for d in dates if d and d.year == reference.year and d.month == reference.month)
    taken = set(taken)
    seq = month_count + 1
    code = f"{prefix}-{reference.year}-{seq:03d}"
    while code in taken:
        seq += 1
        code = f"{prefix}-{reference.year}-{seq:03d}"
    return code


def generate_plan_code(plan_date: date, existing_dates: Iterable[date], existing_codes: Iterable[str] = ()) -> str:
    """生成生产计划编号 PLAN-YYYY-NNN"""
    return _monthly_code("PLAN", plan_date, existing_dates, existing_codes)


def generate_order_code(order_date: date, existing_dates: Iterable[date], existing_codes: Iterable[str] = ()) -> str:
    """生成作业指示编号 WO-YYYY-NNN"""
    return _monthly_code("WO", order_date, existing_dates, existing_codes)


def blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def first_name(records: List, default: str = "") -> str:
    """取列表中第一条记录的名称"""
    return records[0].name if records else default
