"""公共 Pydantic 基类

接口 JSON 使用 camelCase 字段名（productCode、routingId ...），
Python 侧统一使用 snake_case。
"""

from datetime import date
from typing import Annotated, Optional

from pydantic import BaseModel, BeforeValidator
from pydantic.alias_generators import to_camel


def _blank_to_none(value):
    # 前端日期输入框为空时会提交空字符串
    if isinstance(value, str) and not value.strip():
        return None
    return value


OptionalDate = Annotated[Optional[date], BeforeValidator(_blank_to_none)]


class CamelModel(BaseModel):
    """camelCase 别名基类，同时允许使用字段名赋值"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
