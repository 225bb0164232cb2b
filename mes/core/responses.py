"""接口响应封装

所有接口返回 {success, data?, message?} 结构；意外错误返回 {success: false, error}。
消息为直接展示给用户的韩文文本。
"""

from typing import Any, Optional


def success_response(data: Any = None, message: Optional[str] = None, **extra) -> dict:
    body = {"success": True}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    body.update(extra)
    return body


def error_response(message: str) -> dict:
    return {"success": False, "message": message}


def failure_response(error: str) -> dict:
    return {"success": False, "error": error}


def dump(schema, records) -> list:
    """ORM 对象列表转为 camelCase JSON"""
    return [schema.model_validate(r).to_json() for r in records]
