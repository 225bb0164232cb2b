"""业务异常定义

异常消息直接展示给用户（韩文），不提供机器可读的错误码。
"""


class MesError(Exception):
    """业务异常基类"""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(MesError):
    """必填项缺失、数量非法、编码重复、引用不存在等校验失败"""


class NotFoundError(MesError):
    """目标记录不存在"""

    status_code = 404
