"""
业务异常定义

服务层抛出，由 app.api.exceptions 中注册的处理器转换为HTTP响应。
"""

from typing import Any, Optional


class BusinessException(Exception):
    """业务异常基类"""

    status_code: int = 400

    def __init__(self, message: str, error: Optional[Any] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.error = error
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        body = {"message": self.message}
        if self.error is not None:
            body["error"] = self.error
        return body


class ValidationException(BusinessException):
    """请求参数缺失或格式错误"""
    status_code = 400


class UnauthorizedException(BusinessException):
    """未提供或无法验证身份凭证"""
    status_code = 401


class ForbiddenException(BusinessException):
    """无权操作该资源"""
    status_code = 403


class NotFoundException(BusinessException):
    """资源不存在"""
    status_code = 404


class AdapterException(BusinessException):
    """外部服务调用失败"""
    status_code = 500


class PaymentProviderException(AdapterException):
    """支付服务调用失败"""
