"""
通用数据模型 - 驼峰命名基类与统一响应结构
"""

from typing import Generic, Optional, TypeVar
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


T = TypeVar("T")

# 金额类字段(最小货币单位)的上限，与数据表Integer列一致
MAX_MINOR_UNITS = 2_147_483_647


class CamelModel(BaseModel):
    """对外JSON字段使用驼峰命名，内部属性使用下划线命名"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """统一响应结构"""

    message: str
    data: Optional[T] = None
