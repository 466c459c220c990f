# core/errors.py
# -*- coding: utf-8 -*-
from typing import Optional


class LoadBalancerLookupError(RuntimeError):
    """lookup 失败的统一基类；失败时不返回任何部分结果"""


class ApiCallError(LoadBalancerLookupError):
    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        self.operation = operation
        self.cause = cause
        super().__init__(f"error {operation}: {cause}")


class CardinalityError(LoadBalancerLookupError):
    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Search returned {count} results, please revise so only one is returned")


class AttributeParseError(LoadBalancerLookupError, ValueError):
    def __init__(self, key: str, value: Optional[str], cause: Optional[BaseException] = None):
        self.key = key
        self.value = value
        super().__init__(f"error parsing ALB timeout: {key}={value!r}: {cause}")


class FieldAssignmentError(LoadBalancerLookupError):
    def __init__(self, field: str, cause: Optional[BaseException] = None):
        self.field = field
        super().__init__(f"error setting {field}: {cause}")
