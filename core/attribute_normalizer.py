# core/attribute_normalizer.py
# -*- coding: utf-8 -*-
"""
把 describe_load_balancer_attributes 返回的 [{"Key":..,"Value":..}] 归一化为记录字段。

新增属性只需要往 LB_ATTRIBUTES / ACCESS_LOG_ATTRIBUTES 里登记一行。
"""
import re
from typing import Any, Dict, Callable, Iterable, Mapping, Optional, Tuple

from core.errors import AttributeParseError
from core.models import AccessLogConfig

TRUE_TOKEN = "true"
INT_RE = re.compile(r"[+-]?[0-9]+")


def _as_bool(key: str, value: Optional[str]) -> bool:
    return value == TRUE_TOKEN

def _as_str(key: str, value: Optional[str]) -> str:
    return value or ""

def _as_int(key: str, value: Optional[str]) -> int:
    # 与 strconv.Atoi 一致：不接受空白和下划线分隔
    if value is None or not INT_RE.fullmatch(value):
        raise AttributeParseError(key, value, ValueError("invalid syntax"))
    return int(value)


# ---------- 属性词表：attribute key -> (record 字段, 转换函数) ----------
LB_ATTRIBUTES: Dict[str, Tuple[str, Callable[[str, Optional[str]], Any]]] = {
    "idle_timeout.timeout_seconds": ("idle_timeout", _as_int),
    "routing.http.drop_invalid_header_fields.enabled": ("drop_invalid_header_fields", _as_bool),
    "deletion_protection.enabled": ("enable_deletion_protection", _as_bool),
    "routing.http2.enabled": ("enable_http2", _as_bool),
    "load_balancing.cross_zone.enabled": ("enable_cross_zone_load_balancing", _as_bool),
}

# access_logs.* 合并成一条 AccessLogConfig
ACCESS_LOG_ATTRIBUTES: Dict[str, Tuple[str, Callable[[str, Optional[str]], Any]]] = {
    "access_logs.s3.enabled": ("enabled", _as_bool),
    "access_logs.s3.bucket": ("bucket", _as_str),
    "access_logs.s3.prefix": ("prefix", _as_str),
}


def normalize_attributes(attributes: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    返回可直接喂给 LoadBalancerRecord 的字段：
      access_logs（单元素 list）+ LB_ATTRIBUTES 中出现过的字段。
    未登记的 key 忽略；未出现的字段交给 record 默认值。
    """
    access_log: Dict[str, Any] = AccessLogConfig().model_dump()
    fields: Dict[str, Any] = {}

    for attr in attributes or []:
        key = attr.get("Key")
        value = attr.get("Value")
        if key in ACCESS_LOG_ATTRIBUTES:
            sub, conv = ACCESS_LOG_ATTRIBUTES[key]
            access_log[sub] = conv(key, value)
        elif key in LB_ATTRIBUTES:
            field, conv = LB_ATTRIBUTES[key]
            fields[field] = conv(key, value)

    fields["access_logs"] = [AccessLogConfig(**access_log)]
    return fields
