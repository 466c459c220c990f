#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
File    : core/models.py
Function: 定义 lookup 的输入条件 LookupCriteria 与输出记录 LoadBalancerRecord
Author  : Jimmy
Email   : devopjj@gmail.com
Created : 2025-08-05 , 23:53
Modified: 2025-09-14 , 21:10
Version: 1.1
"""
import enum
import re
from typing import Optional, Dict, Any, List, Set

from pydantic import BaseModel, ConfigDict, Field, field_validator

# 与 terraform validateArn 一致：region / account 段允许为空
ARN_RE = re.compile(r"^arn:[\w-]+:([a-zA-Z0-9\-])+:([a-z]{2}-(gov-)?[a-z]+-\d{1})?:(\d{12})?:(.*)$")
LB_SUFFIX_RE = re.compile(r"arn:.*:loadbalancer/(.*)")

# ---------- ENUM TYPES ----------

class LoadBalancerScheme(str, enum.Enum):
    internal = "internal"
    internet_facing = "internet-facing"


def lb_suffix_from_arn(arn: Optional[str]) -> str:
    """arn:aws:elasticloadbalancing:...:loadbalancer/app/web/50dc6c49 -> app/web/50dc6c49"""
    if not arn:
        return ""
    m = LB_SUFFIX_RE.search(arn)
    return m.group(1) if m else ""


# ---------- INPUT ----------

class LookupCriteria(BaseModel):
    arn: Optional[str] = None
    name: Optional[str] = None
    tags: Dict[str, str] = {}

    @field_validator("arn")
    @classmethod
    def _validate_arn(cls, v: Optional[str]) -> Optional[str]:
        if not v:
            return v
        if not ARN_RE.match(v):
            raise ValueError(f"{v!r} is an invalid ARN")
        return v


# ---------- OUTPUT ----------

class AccessLogConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    bucket: str = ""
    prefix: str = ""
    enabled: bool = False


class SubnetMapping(BaseModel):
    model_config = ConfigDict(frozen=True)

    subnet_id: str = ""
    outpost_id: str = ""
    allocation_id: str = ""
    private_ipv4_address: str = ""
    ipv6_address: str = ""


class LoadBalancerRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str                                   # 调用方后续读取用的句柄 = arn
    arn: str
    arn_suffix: str = ""
    name: str = ""
    internal: bool = False
    load_balancer_type: str = ""
    security_groups: Set[str] = set()
    subnets: Set[str] = set()
    subnet_mapping: List[SubnetMapping] = []
    access_logs: List[AccessLogConfig] = Field(default_factory=lambda: [AccessLogConfig()])
    enable_deletion_protection: bool = False
    enable_http2: bool = False
    enable_cross_zone_load_balancing: bool = False
    idle_timeout: int = 0
    drop_invalid_header_fields: bool = False
    vpc_id: str = ""
    zone_id: str = ""
    dns_name: str = ""
    ip_address_type: str = ""
    customer_owned_ipv4_pool: str = ""
    tags: Dict[str, str] = {}

    @field_validator("access_logs")
    @classmethod
    def _single_access_log(cls, v: List[AccessLogConfig]) -> List[AccessLogConfig]:
        if len(v) != 1:
            raise ValueError(f"access_logs must hold exactly one entry, got {len(v)}")
        return v

    def to_output(self) -> Dict[str, Any]:
        """转成可直接 json.dumps 的 dict（set 排序成 list，保证输出稳定）"""
        out = self.model_dump()
        out["security_groups"] = sorted(self.security_groups)
        out["subnets"] = sorted(self.subnets)
        return out
