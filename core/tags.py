# core/tags.py
# -*- coding: utf-8 -*-
from typing import Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel

AWS_RESERVED_PREFIX = "aws:"


class IgnoreTagsConfig(BaseModel):
    """忽略策略：来自 accounts.yaml 的 ignore_tags 段，显式传给 resolver / projector"""
    keys: List[str] = []
    key_prefixes: List[str] = []

    def ignores(self, key: str) -> bool:
        if key in self.keys:
            return True
        return any(key.startswith(p) for p in self.key_prefixes)


class TagSet(dict):
    """key -> value 的标签集合，顺序无关"""

    @classmethod
    def from_api(cls, tag_list: Optional[Iterable[Mapping[str, str]]]) -> "TagSet":
        # elbv2 返回 [{"Key": .., "Value": ..}]，Value 可能缺省
        return cls({t["Key"]: t.get("Value", "") for t in tag_list or []})

    def contains_all(self, other: Mapping[str, str]) -> bool:
        for k, v in other.items():
            if k not in self or self[k] != v:
                return False
        return True

    def ignore_aws(self) -> "TagSet":
        return TagSet({k: v for k, v in self.items() if not k.startswith(AWS_RESERVED_PREFIX)})

    def ignore_config(self, config: Optional[IgnoreTagsConfig]) -> "TagSet":
        if config is None:
            return TagSet(self)
        return TagSet({k: v for k, v in self.items() if not config.ignores(k)})

    def to_map(self) -> Dict[str, str]:
        return dict(self)


def list_tags(elbv2_client, arn: str) -> TagSet:
    """
    读取单个 LB 的标签。
    botocore 的 ClientError（含 LoadBalancerNotFound）原样抛出，由调用方决定怎么处理。
    """
    resp = elbv2_client.describe_tags(ResourceArns=[arn])
    for desc in resp.get("TagDescriptions", []):
        if desc.get("ResourceArn") == arn:
            return TagSet.from_api(desc.get("Tags"))
    return TagSet()
