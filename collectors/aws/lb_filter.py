# collectors/aws/lb_filter.py
from typing import Any, Dict

from core.models import LookupCriteria


def build_describe_input(criteria: LookupCriteria) -> Dict[str, Any]:
    """arn 优先于 name；两者都没有则全量列出，靠唯一性校验兜底"""
    if criteria.arn:
        return {"LoadBalancerArns": [criteria.arn]}
    if criteria.name:
        return {"Names": [criteria.name]}
    return {}
