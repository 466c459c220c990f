# main.py
# -*- coding: utf-8 -*-
"""
lb_lookup
- 动态加载 collectors（基于 core.registry）
- 按 accounts.yaml 中的账户/区域组装上下文，解析唯一的 load balancer
- 输出 JSON 记录；失败时返回非零退出码，不输出任何部分结果
"""

import argparse
import importlib
import json
import os
import sys
from typing import Dict, List, Optional

from pydantic import ValidationError

from core.errors import LoadBalancerLookupError
from core.models import LookupCriteria, LoadBalancerRecord
from core.registry import LOOKUP_REGISTRY
from utils.config_loader import (
    build_context,
    find_account,
    load_accounts_config,
    load_ignore_tags_config,
)


# ---- 动态导入所有 collectors 下的模块，确保完成注册 ----
def import_all_collectors(base_dir: str = "collectors") -> None:
    root_dir = os.path.dirname(os.path.abspath(__file__))
    for root, _, files in os.walk(os.path.join(root_dir, base_dir)):
        for file in files:
            if file.endswith(".py") and file != "__init__.py":
                rel = os.path.relpath(os.path.join(root, file), root_dir)
                importlib.import_module(rel[:-3].replace(os.sep, "."))


def parse_tags(pairs: Optional[List[str]]) -> Dict[str, str]:
    tags: Dict[str, str] = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise ValueError(f"invalid tag {pair!r}, expected KEY=VALUE")
        k, v = pair.split("=", 1)
        tags[k] = v
    return tags


def run_lookup(criteria: LookupCriteria, lookup_name: str = "aws_lb",
               account_name: Optional[str] = None, region: Optional[str] = None,
               config_path: Optional[str] = None, client=None) -> LoadBalancerRecord:
    import_all_collectors()
    lookup_cls = LOOKUP_REGISTRY.get(lookup_name)
    if not lookup_cls:
        raise ValueError(f"unknown lookup: {lookup_name}")

    account = find_account(load_accounts_config(config_path), account_name)
    context = build_context(account, load_ignore_tags_config(config_path), region=region)
    return lookup_cls(context, client).lookup(criteria)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Look up exactly one load balancer")
    parser.add_argument("--arn", help="Load balancer ARN")
    parser.add_argument("--name", help="Load balancer name")
    parser.add_argument("--tag", action="append", metavar="KEY=VALUE", help="Tag that must match (repeatable)")
    parser.add_argument("--account", help="Account name in accounts.yaml (default: first)")
    parser.add_argument("--region", help="Region override")
    parser.add_argument("--config", help="Path to accounts.yaml")
    parser.add_argument("--lookup", default="aws_lb", choices=["aws_lb", "aws_alb"])
    args = parser.parse_args(argv)

    try:
        criteria = LookupCriteria(arn=args.arn, name=args.name, tags=parse_tags(args.tag))
        record = run_lookup(criteria, args.lookup, args.account, args.region, args.config)
    except (ValidationError, ValueError, OSError, LoadBalancerLookupError) as e:
        print(f"[!] lookup failed: {e}", file=sys.stderr)
        return 1

    print(json.dumps(record.to_output(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
