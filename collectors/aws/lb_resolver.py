# collectors/aws/lb_resolver.py
# -*- coding: utf-8 -*-
import os
from typing import Any, Dict, List, Optional, Tuple

from botocore.exceptions import BotoCoreError, ClientError
from tqdm import tqdm

from collectors.aws.lb_filter import build_describe_input
from core.errors import ApiCallError, CardinalityError
from core.models import LookupCriteria
from core.tags import IgnoreTagsConfig, TagSet, list_tags
from utils.logger import LoggerSetup

LB_NOT_FOUND = "LoadBalancerNotFound"
_SHOW_PROGRESS = os.getenv("PROGRESS", "1") != "0"  # 设 PROGRESS=0 可关闭进度条

logger = LoggerSetup(caller_file="aws_lb", quiet_mode=False).get_logger()


def is_not_found(err: ClientError) -> bool:
    return err.response.get("Error", {}).get("Code") == LB_NOT_FOUND


def describe_all_load_balancers(elbv2_client, criteria: LookupCriteria) -> List[Dict[str, Any]]:
    paginator = elbv2_client.get_paginator("describe_load_balancers")
    results: List[Dict[str, Any]] = []
    try:
        for page in paginator.paginate(**build_describe_input(criteria)):
            if not page:
                # 空页视为结果结束，已累积的保留
                break
            results.extend(page.get("LoadBalancers") or [])
    except (BotoCoreError, ClientError) as e:
        raise ApiCallError("retrieving LB", e) from e
    logger.info(f"[aws_lb] Found {len(results)} load balancers")
    return results


def filter_by_tags(
    elbv2_client,
    candidates: List[Dict[str, Any]],
    tags_to_match: TagSet,
    ignore_tags: Optional[IgnoreTagsConfig] = None,
) -> List[Dict[str, Any]]:
    matched: List[Dict[str, Any]] = []
    for lb in tqdm(candidates, desc="[aws_lb] Matching tags", disable=not _SHOW_PROGRESS):
        arn = lb.get("LoadBalancerArn")
        try:
            tags = list_tags(elbv2_client, arn)
        except ClientError as e:
            if is_not_found(e):
                # 刚被删除的 LB，直接跳过
                logger.debug(f"[aws_lb] {arn} disappeared while listing tags, skipped")
                continue
            raise ApiCallError(f"listing tags for ({arn})", e) from e
        except BotoCoreError as e:
            raise ApiCallError(f"listing tags for ({arn})", e) from e

        if tags.ignore_aws().ignore_config(ignore_tags).contains_all(tags_to_match):
            matched.append(lb)
    return matched


def resolve_load_balancer(
    elbv2_client,
    criteria: LookupCriteria,
    ignore_tags: Optional[IgnoreTagsConfig] = None,
) -> Tuple[Dict[str, Any], str]:
    """
    list（分页累积）-> 可选标签过滤 -> 唯一性校验。
    返回 (load balancer 原始 dict, arn)。
    """
    tags_to_match = TagSet(criteria.tags).ignore_aws().ignore_config(ignore_tags)

    results = describe_all_load_balancers(elbv2_client, criteria)
    if tags_to_match:
        results = filter_by_tags(elbv2_client, results, tags_to_match, ignore_tags)
        logger.info(f"[aws_lb] {len(results)} load balancers left after tag filter")

    if len(results) != 1:
        raise CardinalityError(len(results))

    lb = results[0]
    return lb, lb.get("LoadBalancerArn")
