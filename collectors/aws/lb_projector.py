# collectors/aws/lb_projector.py
# -*- coding: utf-8 -*-
from typing import Any, Dict, List, Optional, Set

from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from core.attribute_normalizer import normalize_attributes
from core.errors import ApiCallError, FieldAssignmentError
from core.models import LoadBalancerRecord, LoadBalancerScheme, SubnetMapping, lb_suffix_from_arn
from core.tags import IgnoreTagsConfig, TagSet, list_tags


def flatten_subnets(availability_zones: Optional[List[Dict[str, Any]]]) -> Set[str]:
    return {az["SubnetId"] for az in availability_zones or [] if az.get("SubnetId")}


def flatten_subnet_mappings(availability_zones: Optional[List[Dict[str, Any]]]) -> List[SubnetMapping]:
    mappings: List[SubnetMapping] = []
    for az in availability_zones or []:
        m = {
            "subnet_id": az.get("SubnetId") or "",
            "outpost_id": az.get("OutpostId") or "",
        }
        # 一个 AZ 有多个地址时以最后一个为准
        for addr in az.get("LoadBalancerAddresses") or []:
            m["allocation_id"] = addr.get("AllocationId") or ""
            m["private_ipv4_address"] = addr.get("PrivateIPv4Address") or ""
            m["ipv6_address"] = addr.get("IPv6Address") or ""
        mappings.append(SubnetMapping(**m))
    return mappings


def core_fields(lb: Dict[str, Any]) -> Dict[str, Any]:
    arn = lb.get("LoadBalancerArn") or ""
    return {
        "id": arn,
        "arn": arn,
        "arn_suffix": lb_suffix_from_arn(arn),
        "name": lb.get("LoadBalancerName") or "",
        "internal": lb.get("Scheme") == LoadBalancerScheme.internal.value,
        "security_groups": list(lb.get("SecurityGroups") or []),
        "vpc_id": lb.get("VpcId") or "",
        "zone_id": lb.get("CanonicalHostedZoneId") or "",
        "dns_name": lb.get("DNSName") or "",
        "ip_address_type": lb.get("IpAddressType") or "",
        "load_balancer_type": lb.get("Type") or "",
        "customer_owned_ipv4_pool": lb.get("CustomerOwnedIpv4Pool") or "",
    }


def build_record(lb: Dict[str, Any], tags: TagSet, attributes: List[Dict[str, Any]]) -> LoadBalancerRecord:
    """纯函数：同样的输入必得到同样的记录"""
    fields = core_fields(lb)
    azs = lb.get("AvailabilityZones")
    try:
        fields["subnets"] = flatten_subnets(azs)
    except (KeyError, TypeError, AttributeError) as e:
        raise FieldAssignmentError("subnets", e) from e
    try:
        fields["subnet_mapping"] = flatten_subnet_mappings(azs)
    except (ValidationError, TypeError, AttributeError) as e:
        raise FieldAssignmentError("subnet_mapping", e) from e
    fields["tags"] = tags.to_map()
    fields.update(normalize_attributes(attributes))

    try:
        return LoadBalancerRecord(**fields)
    except ValidationError as e:
        errs = e.errors()
        field = ".".join(str(p) for p in errs[0]["loc"]) if errs and errs[0].get("loc") else "record"
        raise FieldAssignmentError(field, e) from e


def project_load_balancer(
    elbv2_client,
    lb: Dict[str, Any],
    ignore_tags: Optional[IgnoreTagsConfig] = None,
) -> LoadBalancerRecord:
    arn = lb.get("LoadBalancerArn")

    # 最终标签再读一次；这里 not found 也算失败
    try:
        tags = list_tags(elbv2_client, arn).ignore_aws().ignore_config(ignore_tags)
    except (BotoCoreError, ClientError) as e:
        raise ApiCallError(f"listing tags for ({arn})", e) from e

    try:
        resp = elbv2_client.describe_load_balancer_attributes(LoadBalancerArn=arn)
    except (BotoCoreError, ClientError) as e:
        raise ApiCallError("retrieving LB Attributes", e) from e

    return build_record(lb, tags, resp.get("Attributes") or [])
