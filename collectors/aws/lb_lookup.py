# collectors/aws/lb_lookup.py
# -*- coding: utf-8 -*-
from core.base_lookup import BaseLookup
from core.models import LookupCriteria, LoadBalancerRecord
from core.registry import register_lookup
from collectors.aws.lb_resolver import resolve_load_balancer
from collectors.aws.lb_projector import project_load_balancer
from utils.logger import LoggerSetup

logger = LoggerSetup(caller_file="aws_lb", quiet_mode=False).get_logger()


@register_lookup("aws_lb", "aws_alb")
class AWSLoadBalancerLookup(BaseLookup):
    def __init__(self, context, elbv2_client=None):
        super().__init__(context)
        self._client = elbv2_client

    @property
    def client(self):
        if self._client is None:
            self._client = self.context.get_client("elbv2")
        return self._client

    def lookup(self, criteria: LookupCriteria) -> LoadBalancerRecord:
        logger.info(f"[aws_lb] Lookup in {self.context!r}: "
                    f"arn={criteria.arn or '-'} name={criteria.name or '-'} tags={criteria.tags or {}}")
        lb, arn = resolve_load_balancer(self.client, criteria, self.context.ignore_tags)
        logger.info(f"[aws_lb] Resolved {arn}")
        record = project_load_balancer(self.client, lb, self.context.ignore_tags)
        logger.info(f"[aws_lb] Projected {record.name} ({record.load_balancer_type}, {len(record.subnets)} subnets)")
        return record
