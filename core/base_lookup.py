from abc import ABC, abstractmethod

from core.context import LookupContext
from core.models import LookupCriteria, LoadBalancerRecord


class BaseLookup(ABC):
    def __init__(self, context: LookupContext):
        self.context = context

    @abstractmethod
    def lookup(self, criteria: LookupCriteria) -> LoadBalancerRecord:
        """按条件解析出唯一资源并投影为记录；找不到或多于一个都要抛错"""
        ...
