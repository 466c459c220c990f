from typing import Dict, Type
from core.base_lookup import BaseLookup

LOOKUP_REGISTRY: Dict[str, Type[BaseLookup]] = {}

def register_lookup(*names: str):
    def decorator(cls):
        for name in names:
            LOOKUP_REGISTRY[name] = cls
        return cls
    return decorator
