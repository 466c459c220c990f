# utils/config_loader.py
import os
from typing import Any, Dict, List, Optional

import yaml

from core.context import LookupContext
from core.tags import IgnoreTagsConfig

DEFAULT_CONFIG_PATH = os.getenv("ACCOUNTS_CONFIG", "config/accounts.yaml")


def _load_yaml(path: Optional[str]) -> Dict[str, Any]:
    with open(path or DEFAULT_CONFIG_PATH, "r") as f:
        return yaml.safe_load(f) or {}

def load_accounts_config(path: Optional[str] = None) -> List[Dict[str, Any]]:
    return _load_yaml(path).get("accounts", [])

def load_ignore_tags_config(path: Optional[str] = None) -> IgnoreTagsConfig:
    raw = _load_yaml(path).get("ignore_tags") or {}
    return IgnoreTagsConfig(
        keys=raw.get("keys") or [],
        key_prefixes=raw.get("key_prefixes") or [],
    )

def build_context(account: Dict[str, Any], ignore_tags: Optional[IgnoreTagsConfig] = None,
                  region: Optional[str] = None) -> LookupContext:
    regions = account.get("regions") or []
    return LookupContext(
        provider=account.get("provider", "aws"),
        account_id=account.get("account_id"),
        region=region or account.get("default_region") or (regions[0] if regions else None),
        name=account.get("name"),
        profile=account.get("profile"),
        config=account,  # 将账户全部配置下发（密钥等）
        ignore_tags=ignore_tags,
    )

def find_account(accounts: List[Dict[str, Any]], name: Optional[str]) -> Dict[str, Any]:
    if not accounts:
        raise ValueError("no accounts configured")
    if name is None:
        return accounts[0]
    for acct in accounts:
        if acct.get("name") == name:
            return acct
    raise ValueError(f"account {name!r} not found in config")
