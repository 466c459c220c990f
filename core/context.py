# core/context.py
from typing import Optional

from core.tags import IgnoreTagsConfig


class LookupContext:
    def __init__(self, provider: str, account_id: str = None, region: str = None,
                 name: str = None, profile: str = None, config: dict = None,
                 ignore_tags: Optional[IgnoreTagsConfig] = None):
        """单个账户 + 区域的 lookup 上下文，保存凭据信息与标签忽略策略"""
        self.provider = provider
        self.account_id = account_id or ""    # 云账号唯一ID，如AWS账号ID等
        self.name = name or ""               # 云账户别名/名称
        self.region = region or ""           # 区域信息
        self.profile = profile or None       # AWS本地凭据配置名称（如果有）
        self.config = config or {}           # 其它配置，例如密钥等
        self.ignore_tags = ignore_tags or IgnoreTagsConfig()
        self._session = None

    def get_boto3_session(self):
        import boto3
        if self._session is not None:
            return self._session
        # 根据配置优先使用AWS profile，其次使用明文密钥
        if self.profile:
            self._session = boto3.Session(profile_name=self.profile, region_name=self.region or None)
        else:
            self._session = boto3.Session(
                aws_access_key_id=self.config.get("aws_access_key_id"),
                aws_secret_access_key=self.config.get("aws_secret_access_key"),
                region_name=self.region or None,
            )
        return self._session

    def get_client(self, service: str):
        return self.get_boto3_session().client(service)

    def __repr__(self):
        return f"<Context {self.provider}:{self.account_id}@{self.region or 'N/A'}>"
