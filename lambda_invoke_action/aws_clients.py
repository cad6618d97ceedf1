"""aws_clients.py — Client settings and boto3 client factories.

Credentials and resilience options travel in an immutable ``ClientSettings``
value and are applied to a client built for this call only. Nothing is written
to boto3's default session.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config

from .config import API_VERSION, DEFAULT_STS_REGION

__all__ = [
    "ClientSettings",
    "CredentialSet",
    "ResilienceConfig",
    "botocore_config",
    "get_lambda_client",
    "get_sts_client",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CredentialSet:
    access_key_id: str
    secret_access_key: str
    session_token: Optional[str] = None

    def client_kwargs(self) -> Dict[str, Any]:
        # An empty session token is valid for long-lived keys; boto3 wants None.
        return {
            "aws_access_key_id": self.access_key_id,
            "aws_secret_access_key": self.secret_access_key,
            "aws_session_token": self.session_token or None,
        }

    def __repr__(self) -> str:
        token = "'***'" if self.session_token else "None"
        return f"CredentialSet(access_key_id={self.access_key_id!r}, secret_access_key='***', session_token={token})"


@dataclass(frozen=True)
class ResilienceConfig:
    timeout_millis: Optional[int] = None
    max_retries: Optional[int] = None


@dataclass(frozen=True)
class ClientSettings:
    credentials: CredentialSet
    region: Optional[str] = None
    resilience: ResilienceConfig = field(default_factory=ResilienceConfig)
    api_version: str = API_VERSION


def botocore_config(resilience: ResilienceConfig) -> Config:
    """Translate the step's resilience options into a botocore Config.

    Unset options are left out so botocore keeps its own defaults. A timeout
    of 0 means the call never times out.
    """
    options: Dict[str, Any] = {}
    if resilience.timeout_millis is not None:
        # 0 disables the socket timeout; urllib3 takes None for that.
        seconds = resilience.timeout_millis / 1000.0 if resilience.timeout_millis else None
        options["connect_timeout"] = seconds
        options["read_timeout"] = seconds
    if resilience.max_retries is not None:
        options["retries"] = {"max_attempts": resilience.max_retries, "mode": "standard"}
    return Config(**options)


def get_lambda_client(settings: ClientSettings):
    """Build a Lambda client scoped to ``settings``."""
    session = boto3.session.Session()
    return session.client(
        "lambda",
        region_name=settings.region or None,
        api_version=settings.api_version,
        config=botocore_config(settings.resilience),
        **settings.credentials.client_kwargs(),
    )


def get_sts_client(access_key_id: str, secret_access_key: str, region: Optional[str] = None):
    """Build an STS client authenticated with the caller's base keys."""
    session = boto3.session.Session()
    return session.client(
        "sts",
        region_name=region or DEFAULT_STS_REGION,
        aws_access_key_id=access_key_id,
        aws_secret_access_key=secret_access_key,
    )
