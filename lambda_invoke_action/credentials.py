"""credentials.py — Credential resolution for the invocation run.

Either the step's raw keys are used as-is, or they authenticate a single STS
AssumeRole exchange whose temporary credentials are used instead.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from botocore.exceptions import BotoCoreError, ClientError

from .aws_clients import CredentialSet, get_sts_client
from .config import (
    ASSUME_ROLE_DURATION_SECONDS,
    INPUT_ACCESS_KEY_ID,
    INPUT_ASSUMED_ROLE_ARN,
    INPUT_REGION,
    INPUT_SECRET_ACCESS_KEY,
    INPUT_SESSION_TOKEN,
    ROLE_SESSION_NAME,
)
from .errors import AuthExchangeError
from .inputs import InputReader

__all__ = [
    "CredentialSet",
    "assume_role_credentials",
    "direct_credentials",
    "resolve_credentials",
]

logger = logging.getLogger(__name__)

StsClientFactory = Callable[..., Any]


def direct_credentials(reader: InputReader) -> CredentialSet:
    return CredentialSet(
        access_key_id=reader.get(INPUT_ACCESS_KEY_ID),
        secret_access_key=reader.get(INPUT_SECRET_ACCESS_KEY),
        session_token=reader.get(INPUT_SESSION_TOKEN),
    )


def assume_role_credentials(
    reader: InputReader,
    role_arn: str,
    sts_client_factory: Optional[StsClientFactory] = None,
) -> CredentialSet:
    """Exchange the step's base keys for temporary credentials on ``role_arn``.

    The session token input is not used for the exchange itself.
    """
    factory = sts_client_factory or get_sts_client
    sts = factory(
        reader.get(INPUT_ACCESS_KEY_ID),
        reader.get(INPUT_SECRET_ACCESS_KEY),
        reader.optional(INPUT_REGION),
    )
    logger.info("Assuming role %s (session %s, %ss)", role_arn, ROLE_SESSION_NAME, ASSUME_ROLE_DURATION_SECONDS)
    try:
        response = sts.assume_role(
            RoleArn=role_arn,
            RoleSessionName=ROLE_SESSION_NAME,
            DurationSeconds=ASSUME_ROLE_DURATION_SECONDS,
        )
    except (ClientError, BotoCoreError) as exc:
        raise AuthExchangeError(str(exc)) from exc

    creds = (response or {}).get("Credentials") or {}
    if not creds.get("AccessKeyId") or not creds.get("SecretAccessKey"):
        raise AuthExchangeError(f"AssumeRole for {role_arn} returned no credentials")
    return CredentialSet(
        access_key_id=str(creds["AccessKeyId"]),
        secret_access_key=str(creds["SecretAccessKey"]),
        session_token=str(creds.get("SessionToken") or ""),
    )


def resolve_credentials(
    reader: InputReader,
    sts_client_factory: Optional[StsClientFactory] = None,
    writer: Any = None,
) -> CredentialSet:
    """Return the credentials the Lambda client must use for this run.

    Nothing is validated here: with no inputs at all the result holds empty
    strings and the Invoke call is left to fail authentication.
    """
    role_arn = reader.get(INPUT_ASSUMED_ROLE_ARN)
    if not role_arn:
        logger.debug("No %s supplied; using direct credentials", INPUT_ASSUMED_ROLE_ARN)
        return direct_credentials(reader)

    credentials = assume_role_credentials(reader, role_arn, sts_client_factory)
    if writer is not None:
        writer.add_mask(credentials.secret_access_key)
        writer.add_mask(credentials.session_token or "")
    return credentials
