"""Webhook URL resolution from AWS Secrets Manager."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

import boto3
from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)

# Error codes documented for GetSecretValue. All are treated as fatal
# misconfiguration; codes outside this set propagate the same way.
KNOWN_ERROR_CODES = frozenset({
    "DecryptionFailureException",
    "InternalServiceErrorException",
    "InvalidParameterException",
    "InvalidRequestException",
    "ResourceNotFoundException",
})


class SecretResolver(Protocol):
    async def resolve(self, secret_id: str) -> str: ...


class SecretsManagerResolver:
    """Reads a secret's text value via a boto3 Secrets Manager client."""

    def __init__(self, client: Any) -> None:
        self._client = client

    @classmethod
    def for_region(cls, region: str | None) -> SecretsManagerResolver:
        return cls(boto3.client("secretsmanager", region_name=region))

    async def resolve(self, secret_id: str) -> str:
        try:
            data = await asyncio.to_thread(self._client.get_secret_value, SecretId=secret_id)
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "Unknown")
            if code in KNOWN_ERROR_CODES:
                logger.warning("Secrets Manager Error: %s", code)
            else:
                logger.warning("Secrets Manager Error (unrecognized): %s", code)
            raise

        return decode_secret(data)


def decode_secret(data: dict[str, Any]) -> str:
    """Return the secret as text, whichever of the two fields is populated.

    boto3 has already base64-decoded SecretBinary into bytes.
    """
    if data.get("SecretString") is not None:
        return data["SecretString"]
    binary = data["SecretBinary"]
    if isinstance(binary, str):
        binary = binary.encode()
    return bytes(binary).decode("utf-8")
