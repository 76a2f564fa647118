"""REST API Lambda authorizer. Validates the Clerk session token from the Authorization header.

Requests without a token are let through anonymously; the services then refuse
anything that needs a signed-in user. A token that is present but invalid is denied.
"""

import asyncio
import logging
from typing import Any

from core.api import header
from core.auth import get_auth_provider
from core.errors import AuthenticationError

logger = logging.getLogger(__name__)

ANONYMOUS_PRINCIPAL = "anonymous"


def _bearer_token(event: dict[str, Any]) -> str | None:
    raw = event.get("authorizationToken") or header(event, "Authorization") or ""
    scheme, _, token = raw.partition(" ")
    if scheme.lower() == "bearer":
        return token.strip() or None
    return raw.strip() or None


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    # AuthProvider methods are async; asyncio.run() bridges them into this sync handler.
    token = _bearer_token(event)
    if token is None:
        return _allow_policy(event["methodArn"], ANONYMOUS_PRINCIPAL, {})

    try:
        auth_user = asyncio.run(get_auth_provider().verify_token(token))
    except AuthenticationError as e:
        logger.warning("Rejected token: %s", e.message)
        return _deny_policy(event["methodArn"])

    return _allow_policy(event["methodArn"], auth_user.user_id, {"userId": auth_user.user_id})


def _allow_policy(method_arn: str, principal_id: str, context: dict[str, str]) -> dict[str, Any]:
    policy: dict[str, Any] = {
        "principalId": principal_id,
        "policyDocument": {
            "Version": "2012-10-17",
            "Statement": [{"Action": "execute-api:Invoke", "Effect": "Allow", "Resource": method_arn}],
        },
    }
    if context:
        policy["context"] = context
    return policy


def _deny_policy(method_arn: str) -> dict[str, Any]:
    return {
        "principalId": "unauthorized",
        "policyDocument": {
            "Version": "2012-10-17",
            "Statement": [{"Action": "execute-api:Invoke", "Effect": "Deny", "Resource": method_arn}],
        },
    }
