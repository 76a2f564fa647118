"""Local mirror of identity-provider accounts, used to resolve invite emails."""

import logging

from core.auth import AuthUser
from core.db import Collection, DocumentStore
from core.models import User

logger = logging.getLogger(__name__)


def get_user(store: DocumentStore, user_id: str) -> User | None:
    row = store.get(Collection.USERS, user_id)
    return User.model_validate(row) if row else None


def find_user_by_email(store: DocumentStore, email: str) -> User | None:
    rows = store.query(Collection.USERS, "email", email.strip().lower())
    return User.model_validate(rows[0]) if rows else None


def sync_user(store: DocumentStore, auth_user: AuthUser) -> int:
    """Post sign-up / sign-in hook: refresh the mirror row, then claim pending invites."""
    from core.services.members import process_invites_for_user

    email = auth_user.email.strip().lower()
    # email is the users GSI key, which DynamoDB refuses as an empty string.
    store.put(Collection.USERS, User(id=auth_user.user_id, email=email or None, name=auth_user.name or None).to_item())

    if not email:
        return 0
    return process_invites_for_user(store, auth_user.user_id, email)
