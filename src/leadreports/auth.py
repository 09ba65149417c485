"""Role lookup for the session user."""

from __future__ import annotations

import logging

from leadreports.backend.base import BackendBase, BackendError
from leadreports.models.domain import RowFilter, SessionUser

logger = logging.getLogger(__name__)

USER_ROLES_TABLE = "user_roles"
DEFAULT_ROLE = "editor"


class AuthorizationError(Exception):
    """Raised when the user cannot be resolved; callers redirect to login."""


def resolve_user(
    backend: BackendBase,
    user_id: str | None,
    email: str | None = None,
) -> SessionUser:
    """Resolve the session user and their role.

    Args:
        backend: Backend holding user_roles.
        user_id: Authenticated user ID, None when there is no session.
        email: Optional email passed through to the page.

    Returns:
        SessionUser with role, defaulting to "editor" when unset.

    Raises:
        AuthorizationError: No session, failed lookup, or no role row.
    """
    if not user_id:
        raise AuthorizationError("No active session")

    try:
        rows = backend.select_range(
            USER_ROLES_TABLE, "role", 0, 0, RowFilter("user_id", "eq", user_id)
        )
    except BackendError as e:
        logger.error(f"Error fetching role for user {user_id}: {e}")
        raise AuthorizationError(f"Role lookup failed for user {user_id}") from e

    if not rows:
        raise AuthorizationError(f"No role registered for user {user_id}")

    return SessionUser(user_id=user_id, role=rows[0].get("role") or DEFAULT_ROLE, email=email)
