"""Agent directory: maps assignment emails to display names."""

from __future__ import annotations

import logging
from typing import Any

from leadreports.backend.base import BackendBase
from leadreports.models.domain import FetchResult, Row
from leadreports.pagination.fetcher import fetch_all_records

logger = logging.getLogger(__name__)

AGENT_DIRECTORY_TABLE = "agent_directory"


def _normalize(email: Any) -> str:
    return str(email).strip().lower()


def build_email_to_name_mapping(rows: list[Row]) -> dict[str, str]:
    """Build the email -> display name mapping from directory rows.

    Entries missing either field are skipped. Keys are lower-cased and
    non-string values are converted to strings.
    """
    mapping: dict[str, str] = {}
    for row in rows:
        email = row.get("email")
        name = row.get("name")
        if email in (None, "") or name in (None, ""):
            continue
        mapping[_normalize(email)] = str(name)
    return mapping


def get_email_to_name_mapping(
    backend: BackendBase, **kwargs
) -> tuple[dict[str, str], FetchResult]:
    """Load the email -> display name mapping.

    Returns:
        Tuple of (mapping, fetch result) so callers can tell whether the
        directory was read completely.
    """
    result = fetch_all_records(backend, AGENT_DIRECTORY_TABLE, "email, name", **kwargs)
    mapping = build_email_to_name_mapping(result.rows)

    logger.info(f"Loaded {len(mapping)} agent names")
    return mapping, result


def convert_email_to_name(email: Any, mapping: dict[str, str]) -> str | None:
    """Resolve an assignment email to a display name.

    Unmapped emails are returned unchanged (as strings); empty input
    yields None.
    """
    if email is None or email == "":
        return None
    return mapping.get(_normalize(email), str(email))
