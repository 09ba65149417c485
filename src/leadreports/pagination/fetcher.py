"""Paginated fetcher.

Reads every row matching a query by issuing sequential bounded range
requests, working around the backend's per-request row cap.

Stop conditions:
- short page (fewer than page_size rows): last page reached
- empty page
- BackendError: logged, rows so far returned with complete=False
- max_pages reached: logged, rows so far returned with complete=False
"""

from __future__ import annotations

import logging

from leadreports.backend.base import BackendBase, BackendError
from leadreports.config import DEFAULT_MAX_PAGES, DEFAULT_PAGE_SIZE
from leadreports.models.domain import FetchResult, RowFilter

logger = logging.getLogger(__name__)

AGENT_FIELDS = "assigned_user, created_at, source, tags, name, phone_number"
TAG_FIELDS = "tags, assigned_user, created_at, source, name, phone_number"
LEAD_SOURCE_FIELDS = (
    'name, phone_number, created_at, "whatsapp cloud ad source url", '
    '"whatsapp cloud ad source id"'
)
REPORT_TAGS_TABLE = "report_tags_collection"


def fetch_all_records(
    backend: BackendBase,
    table: str,
    fields: str = "*",
    row_filter: RowFilter | None = None,
    page_size: int = DEFAULT_PAGE_SIZE,
    max_pages: int = DEFAULT_MAX_PAGES,
) -> FetchResult:
    """Fetch all matching rows of a table, one page window at a time.

    Page n covers the inclusive window [n * page_size, (n + 1) * page_size - 1].
    Pages are requested strictly in order since each request depends on
    the previous page's length.

    Args:
        backend: Backend to query.
        table: Collection name.
        fields: Field-selection string.
        row_filter: Optional filter applied to every page.
        page_size: Rows requested per page.
        max_pages: Upper bound on pages requested.

    Returns:
        FetchResult with rows in fetch order.
    """
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")

    logger.info(f"Fetching all records from {table}...")
    result = FetchResult(table=table)
    page = 0

    while True:
        if page >= max_pages:
            logger.warning(
                f"Stopped fetching {table} after {max_pages} full pages; "
                f"result may be incomplete ({len(result.rows)} rows)"
            )
            result.complete = False
            break

        start = page * page_size
        end = (page + 1) * page_size - 1

        try:
            records = backend.select_range(table, fields, start, end, row_filter)
        except BackendError as e:
            logger.error(f"Error fetching {table} page {page}: {e}")
            result.complete = False
            result.error = str(e)
            break

        if not records:
            break

        result.rows.extend(records)
        page += 1
        result.pages = page
        logger.info(
            f"Page {page}: {len(records)} records fetched. Total so far: {len(result.rows)}"
        )

        if len(records) < page_size:
            break

    logger.info(f"Total records fetched from {table}: {len(result.rows)}")
    return result


def get_all_agent_data(backend: BackendBase, table: str, **kwargs) -> FetchResult:
    """Fetch agent assignment rows of a channel table."""
    return fetch_all_records(backend, table, AGENT_FIELDS, **kwargs)


def get_all_tags_data(backend: BackendBase, table: str, **kwargs) -> FetchResult:
    """Fetch tag rows of a channel table."""
    return fetch_all_records(backend, table, TAG_FIELDS, **kwargs)


def get_all_leads(backend: BackendBase, table: str, **kwargs) -> FetchResult:
    """Fetch every lead with its attribution fields, unfiltered."""
    return fetch_all_records(backend, table, LEAD_SOURCE_FIELDS, **kwargs)


def get_report_tag_names(backend: BackendBase, **kwargs) -> FetchResult:
    """Fetch the tag names tracked by the effectiveness report."""
    return fetch_all_records(backend, REPORT_TAGS_TABLE, "tag_name", **kwargs)
