"""Reports API endpoint.

GET /api/reportes?canal={pymes|digitales} - Report page payload
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header, Query
from fastapi.responses import RedirectResponse

from leadreports.api.app import get_backend, get_settings
from leadreports.auth import AuthorizationError, resolve_user
from leadreports.backend.base import BackendBase
from leadreports.config import Settings
from leadreports.models.types import ReportPage
from leadreports.reports.loader import load_report

logger = logging.getLogger(__name__)

router = APIRouter()

LOGIN_PATH = "/"


@router.get("/reportes", response_model=ReportPage)
def get_reports(
    canal: str | None = Query(default=None),
    x_user_id: str | None = Header(default=None),
    x_user_email: str | None = Header(default=None),
    backend: BackendBase = Depends(get_backend),
    settings: Settings = Depends(get_settings),
):
    """Get the report page for a channel.

    Args:
        canal: Channel selector, "pymes" when omitted.
        x_user_id: Session user ID header.
        x_user_email: Optional session user email header.
        backend: Row backend (injected).
        settings: App settings (injected).

    Returns:
        ReportPage, or a redirect to login when the user cannot be resolved.
    """
    try:
        user = resolve_user(backend, x_user_id, x_user_email)
    except AuthorizationError as e:
        logger.warning(f"Redirecting to login: {e}")
        return RedirectResponse(url=LOGIN_PATH, status_code=303)

    return load_report(backend, user, canal, settings)
