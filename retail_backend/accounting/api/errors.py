# accounting/api/errors.py

"""
PATH: accounting/api/errors.py

Domain error -> HTTP response.

Every body carries:
- "detail": human readable message
- "code":   stable machine code (AccountingServiceError.code)

Unbalanced entries additionally return both totals so the UI can show the
mismatch next to the line items.
"""

from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.response import Response

from accounting.services.exceptions import (
    AccountingServiceError,
    AccountInUse,
    AccountResolutionError,
    ImbalanceDetected,
    ImmutableEntry,
    JournalEntryCreationError,
    PostingFailed,
    Unbalanced,
)
from accounting.services.money import to_major_number

logger = logging.getLogger(__name__)

# first match wins, so subclasses go before their bases
STATUS_BY_ERROR = (
    (AccountResolutionError, status.HTTP_400_BAD_REQUEST),
    (JournalEntryCreationError, status.HTTP_400_BAD_REQUEST),
    (AccountInUse, status.HTTP_409_CONFLICT),
    (ImmutableEntry, status.HTTP_409_CONFLICT),
    (ImbalanceDetected, status.HTTP_409_CONFLICT),
    (PostingFailed, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def status_for(exc: AccountingServiceError) -> int:
    for error_cls, http_status in STATUS_BY_ERROR:
        if isinstance(exc, error_cls):
            return http_status
    return status.HTTP_400_BAD_REQUEST


def error_response(exc: AccountingServiceError) -> Response:
    body = {"detail": str(exc), "code": exc.code}

    if isinstance(exc, Unbalanced):
        body["total_debit"] = to_major_number(exc.total_debit)
        body["total_credit"] = to_major_number(exc.total_credit)

    http_status = status_for(exc)
    if http_status >= 500:
        logger.error("Accounting request failed: %s", exc)

    return Response(body, status=http_status)
