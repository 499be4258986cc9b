# accounting/api/params.py

from __future__ import annotations

import datetime

from django.utils.dateparse import parse_date
from rest_framework.exceptions import ValidationError


def parse_date_param(request, name: str) -> datetime.date | None:
    """
    Optional YYYY-MM-DD query parameter.

    Missing/blank -> None. Garbage -> HTTP 400 (never silently ignored).
    """
    raw = (request.query_params.get(name) or "").strip()
    if not raw:
        return None

    try:
        value = parse_date(raw)
    except ValueError:
        value = None

    if value is None:
        raise ValidationError({name: f"Invalid {name} (expected YYYY-MM-DD)"})
    return value
