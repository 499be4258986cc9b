"""
PATH: accounting/api/views/trial_balance.py

TRIAL BALANCE API VIEW (READ-ONLY)

- Permission-gated: requires accounting.view_journalentry
- An out-of-balance ledger is reported (totals.balanced=false), never hidden
"""

from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounting.api.params import parse_date_param
from accounting.services.trial_balance_service import TrialBalanceService


@extend_schema(
    tags=["accounting"],
    parameters=[
        OpenApiParameter(
            name="end_date",
            type=OpenApiTypes.DATE,
            location=OpenApiParameter.QUERY,
            required=False,
            description="Inclusive cutoff date (YYYY-MM-DD). Omit to include every posted entry.",
        ),
        OpenApiParameter(
            name="include_disabled",
            type=bool,
            location=OpenApiParameter.QUERY,
            required=False,
            description="Also list disabled accounts that carry activity.",
        ),
    ],
    responses={200: dict},
)
class TrialBalanceView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        if not request.user.has_perm("accounting.view_journalentry"):
            return Response(
                {"detail": "You do not have permission to view trial balance."},
                status=status.HTTP_403_FORBIDDEN,
            )

        end_date = parse_date_param(request, "end_date")
        include_disabled = (request.query_params.get("include_disabled") or "").strip().lower() in (
            "1",
            "true",
            "yes",
        )

        data = TrialBalanceService().generate(as_of=end_date, include_disabled=include_disabled)
        return Response(data, status=status.HTTP_200_OK)
