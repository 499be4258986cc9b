# PATH: accounting/api/views/balance_sheet.py

"""
PATH: accounting/api/views/balance_sheet.py

BALANCE SHEET API VIEW

Read-only endpoint exposing the balance sheet snapshot.
entry_date timeline enforced by the service.

- Permission-gated: requires accounting.view_journalentry
- "balanced" is always present; an imbalance is shown, not raised
"""

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounting.api.params import parse_date_param
from accounting.services.balance_sheet_service import generate_balance_sheet


class BalanceSheetView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["accounting"],
        parameters=[
            OpenApiParameter(
                name="end_date",
                type=OpenApiTypes.DATE,
                required=False,
                description="Optional cutoff date (YYYY-MM-DD), inclusive. Omit to include every posted entry.",
            ),
        ],
        responses={200: dict},
    )
    def get(self, request):
        if not request.user.has_perm("accounting.view_journalentry"):
            return Response(
                {"detail": "You do not have permission to view financial reports."},
                status=status.HTTP_403_FORBIDDEN,
            )

        end_date = parse_date_param(request, "end_date")

        return Response(
            generate_balance_sheet(as_of_date=end_date),
            status=status.HTTP_200_OK,
        )
