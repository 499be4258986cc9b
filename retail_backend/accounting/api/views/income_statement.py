"""
PATH: accounting/api/views/income_statement.py

INCOME STATEMENT API VIEW (READ-ONLY)

GET /api/accounting/reports/income-statement/?start_date=&end_date=
- start_date omitted -> from the first entry
- end_date omitted   -> up to the last entry (future-dated included)
"""

from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounting.api.params import parse_date_param
from accounting.services.income_statement_service import get_income_statement


class IncomeStatementView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["accounting"],
        parameters=[
            OpenApiParameter("start_date", OpenApiTypes.DATE, required=False),
            OpenApiParameter("end_date", OpenApiTypes.DATE, required=False),
        ],
        responses={200: dict},
    )
    def get(self, request):
        if not request.user.has_perm("accounting.view_journalentry"):
            return Response(
                {"detail": "You do not have permission to view financial reports."},
                status=status.HTTP_403_FORBIDDEN,
            )

        start_date = parse_date_param(request, "start_date")
        end_date = parse_date_param(request, "end_date")

        if start_date and end_date and start_date > end_date:
            return Response(
                {"detail": "start_date cannot be after end_date"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        data = get_income_statement(start_date=start_date, end_date=end_date)
        return Response(data, status=status.HTTP_200_OK)
