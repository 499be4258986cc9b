"""
PATH: accounting/api/views/initialize.py

CHART INITIALIZATION

POST /api/accounting/initialize/
Idempotent seed of account types, sub-types and the default retail accounts.

Security:
- Requires accounting.add_account
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounting.services.chart_seed import initialize_default_chart


class InitializeChartView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["accounting"], request=None, responses={200: dict, 201: dict})
    def post(self, request):
        if not request.user.has_perm("accounting.add_account"):
            return Response(
                {"detail": "You do not have permission to initialize the chart of accounts."},
                status=status.HTTP_403_FORBIDDEN,
            )

        created = initialize_default_chart()

        if any(created.values()):
            return Response(
                {"message": "Chart of accounts initialized", "created": created},
                status=status.HTTP_201_CREATED,
            )
        return Response(
            {"message": "Chart of accounts already initialized", "created": created},
            status=status.HTTP_200_OK,
        )
