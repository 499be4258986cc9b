# PATH: accounting/api/view.py

"""
PATH: accounting/api/view.py

ACCOUNTING API VIEWSETS

- Chart of accounts: full CRUD, but DELETE is refused (409) once an account
  has ledger history. Disable it instead (PATCH is_enabled=false).
- Journal entries: list / retrieve / create / reverse.
  Posted entries are immutable: DELETE always answers 409.
- Ledger lines: read-only audit view.

Security rules (Django model permissions, no role hardcoding):
- accounts:        accounting.view/add/change/delete_account
- journal reads:   accounting.view_journalentry
- post / reverse:  accounting.add_journalentry
- delete attempt:  accounting.delete_journalentry (then refused anyway)

Filtering (django-filter, see accounting/api/filters.py):
    /api/accounting/accounts/?type_id=1&sub_type_id=3&is_enabled=true
    /api/accounting/journal-entries/?start_date=2026-01-01&end_date=2026-01-31
    /api/accounting/ledger-lines/?account_id=28
"""

from __future__ import annotations

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import Prefetch
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import mixins, serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounting.api.errors import error_response
from accounting.api.filters import (
    AccountFilter,
    AccountSubTypeFilter,
    JournalEntryFilter,
    JournalLineFilter,
)
from accounting.api.params import parse_date_param
from accounting.api.permissions import HasAccountingPermission
from accounting.api.serializers import (
    AccountBalanceSerializer,
    AccountSerializer,
    AccountSubTypeSerializer,
    AccountTypeSerializer,
    JournalEntryCreateSerializer,
    JournalEntryDetailSerializer,
    JournalEntryReverseSerializer,
    JournalEntrySerializer,
    JournalLineSerializer,
)
from accounting.models.account import Account
from accounting.models.account_type import AccountSubType, AccountType
from accounting.models.journal import JournalEntry
from accounting.models.journal_line import JournalLine
from accounting.services.account_registry import delete_account
from accounting.services.balance_service import get_account_balance
from accounting.services.exceptions import AccountingServiceError
from accounting.services.journal_entry_service import (
    create_journal_entry,
    delete_journal_entry,
    reverse_journal_entry,
)
from accounting.services.money import to_minor_int

VIEW_ACCOUNT = "accounting.view_account"
VIEW_JOURNAL = "accounting.view_journalentry"
POST_JOURNAL = "accounting.add_journalentry"


def _as_drf_validation_error(exc: DjangoValidationError) -> serializers.ValidationError:
    if hasattr(exc, "message_dict"):
        return serializers.ValidationError(exc.message_dict)
    return serializers.ValidationError(exc.messages)


# ============================================================
# CHART OF ACCOUNTS
# ============================================================


@extend_schema(tags=["accounting"])
class AccountTypeViewSet(viewsets.ReadOnlyModelViewSet):
    permission_classes = [IsAuthenticated, HasAccountingPermission]
    required_perms = {"*": VIEW_ACCOUNT}
    serializer_class = AccountTypeSerializer
    pagination_class = None
    queryset = AccountType.objects.order_by("id")


@extend_schema(tags=["accounting"])
class AccountSubTypeViewSet(viewsets.ReadOnlyModelViewSet):
    permission_classes = [IsAuthenticated, HasAccountingPermission]
    required_perms = {"*": VIEW_ACCOUNT}
    serializer_class = AccountSubTypeSerializer
    filterset_class = AccountSubTypeFilter
    pagination_class = None
    queryset = AccountSubType.objects.select_related("account_type").order_by(
        "account_type_id", "name"
    )


@extend_schema(tags=["accounting"])
class AccountViewSet(viewsets.ModelViewSet):
    """
    Chart of accounts, ordered by code.
    """

    permission_classes = [IsAuthenticated, HasAccountingPermission]
    required_perms = {
        "list": VIEW_ACCOUNT,
        "retrieve": VIEW_ACCOUNT,
        "balance": VIEW_ACCOUNT,
        "create": "accounting.add_account",
        "update": "accounting.change_account",
        "partial_update": "accounting.change_account",
        "destroy": "accounting.delete_account",
    }
    serializer_class = AccountSerializer
    filterset_class = AccountFilter
    queryset = Account.objects.select_related("account_type", "sub_type", "parent").order_by(
        "code"
    )

    def perform_create(self, serializer):
        try:
            serializer.save()
        except DjangoValidationError as exc:
            raise _as_drf_validation_error(exc) from exc

    def perform_update(self, serializer):
        try:
            serializer.save()
        except DjangoValidationError as exc:
            raise _as_drf_validation_error(exc) from exc

    def destroy(self, request, *args, **kwargs):
        account = self.get_object()
        try:
            delete_account(account)
        except AccountingServiceError as exc:
            return error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        parameters=[
            OpenApiParameter(
                name="end_date",
                type=OpenApiTypes.DATE,
                required=False,
                description="Balance as of this date (inclusive). Omit for the running balance.",
            ),
        ],
        responses={200: AccountBalanceSerializer},
    )
    @action(detail=True, methods=["get"], url_path="balance")
    def balance(self, request, pk=None):
        account = self.get_object()
        as_of = parse_date_param(request, "end_date")

        balance = get_account_balance(account, as_of=as_of)

        data = AccountBalanceSerializer(
            {
                "account_id": account.id,
                "code": account.code,
                "name": account.name,
                "normal_balance": account.normal_balance,
                "as_of": as_of,
                "balance": balance,
                "balance_minor": to_minor_int(balance),
            }
        ).data
        return Response(data, status=status.HTTP_200_OK)


# ============================================================
# JOURNAL ENTRIES
# ============================================================


@extend_schema(tags=["accounting"])
class JournalEntryViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Posted journal entries, newest first.

    POST creates through the journal validator + poster (never via the ORM).
    """

    permission_classes = [IsAuthenticated, HasAccountingPermission]
    required_perms = {
        "list": VIEW_JOURNAL,
        "retrieve": VIEW_JOURNAL,
        "create": POST_JOURNAL,
        "reverse": POST_JOURNAL,
        "destroy": "accounting.delete_journalentry",
    }
    filterset_class = JournalEntryFilter
    queryset = JournalEntry.objects.select_related("reverses", "reversed_by").order_by(
        "-entry_date", "-journal_number"
    )

    def get_queryset(self):
        qs = super().get_queryset()
        if self.action == "retrieve":
            qs = qs.prefetch_related(
                Prefetch(
                    "lines",
                    queryset=JournalLine.objects.select_related("account").order_by("line_no"),
                )
            )
        return qs

    def get_serializer_class(self):
        if self.action == "retrieve":
            return JournalEntryDetailSerializer
        if self.action == "create":
            return JournalEntryCreateSerializer
        if self.action == "reverse":
            return JournalEntryReverseSerializer
        return JournalEntrySerializer

    def _detail(self, entry: JournalEntry, http_status=status.HTTP_200_OK) -> Response:
        entry = self.queryset.prefetch_related("lines__account").get(pk=entry.pk)
        return Response(JournalEntryDetailSerializer(entry).data, status=http_status)

    @extend_schema(
        request=JournalEntryCreateSerializer,
        responses={201: JournalEntryDetailSerializer, 400: dict, 503: dict},
    )
    def create(self, request, *args, **kwargs):
        ser = JournalEntryCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        try:
            entry = create_journal_entry(
                description=data["description"],
                lines=ser.to_lines(),
                entry_date=data.get("date"),
                reference=data.get("reference"),
            )
        except AccountingServiceError as exc:
            return error_response(exc)

        return self._detail(entry, status.HTTP_201_CREATED)

    @extend_schema(responses={409: dict})
    def destroy(self, request, *args, **kwargs):
        entry = self.get_object()
        try:
            delete_journal_entry(entry)
        except AccountingServiceError as exc:
            response = error_response(exc)
            response.data["reverse_url"] = request.build_absolute_uri("reverse/")
            return response
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        request=JournalEntryReverseSerializer,
        responses={201: JournalEntryDetailSerializer, 400: dict},
    )
    @action(detail=True, methods=["post"], url_path="reverse")
    def reverse(self, request, pk=None):
        entry = self.get_object()

        ser = JournalEntryReverseSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            reversal = reverse_journal_entry(
                entry,
                entry_date=ser.validated_data.get("date"),
                description=ser.validated_data.get("description") or None,
            )
        except AccountingServiceError as exc:
            return error_response(exc)

        return self._detail(reversal, status.HTTP_201_CREATED)


# ============================================================
# LEDGER LINES (AUDIT)
# ============================================================


@extend_schema(tags=["accounting"])
class JournalLineViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Read-only access to posted journal lines (append-only, audit-safe).
    """

    permission_classes = [IsAuthenticated, HasAccountingPermission]
    required_perms = {"*": VIEW_JOURNAL}
    serializer_class = JournalLineSerializer
    filterset_class = JournalLineFilter
    queryset = JournalLine.objects.select_related("journal_entry", "account").order_by(
        "journal_entry__entry_date", "journal_entry__journal_number", "line_no"
    )
