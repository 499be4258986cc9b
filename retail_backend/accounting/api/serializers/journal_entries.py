# accounting/api/serializers/journal_entries.py

from rest_framework import serializers

from accounting.models.journal import JournalEntry
from accounting.models.journal_line import JournalLine
from accounting.services.journal_validator import (
    MAX_LINE_AMOUNT,
    MAX_LINE_DESCRIPTION_LENGTH,
    MAX_REFERENCE_LENGTH,
)


class JournalLineSerializer(serializers.ModelSerializer):
    journal_entry_id = serializers.IntegerField(read_only=True)
    journal_number = serializers.CharField(source="journal_entry.display_number", read_only=True)
    entry_date = serializers.DateField(source="journal_entry.entry_date", read_only=True)
    account_id = serializers.IntegerField(read_only=True)
    account_code = serializers.CharField(source="account.code", read_only=True)
    account_name = serializers.CharField(source="account.name", read_only=True)
    debit = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)
    credit = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = JournalLine
        fields = (
            "id",
            "journal_entry_id",
            "journal_number",
            "entry_date",
            "line_no",
            "account_id",
            "account_code",
            "account_name",
            "description",
            "entry_type",
            "amount",
            "debit",
            "credit",
            "created_at",
        )
        read_only_fields = fields


class JournalEntrySerializer(serializers.ModelSerializer):
    number = serializers.IntegerField(source="journal_number", read_only=True)
    journal_number = serializers.CharField(source="display_number", read_only=True)
    date = serializers.DateField(source="entry_date", read_only=True)
    reverses = serializers.SerializerMethodField()
    reversed_by = serializers.SerializerMethodField()

    class Meta:
        model = JournalEntry
        fields = (
            "id",
            "number",
            "journal_number",
            "date",
            "reference",
            "description",
            "total_debit",
            "total_credit",
            "reverses",
            "reversed_by",
            "created_at",
        )
        read_only_fields = fields

    def get_reverses(self, obj):
        return obj.reverses.display_number if obj.reverses_id else None

    def get_reversed_by(self, obj):
        reversal = getattr(obj, "reversed_by", None)
        return reversal.display_number if reversal else None


class JournalEntryDetailSerializer(JournalEntrySerializer):
    items = JournalLineSerializer(source="lines", many=True, read_only=True)

    class Meta(JournalEntrySerializer.Meta):
        fields = JournalEntrySerializer.Meta.fields + ("items",)
        read_only_fields = fields


class JournalItemInputSerializer(serializers.Serializer):
    """
    One candidate line. Amount rules (sign, exclusivity, balance) belong to
    the journal validator so every caller gets the same answers.
    """

    account_id = serializers.IntegerField()
    description = serializers.CharField(
        required=False, allow_blank=True, max_length=MAX_LINE_DESCRIPTION_LENGTH, default=""
    )
    # precision is left open: the validator rounds half-up to 2dp
    debit = serializers.DecimalField(
        max_digits=None,
        decimal_places=None,
        max_value=MAX_LINE_AMOUNT,
        required=False,
        allow_null=True,
        default=None,
    )
    credit = serializers.DecimalField(
        max_digits=None,
        decimal_places=None,
        max_value=MAX_LINE_AMOUNT,
        required=False,
        allow_null=True,
        default=None,
    )


class JournalEntryCreateSerializer(serializers.Serializer):
    date = serializers.DateField(required=False, allow_null=True, default=None)
    reference = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        max_length=MAX_REFERENCE_LENGTH,
        default=None,
    )
    description = serializers.CharField(allow_blank=True)
    items = JournalItemInputSerializer(many=True)

    def to_lines(self) -> list[dict]:
        return [
            {
                "account": item["account_id"],
                "description": item.get("description", ""),
                "debit": item.get("debit"),
                "credit": item.get("credit"),
            }
            for item in self.validated_data["items"]
        ]


class JournalEntryReverseSerializer(serializers.Serializer):
    date = serializers.DateField(required=False, allow_null=True, default=None)
    description = serializers.CharField(required=False, allow_blank=True, default="")
