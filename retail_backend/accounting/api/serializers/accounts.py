# accounting/api/serializers/accounts.py

from rest_framework import serializers

from accounting.models.account import Account
from accounting.models.account_type import AccountSubType, AccountType


class AccountTypeSerializer(serializers.ModelSerializer):
    normal_balance = serializers.CharField(read_only=True)

    class Meta:
        model = AccountType
        fields = ("id", "key", "name", "normal_balance")
        read_only_fields = fields


class AccountSubTypeSerializer(serializers.ModelSerializer):
    type_id = serializers.IntegerField(source="account_type_id", read_only=True)
    type_name = serializers.CharField(source="account_type.name", read_only=True)

    class Meta:
        model = AccountSubType
        fields = ("id", "name", "type_id", "type_name")
        read_only_fields = fields


class AccountSerializer(serializers.ModelSerializer):
    """
    Chart-of-accounts row.

    Writes use type_id / sub_type_id / parent_id; reads add the names and the
    derived normal balance side so the UI does not need extra lookups.
    """

    type_id = serializers.PrimaryKeyRelatedField(
        source="account_type", queryset=AccountType.objects.all()
    )
    sub_type_id = serializers.PrimaryKeyRelatedField(
        source="sub_type", queryset=AccountSubType.objects.all()
    )
    parent_id = serializers.PrimaryKeyRelatedField(
        source="parent",
        queryset=Account.objects.all(),
        required=False,
        allow_null=True,
    )
    type_name = serializers.CharField(source="account_type.name", read_only=True)
    sub_type_name = serializers.CharField(source="sub_type.name", read_only=True)
    normal_balance = serializers.CharField(read_only=True)

    class Meta:
        model = Account
        fields = (
            "id",
            "code",
            "name",
            "type_id",
            "type_name",
            "sub_type_id",
            "sub_type_name",
            "parent_id",
            "normal_balance",
            "is_enabled",
            "description",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("id", "created_at", "updated_at")

    def validate(self, attrs):
        instance = self.instance

        account_type = attrs.get("account_type", getattr(instance, "account_type", None))
        sub_type = attrs.get("sub_type", getattr(instance, "sub_type", None))
        parent = attrs.get("parent", getattr(instance, "parent", None))

        if account_type and sub_type and sub_type.account_type_id != account_type.id:
            raise serializers.ValidationError(
                {"sub_type_id": "Sub-type does not belong to the selected account type."}
            )

        if instance is not None and parent is not None and parent.pk == instance.pk:
            raise serializers.ValidationError({"parent_id": "An account cannot be its own parent."})

        # Re-typing an account with history would silently move it between statements.
        if (
            instance is not None
            and "account_type" in attrs
            and attrs["account_type"].pk != instance.account_type_id
            and instance.has_ledger_history()
        ):
            raise serializers.ValidationError(
                {"type_id": "Account has posted journal lines; its type cannot change."}
            )

        return attrs


class AccountBalanceSerializer(serializers.Serializer):
    account_id = serializers.IntegerField()
    code = serializers.CharField()
    name = serializers.CharField()
    normal_balance = serializers.CharField()
    as_of = serializers.DateField(allow_null=True)
    balance = serializers.DecimalField(max_digits=16, decimal_places=2)
    balance_minor = serializers.IntegerField()
