from rest_framework import serializers

from .models import ExpenseRecord, FixedCost


class ExpenseRecordSerializer(serializers.ModelSerializer):
    class Meta:
        model = ExpenseRecord
        fields = [
            'id', 'store', 'user', 'date', 'amount', 'merchant_name',
            'category', 'image_url', 'created_at'
        ]
        read_only_fields = fields


class ManualExpenseSerializer(serializers.Serializer):
    """Required fields are checked in ExpenseLogic so the user gets one message"""
    store_id = serializers.IntegerField()
    date = serializers.DateField(required=False, allow_null=True)
    amount = serializers.IntegerField(required=False, allow_null=True)
    merchant_name = serializers.CharField(
        max_length=255, required=False, allow_blank=True)
    category = serializers.CharField(
        max_length=50, required=False, allow_blank=True)
    image_url = serializers.URLField(
        max_length=500, required=False, allow_blank=True)


class FixedCostSerializer(serializers.ModelSerializer):
    class Meta:
        model = FixedCost
        fields = [
            'id', 'store', 'user', 'name', 'amount', 'day_of_month',
            'category', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'user', 'created_at', 'updated_at']

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Amount must be positive")
        return value
