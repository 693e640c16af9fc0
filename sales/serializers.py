from rest_framework import serializers

from .models import SaleRecord, SaleItem


class SaleItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = SaleItem
        fields = ['id', 'name', 'quantity', 'unit_price', 'total_price']
        read_only_fields = ['id']


class SaleRecordSerializer(serializers.ModelSerializer):
    items = SaleItemSerializer(many=True, read_only=True)
    store_name = serializers.CharField(source='store.name', read_only=True)

    class Meta:
        model = SaleRecord
        fields = [
            'id', 'store', 'store_name', 'user', 'date', 'amount', 'type',
            'items', 'created_at'
        ]
        read_only_fields = fields


class SaleSubmitSerializer(serializers.Serializer):
    """
    Input for a new sale. 'type' is deliberately a free string: an unknown
    channel is stored as 'manual' with a warning rather than rejected here.
    """
    store_id = serializers.IntegerField()
    date = serializers.DateField()
    amount = serializers.IntegerField(min_value=1)
    type = serializers.CharField(max_length=20, required=False, default='manual')
    items = SaleItemSerializer(many=True, required=False)


class ExtractedRecordSerializer(serializers.Serializer):
    date = serializers.CharField()
    amount = serializers.FloatField()
    platform = serializers.CharField(required=False, allow_blank=True, default='')
    items = SaleItemSerializer(many=True, required=False)


class SaleImportSerializer(serializers.Serializer):
    store_id = serializers.IntegerField()
    records = ExtractedRecordSerializer(many=True, allow_empty=True)
