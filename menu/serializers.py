from rest_framework import serializers

from .models import MenuCost


class MenuCostSerializer(serializers.ModelSerializer):
    margin_percent = serializers.SerializerMethodField()

    class Meta:
        model = MenuCost
        fields = ['id', 'store', 'name', 'cost', 'price', 'category',
                  'margin_percent', 'updated_at']
        read_only_fields = ['id', 'margin_percent', 'updated_at']
        # Upserts go through MenuBusinessLogic.upsert_cost
        validators = []

    def get_margin_percent(self, obj):
        if not obj.price:
            return None
        return round((obj.price - obj.cost) / obj.price * 100, 1)


class MenuAdviceSerializer(serializers.Serializer):
    store_id = serializers.IntegerField()
    name = serializers.CharField(max_length=255)
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
