from rest_framework import serializers

from sales.serializers import SaleRecordSerializer
from expenses.serializers import ExpenseRecordSerializer
from timeline.serializers import TimelinePostSerializer


class DailyDetailsSerializer(serializers.Serializer):
    sales = SaleRecordSerializer(many=True)
    expenses = ExpenseRecordSerializer(many=True)
    posts = TimelinePostSerializer(many=True)


class AssistantQuestionSerializer(serializers.Serializer):
    message = serializers.CharField(max_length=1000)
    context = serializers.DictField(required=False, default=dict)
