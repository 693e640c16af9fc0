# core/serializers.py
from rest_framework import serializers


class HealthCheckSerializer(serializers.Serializer):
    status = serializers.CharField()
    timestamp = serializers.DateTimeField()
    database = serializers.CharField()
    ai = serializers.CharField()
    service = serializers.CharField()
    version = serializers.CharField()
