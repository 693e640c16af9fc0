from rest_framework import serializers

from .models import WorkSchedule, WorkLog


class WorkScheduleSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source='user.username', read_only=True)

    class Meta:
        model = WorkSchedule
        fields = ['id', 'store', 'user', 'username', 'start_time',
                  'end_time', 'memo', 'created_at']
        read_only_fields = ['id', 'username', 'created_at']

    def validate(self, data):
        if data['end_time'] <= data['start_time']:
            raise serializers.ValidationError(
                {'end_time': 'End time must be after start time'})

        store = data['store']
        if not store.members.filter(user=data['user']).exists():
            raise serializers.ValidationError(
                {'user': 'User is not a member of this store'})
        return data


class WorkLogSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source='user.username', read_only=True)
    hours = serializers.SerializerMethodField()

    class Meta:
        model = WorkLog
        fields = ['id', 'store', 'user', 'username', 'clock_in', 'clock_out',
                  'wage_snapshot', 'status', 'hours']
        read_only_fields = fields

    def get_hours(self, obj):
        return round(obj.hours, 2)


class ClockInSerializer(serializers.Serializer):
    store_id = serializers.IntegerField()
    user_id = serializers.IntegerField(required=False)
    wage = serializers.IntegerField(required=False, min_value=0)


class ClockOutSerializer(serializers.Serializer):
    store_id = serializers.IntegerField()
    log_id = serializers.IntegerField(required=False)
