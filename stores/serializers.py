from rest_framework import serializers

from .models import Store, StoreMember, StoreInvite


class StoreSerializer(serializers.ModelSerializer):
    owner_name = serializers.CharField(source='owner.username', read_only=True)
    member_count = serializers.SerializerMethodField()
    my_role = serializers.SerializerMethodField()

    class Meta:
        model = Store
        fields = [
            'id', 'name', 'owner', 'owner_name', 'business_number', 'address',
            'phone', 'member_count', 'my_role', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'owner', 'owner_name', 'member_count',
                            'my_role', 'created_at', 'updated_at']

    def get_member_count(self, obj):
        return obj.members.count()

    def get_my_role(self, obj):
        request = self.context.get('request')
        if not request:
            return None
        membership = obj.members.filter(user=request.user).first()
        return membership.role if membership else None


class StoreMemberSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source='user.username', read_only=True)
    email = serializers.CharField(source='user.email', read_only=True)

    class Meta:
        model = StoreMember
        fields = [
            'id', 'store', 'user', 'username', 'email', 'role',
            'alias', 'hourly_wage', 'color', 'joined_at'
        ]
        read_only_fields = ['id', 'store', 'user', 'username', 'email',
                            'role', 'joined_at']

    def validate_color(self, value):
        if not value.startswith('#') or len(value) not in (4, 7):
            raise serializers.ValidationError("Color must be a hex code like #228be6")
        return value


class StoreInviteSerializer(serializers.ModelSerializer):
    store_name = serializers.CharField(source='store.name', read_only=True)

    class Meta:
        model = StoreInvite
        fields = ['code', 'store', 'store_name', 'expires_at', 'created_at']
        read_only_fields = fields


class JoinStoreSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=6, min_length=6)
