from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers
from rest_framework.validators import UniqueValidator

User = get_user_model()


class MembershipSummarySerializer(serializers.Serializer):
    store_id = serializers.IntegerField(source='store.id')
    store_name = serializers.CharField(source='store.name')
    role = serializers.CharField()
    alias = serializers.CharField()


class UserSerializer(serializers.ModelSerializer):
    """Profile plus the stores the user can switch between"""
    stores = MembershipSummarySerializer(
        source='memberships', many=True, read_only=True)

    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'first_name', 'last_name',
                  'phone', 'stores', 'date_joined']
        read_only_fields = ['id', 'stores', 'date_joined']


class RegisterSerializer(serializers.Serializer):
    """
    Sign-up form. With store_name the new user also opens their first
    store as its owner; staff sign up without one and join by invite code.
    """
    username = serializers.CharField(
        max_length=150,
        validators=[UniqueValidator(queryset=User.objects.all())])
    email = serializers.EmailField(
        validators=[UniqueValidator(queryset=User.objects.all(), lookup='iexact')])
    password = serializers.CharField(write_only=True, validators=[validate_password])
    password2 = serializers.CharField(write_only=True)
    first_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    last_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    store_name = serializers.CharField(max_length=255, required=False, allow_blank=True)

    def validate(self, attrs):
        if attrs['password'] != attrs.pop('password2'):
            raise serializers.ValidationError(
                {'password2': '비밀번호가 일치하지 않습니다.'})
        return attrs


class LoginSerializer(serializers.Serializer):
    # Username or email
    username = serializers.CharField()
    password = serializers.CharField(write_only=True)


class ChangePasswordSerializer(serializers.Serializer):
    old_password = serializers.CharField()
    new_password = serializers.CharField(validators=[validate_password])


class UpdateProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['first_name', 'last_name', 'phone']
