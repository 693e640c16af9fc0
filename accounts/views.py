# accounts/views.py
from django.contrib.auth import login as django_login, logout as django_logout
from django.contrib.auth import update_session_auth_hash
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from .business_logic import AccountLogic
from .serializers import (
    UserSerializer, RegisterSerializer, LoginSerializer,
    ChangePasswordSerializer, UpdateProfileSerializer
)
from .utils import create_jwt_token

# ============ Sign-in ============


@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    """Username or email plus password; answers with a bearer token"""
    serializer = LoginSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    result = AccountLogic.login(
        request,
        serializer.validated_data['username'],
        serializer.validated_data['password'])

    if not result['success']:
        return Response(result, status=status.HTTP_401_UNAUTHORIZED)

    # Browsable API and admin keep using the session
    django_login(request, result['user'],
                 backend='accounts.backends.EmailOrUsernameModelBackend')

    return Response({
        'success': True,
        'token': result['token'],
        'user': UserSerializer(result['user']).data
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout_view(request):
    # Tokens are stateless; only the session is dropped
    django_logout(request)
    return Response({'success': True})


@api_view(['POST'])
@permission_classes([AllowAny])
def register_view(request):
    serializer = RegisterSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    user, store = AccountLogic.register(**serializer.validated_data)

    return Response({
        'success': True,
        'token': create_jwt_token(user),
        'user': UserSerializer(user).data,
        'store_id': store.id if store else None
    }, status=status.HTTP_201_CREATED)

# ============ Profile ============


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def profile_view(request):
    return Response(UserSerializer(request.user).data)


@api_view(['PUT', 'PATCH'])
@permission_classes([IsAuthenticated])
def update_profile_view(request):
    serializer = UpdateProfileSerializer(
        request.user, data=request.data, partial=True)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    serializer.save()
    return Response({
        'success': True,
        'user': UserSerializer(request.user).data
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def change_password_view(request):
    serializer = ChangePasswordSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    result = AccountLogic.change_password(
        request.user,
        serializer.validated_data['old_password'],
        serializer.validated_data['new_password'])

    if not result['success']:
        return Response(result, status=status.HTTP_400_BAD_REQUEST)

    update_session_auth_hash(request, request.user)
    return Response(result)
