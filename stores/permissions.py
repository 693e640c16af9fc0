from rest_framework import permissions
from rest_framework.exceptions import PermissionDenied, ValidationError

from .models import StoreMember


def coerce_id(value, field='store_id'):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError({field: f"Invalid {field.replace('_id', '')} id"})


def get_membership(user, store_id):
    if not user or not user.is_authenticated or store_id is None:
        return None
    return StoreMember.objects.filter(store_id=coerce_id(store_id), user=user).first()


def _store_id_for(request, view, obj=None):
    if obj is not None:
        return getattr(obj, 'store_id', getattr(obj, 'id', None))
    return (view.kwargs.get('store_id')
            or request.query_params.get('store_id')
            or (request.data.get('store_id') if hasattr(request.data, 'get') else None)
            or (request.data.get('store') if hasattr(request.data, 'get') else None))


class IsStoreMember(permissions.BasePermission):
    """Allow access to members of the store being addressed"""
    message = 'Not a member of this store'

    def has_permission(self, request, view):
        if not request.user.is_authenticated:
            return False
        store_id = _store_id_for(request, view)
        # Scope-aware list endpoints resolve membership themselves
        if store_id in (None, '', 'ALL', 'all'):
            return True
        return get_membership(request.user, store_id) is not None

    def has_object_permission(self, request, view, obj):
        return get_membership(request.user, _store_id_for(request, view, obj)) is not None


class IsStoreOwnerOrManager(permissions.BasePermission):
    """Allow access to owners and managers of the store"""
    message = 'Owner or manager role required'

    def has_permission(self, request, view):
        if not request.user.is_authenticated:
            return False
        store_id = _store_id_for(request, view)
        if store_id in (None, ''):
            return True
        membership = get_membership(request.user, store_id)
        return membership is not None and membership.can_manage

    def has_object_permission(self, request, view, obj):
        membership = get_membership(
            request.user, _store_id_for(request, view, obj))
        return membership is not None and membership.can_manage


def get_member_store(user, store_id):
    """Store with the given id, if the user belongs to it (403 otherwise)"""
    membership = get_membership(user, coerce_id(store_id))
    if membership is None:
        raise PermissionDenied(IsStoreMember.message)
    return membership.store
