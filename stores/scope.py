# stores/scope.py
"""
Which stores a request is looking at.

A request either targets one store or every store the user belongs to.
The choice is parsed once at the view boundary into a Scope value; business
logic only ever filters through Scope.apply() and never compares raw ids
against an 'ALL' marker.
"""
from rest_framework.exceptions import PermissionDenied, ValidationError

ALL_MARKERS = ('ALL', 'all', '')


class Scope:
    ALL = 'all'
    STORE = 'store'

    def __init__(self, kind, store_id=None, store_ids=None):
        self.kind = kind
        self.store_id = store_id
        # Stores visible under the All variant
        self.store_ids = list(store_ids or [])

    @classmethod
    def all(cls, store_ids):
        return cls(cls.ALL, store_ids=store_ids)

    @classmethod
    def store(cls, store_id):
        return cls(cls.STORE, store_id=int(store_id))

    @classmethod
    def from_request(cls, request, param='store_id'):
        """
        Build the scope for request.user from a query/body parameter.
        Missing or 'ALL' selects every store the user belongs to.
        """
        raw = request.query_params.get(param)
        if raw is None and hasattr(request, 'data') and hasattr(request.data, 'get'):
            raw = request.data.get(param)

        member_store_ids = request.user.store_ids()

        if raw is None or str(raw) in ALL_MARKERS:
            return cls.all(member_store_ids)

        try:
            store_id = int(raw)
        except (TypeError, ValueError):
            raise ValidationError({param: 'Invalid store id'})

        if store_id not in member_store_ids:
            raise PermissionDenied('Not a member of this store')

        return cls.store(store_id)

    @property
    def is_all(self):
        return self.kind == self.ALL

    def apply(self, queryset, field='store'):
        """Restrict a queryset to the stores in scope"""
        if self.is_all:
            return queryset.filter(**{f'{field}_id__in': self.store_ids})
        return queryset.filter(**{f'{field}_id': self.store_id})

    def __eq__(self, other):
        if not isinstance(other, Scope):
            return NotImplemented
        if self.is_all and other.is_all:
            return sorted(self.store_ids) == sorted(other.store_ids)
        return self.kind == other.kind and self.store_id == other.store_id

    def __repr__(self):
        if self.is_all:
            return f"Scope.all({self.store_ids})"
        return f"Scope.store({self.store_id})"

    def __str__(self):
        return 'All stores' if self.is_all else f'Store {self.store_id}'
