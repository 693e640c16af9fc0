# core/views.py
import logging

from django.db import DatabaseError, connection
from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from dashboard.generators import get_text_generator
from .serializers import HealthCheckSerializer

logger = logging.getLogger(__name__)

SERVICE_NAME = 'sales-keeper'
VERSION = '0.1.0'


@api_view(['GET'])
@permission_classes([AllowAny])
def health_check(request):
    """Database reachability and whether AI text generation is configured"""
    try:
        connection.ensure_connection()
        database_status = 'connected'
    except DatabaseError as e:
        logger.error(f"Health check database error: {str(e)}")
        database_status = f'error: {str(e)}'

    generator = get_text_generator()

    serializer = HealthCheckSerializer({
        'status': 'healthy' if database_status == 'connected' else 'degraded',
        'timestamp': timezone.now(),
        'database': database_status,
        'ai': 'configured' if generator.is_configured() else 'missing key',
        'service': SERVICE_NAME,
        'version': VERSION
    })
    return Response(serializer.data)
