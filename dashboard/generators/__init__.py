from django.conf import settings

from .base import BaseTextGenerator
from .anthropic import AnthropicTextGenerator


def get_text_generator():
    """Text generator configured from settings"""
    return AnthropicTextGenerator({
        'api_key': settings.ANTHROPIC_API_KEY,
        'model': settings.AI_MODEL,
        'max_tokens': settings.AI_MAX_TOKENS,
        'timeout': settings.AI_TIMEOUT,
    })


__all__ = ['BaseTextGenerator', 'AnthropicTextGenerator', 'get_text_generator']
