# dashboard/generators/anthropic.py
import logging

import requests

from core.exceptions import TextGenerationError
from .base import BaseTextGenerator

logger = logging.getLogger(__name__)

API_URL = 'https://api.anthropic.com/v1/messages'
API_VERSION = '2023-06-01'


class AnthropicTextGenerator(BaseTextGenerator):
    """Anthropic Messages API over plain HTTP"""

    def __init__(self, config=None):
        super().__init__(config)
        self.api_key = self.config.get('api_key', '')
        self.model = self.config.get('model', 'claude-3-haiku-20240307')
        self.max_tokens = self.config.get('max_tokens', 300)
        self.timeout = self.config.get('timeout', 20)

    def is_configured(self):
        return bool(self.api_key)

    def generate(self, system_prompt, message):
        if not self.api_key:
            raise TextGenerationError('API key not configured')

        payload = {
            'model': self.model,
            'max_tokens': self.max_tokens,
            'system': system_prompt,
            'messages': [
                {'role': 'user', 'content': message}
            ]
        }

        try:
            response = requests.post(
                API_URL,
                json=payload,
                headers={
                    'x-api-key': self.api_key,
                    'anthropic-version': API_VERSION,
                    'content-type': 'application/json'
                },
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise TextGenerationError(f"Request failed: {str(e)}")

        if response.status_code != 200:
            raise TextGenerationError(
                f"HTTP {response.status_code}: {response.text[:200]}")

        try:
            result = response.json()
        except ValueError:
            raise TextGenerationError('Response was not JSON')

        for block in result.get('content', []):
            if block.get('type') == 'text' and block.get('text'):
                logger.info(
                    f"{self.model} replied ({result.get('usage', {}).get('output_tokens', '?')} tokens)")
                return block['text'].strip()

        raise TextGenerationError('No text content in response')
