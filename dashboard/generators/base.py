# dashboard/generators/base.py
import abc


class BaseTextGenerator(abc.ABC):
    """Base class for natural-language generators"""

    def __init__(self, config=None):
        self.config = config or {}

    @abc.abstractmethod
    def generate(self, system_prompt, message):
        """
        Return a short reply to message.
        Raise core.exceptions.TextGenerationError on any failure.
        """
        pass

    def is_configured(self):
        return True

    def get_generator_name(self):
        return self.__class__.__name__
