# core/exceptions.py


class SalesKeeperError(Exception):
    """Base class for domain errors surfaced to API callers"""
    default_message = 'Request could not be processed'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AlreadyClockedIn(SalesKeeperError):
    default_message = 'Already working'


class NotClockedIn(SalesKeeperError):
    default_message = 'No open work log'


class InvalidInvite(SalesKeeperError):
    default_message = 'Invalid or expired invite'


class UnrecognizedInput(SalesKeeperError):
    default_message = '파일을 읽을 수 없습니다. 지원하는 형식인지 확인해주세요.'


class TextGenerationError(SalesKeeperError):
    default_message = 'Text generation failed'
