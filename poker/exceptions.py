"""
Domain errors raised by the room store and state machine.

The socket layer turns them into a private ``error`` message for the
acting connection; the HTTP layer renders them as a JSend ``fail`` body.
"""


class PokerError(Exception):
    """Base class for all room/player errors."""
    status_code = 400
    message = 'Bad request'

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class NotFound(PokerError):
    """Unknown room or player."""
    status_code = 404
    message = 'Not found'


class Unauthorized(PokerError):
    """A non-moderator attempted a moderator-only operation."""
    status_code = 403
    message = 'Not authorized'


class Conflict(PokerError):
    """Duplicate player name, or the connection is already seated."""
    status_code = 400
    message = 'Name already taken, please choose another.'


class InvalidInput(PokerError):
    """Empty or missing required field."""
    status_code = 400
    message = 'Invalid input'
