"""Error types raised by the leaderboard client."""


class LeaderboardError(Exception):
    """Base class for every leaderboard failure shown to the player."""


class ValidationError(LeaderboardError):
    """A submission was refused before it reached the network.

    ``reason`` is a stable code (``"name required"``, ``"name too long"``,
    ``"invalid time"``, ``"too many submissions"``); the exception text is the
    message meant for display.
    """

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message


class TransportError(LeaderboardError):
    """The endpoint could not be reached or answered with something unusable."""
