"""
Errors raised while talking to a tracker.
"""


class TrackerError(Exception):
    """Base class for tracker communication failures."""


class NetworkError(TrackerError):
    """The HTTP exchange with the tracker failed."""


class TrackerProtocolError(TrackerError):
    """The tracker's response is not a valid announce response."""


class TrackerFailure(TrackerProtocolError):
    """The tracker answered with a ``failure reason``."""
    def __init__(self, reason: str):
        super().__init__(f"Tracker error: {reason}")
        self.reason = reason


class UnsupportedPeerFormat(TrackerError):
    """The tracker sent peers in the non-compact (dictionary) model."""
