"""
Tracker package for communicating with BitTorrent trackers.
"""
from .errors import NetworkError, TrackerError, TrackerFailure, TrackerProtocolError, UnsupportedPeerFormat
from .http_tracker import HTTPTrackerClient
from .messages import DEFAULT_PORT, AnnounceState, TrackerResponse, generate_peer_id
from .utils import PeerAddress, compact_to_peers, peers_to_compact, urlencode_bytes

__all__ = [
    'HTTPTrackerClient',
    'AnnounceState',
    'TrackerResponse',
    'PeerAddress',
    'DEFAULT_PORT',
    'generate_peer_id',
    'compact_to_peers',
    'peers_to_compact',
    'urlencode_bytes',
    'TrackerError',
    'NetworkError',
    'TrackerProtocolError',
    'TrackerFailure',
    'UnsupportedPeerFormat',
]
