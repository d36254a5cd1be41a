import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path

sys.path.append(os.path.join(os.path.dirname(__file__), 'src'))

from bencode import BencodeDecodeError, decode, project
from torrent.metainfo import Torrent
from tracker import DEFAULT_PORT, AnnounceState, HTTPTrackerClient, TrackerError


def cmd_decode(args):
    value = decode(args.value.encode())
    print(json.dumps(project(value), sort_keys=True, separators=(",", ":")))


def cmd_info(args):
    meta = Torrent.load(args.torrent)
    for line in meta.summary():
        print(line)


async def cmd_peers(args):
    meta = Torrent.load(args.torrent)
    peer_id = args.peer_id.encode() if args.peer_id else None
    state = AnnounceState.for_torrent(meta, peer_id=peer_id, port=args.port)

    tracker = HTTPTrackerClient(meta)
    peers = await tracker.announce(state)

    logging.getLogger(__name__).info("[Main] Tracker returned %d peers", len(peers))
    for peer in peers:
        print(peer)


def build_parser():
    ap = argparse.ArgumentParser(description="Inspect bencode data and torrents, and ask trackers for peers.")
    ap.add_argument("-v", "--verbose", action="store_true", help="log debug output")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("decode", help="decode a bencoded value and print it as JSON")
    p.add_argument("value")
    p.set_defaults(func=cmd_decode)

    p = sub.add_parser("info", help="print a torrent's tracker, length, info hash and piece hashes")
    p.add_argument("torrent", type=Path)
    p.set_defaults(func=cmd_info)

    p = sub.add_parser("peers", help="announce to the tracker and print ip:port per peer")
    p.add_argument("torrent", type=Path)
    p.add_argument("--port", type=int, default=DEFAULT_PORT)
    p.add_argument("--peer-id", help="20-character peer id (random by default)")
    p.set_defaults(func=lambda a: asyncio.run(cmd_peers(a)))

    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s:%(name)s:%(message)s",
    )

    try:
        args.func(args)
    except (BencodeDecodeError, TrackerError, OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
