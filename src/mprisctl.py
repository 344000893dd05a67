"""
mprisctl - control MPRIS2 media players from the command line.

The active player is remembered between invocations (see mpris_state), so
`mprisctl next-player` followed by `mprisctl play-pause` acts on the player
that was switched to.
"""
import argparse
import logging
import math
import sys
from collections import namedtuple

from mpris_errors import MprisError, PlayerNotFound
from mpris_player import NO_TRACK, LoopStatus
from mpris_root import MprisRoot
from mpris_state import load_active_player, save_active_player

__version__ = "0.1.0"

logger = logging.getLogger("mprisctl")

VolumeCommand = namedtuple('VolumeCommand', ['mode', 'value'])

LOOP_STATUS_CHOICES = {
    'none': LoopStatus.NONE,
    'track': LoopStatus.TRACK,
    'playlist': LoopStatus.PLAYLIST,
}


def parse_volume(text):
    """
    argparse type for set-volume.

    "0.4" sets the volume, "0.1+" and "0.1-" raise or lower it.
    """
    if text[-1:] in ('+', '-'):
        try:
            delta = float(text[:-1])
        except ValueError:
            raise argparse.ArgumentTypeError("Invalid number") from None
        if not math.isfinite(delta):
            raise argparse.ArgumentTypeError("Invalid number")
        return VolumeCommand('adjust', delta if text[-1] == '+' else -delta)
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError("Invalid number") from None
    if not math.isfinite(value):
        raise argparse.ArgumentTypeError("Invalid number")
    if not 0.0 <= value <= 1.0:
        raise argparse.ArgumentTypeError("Value must be 0-1")
    return VolumeCommand('set', value)


def _percent(value):
    # round half away from zero
    return int(math.copysign(math.floor(abs(value) * 100 + 0.5), value))


def adjust_volume(current, delta):
    """Add delta to current in whole percent steps, clamped to 0..1."""
    return max(0, min(100, _percent(current) + _percent(delta))) / 100


def _print_record(record, field):
    if field:
        value = record.get_field(field)
        if value is not None:
            print(value)
        return
    for name, value in record.present_fields():
        print(f"{name}: {value}")


def _set_volume(root, args):
    player = root.current_player()
    command = args.volume
    if command.mode == 'set':
        player.set_volume(command.value)
    else:
        player.set_volume(adjust_volume(player.get_volume(), command.value))


def _print_tracks_metadata(root, args):
    records = root.current_player().get_tracks_metadata(args.track_ids)
    for i, record in enumerate(records):
        if i:
            print()
        _print_record(record, None)


COMMANDS = {
    'next-player': lambda root, args: root.select_next(),
    'previous-player': lambda root, args: root.select_previous(),
    'set-player': lambda root, args: root.select(args.player),
    'raise': lambda root, args: root.raise_player(),
    'quit': lambda root, args: root.quit(),

    'next': lambda root, args: root.current_player().next(),
    'previous': lambda root, args: root.current_player().previous(),
    'play': lambda root, args: root.current_player().play(),
    'pause': lambda root, args: root.current_player().pause(),
    'play-pause': lambda root, args: root.current_player().play_pause(),
    'stop': lambda root, args: root.current_player().stop(),
    'seek': lambda root, args: root.current_player().seek(args.offset),
    'set-position': lambda root, args: root.current_player().set_position(args.position),
    'set-volume': _set_volume,
    'set-rate': lambda root, args: root.current_player().set_rate(args.rate),
    'set-shuffle': lambda root, args: root.current_player().set_shuffle(args.enabled == 'true'),
    'set-loop': lambda root, args: root.current_player().set_loop_status(LOOP_STATUS_CHOICES[args.status]),
    'open': lambda root, args: root.current_player().open_uri(args.uri),

    'player': lambda root, args: print(root.current_player().name),
    'players': lambda root, args: print("\n".join(root.list_players())),
    'metadata': lambda root, args: _print_record(root.current_player().get_metadata(), args.field),
    'properties': lambda root, args: _print_record(root.get_properties(), args.field),
    'player-properties': lambda root, args: _print_record(root.current_player().get_properties(), args.field),

    'add-track': lambda root, args: root.current_player().add_track(args.uri, args.after, args.set_current),
    'remove-track': lambda root, args: root.current_player().remove_track(args.track_id),
    'go-to-track': lambda root, args: root.current_player().go_to(args.track_id),
    'tracks-metadata': _print_tracks_metadata,
    'tracklist-properties': lambda root, args: _print_record(root.current_player().get_tracklist_properties(), args.field),
}


def build_parser():
    parser = argparse.ArgumentParser(prog='mprisctl', description="Control MPRIS2 media players")
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    parser.add_argument('-v', '--verbose', action='store_true', help="Log debug output")
    sub = parser.add_subparsers(dest='command', metavar='COMMAND')
    sub.required = True

    sub.add_parser('next-player', help="Switch to next player")
    sub.add_parser('previous-player', help="Switch to previous player")
    sub.add_parser('set-player', help="Set active player").add_argument('player', help="Name of player")
    sub.add_parser('raise', help="Raise active player")
    sub.add_parser('quit', help="Quit active player")

    sub.add_parser('next', help="Skip to next track")
    sub.add_parser('previous', help="Skip to previous track")
    sub.add_parser('play', help="Play current track")
    sub.add_parser('pause', help="Pause current track")
    sub.add_parser('play-pause', help="Play/Pause current track")
    sub.add_parser('stop', help="Stop current track")
    sub.add_parser('seek', help="Seek in current track").add_argument(
        'offset', type=int, help="Offset of current position in microseconds")
    sub.add_parser('set-position', help="Set the position of current track").add_argument(
        'position', type=int, help="Position in microseconds")
    sub.add_parser('set-volume', help="Set the volume of active player").add_argument(
        'volume', type=parse_volume,
        help="Floating value between 0 and 1 with optional suffix '+' or '-' to increment or decrement")
    sub.add_parser('set-rate', help="Set the rate of active player").add_argument(
        'rate', type=float, help="Floating value between minimum_rate and maximum_rate")
    sub.add_parser('set-shuffle', help="Set shuffle of active player").add_argument(
        'enabled', choices=['true', 'false'])
    sub.add_parser('set-loop', help="Set the loop status of active player").add_argument(
        'status', choices=list(LOOP_STATUS_CHOICES))
    sub.add_parser('open', help="Open URI to play").add_argument('uri', help="URI to open")

    sub.add_parser('player', help="Get active player")
    sub.add_parser('players', help="Get all players")
    sub.add_parser('metadata', help="Get metadata of current track").add_argument('field', nargs='?')
    sub.add_parser('properties', help="Get root properties").add_argument('field', nargs='?')
    sub.add_parser('player-properties', help="Get active player properties").add_argument('field', nargs='?')

    add_track = sub.add_parser('add-track', help="Add track to tracklist")
    add_track.add_argument('uri', help="URI of the track to add")
    add_track.add_argument('--after', metavar='ID', default=NO_TRACK,
                           help="Add track after the specified track (default: at the start)")
    add_track.add_argument('--set-current', action='store_true', help="Make the new track the current one")
    sub.add_parser('remove-track', help="Remove track from tracklist").add_argument('track_id', metavar='ID')
    sub.add_parser('go-to-track', help="Go to track in tracklist").add_argument('track_id', metavar='ID')
    sub.add_parser('tracks-metadata', help="Get metadata of tracks in tracklist").add_argument(
        'track_ids', metavar='ID', nargs='+')
    sub.add_parser('tracklist-properties', help="Get tracklist properties of active player").add_argument(
        'field', nargs='?')
    return parser


def run(args, connection=None):
    root = MprisRoot(connection)

    stored = load_active_player()
    if stored:
        try:
            root.select(stored)
        except PlayerNotFound:
            logger.debug("Stored player %s is no longer running", stored)

    COMMANDS[args.command](root, args)

    if root.player_index is not None:
        save_active_player(root.current_player().name)


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    try:
        run(args)
    except (MprisError, OSError) as e:
        print(f"mprisctl: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
