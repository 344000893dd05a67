import logging
import math
from enum import Enum

from mpris_errors import EnumDecodeError, TransportError
from mpris_properties import PlayerMetadata, PlayerProperties, RootProperties, TrackListProperties
from mpris_values import to_float

MPRIS_ROOT_IFACE = 'org.mpris.MediaPlayer2'
MPRIS_PLAYER_IFACE = 'org.mpris.MediaPlayer2.Player'
MPRIS_TRACKLIST_IFACE = 'org.mpris.MediaPlayer2.TrackList'
MPRIS_OBJECT_PATH = '/org/mpris/MediaPlayer2'
NO_TRACK = '/org/mpris/MediaPlayer2/TrackList/NoTrack'

logger = logging.getLogger("mpris.player")


class _BusEnum(Enum):
    """Enum whose values are the exact strings exchanged on the bus."""

    def encode(self):
        return self.value


    @classmethod
    def decode(cls, value):
        if not isinstance(value, str):
            raise EnumDecodeError(value, cls)
        try:
            return cls(value)
        except ValueError:
            raise EnumDecodeError(value, cls) from None


class PlaybackStatus(_BusEnum):
    PLAYING = "Playing"
    PAUSED = "Paused"
    STOPPED = "Stopped"


class LoopStatus(_BusEnum):
    NONE = "None"
    TRACK = "Track"
    PLAYLIST = "Playlist"


class MprisPlayer:
    """
    Handle on a single MPRIS2 media player service.

    Holds nothing but the shared connection and the service name. Every
    method sends its own request to the player; no property values are kept.
    """
    def __init__(self, connection, name):
        self.connection = connection
        self.name = name


    def __eq__(self, other):
        return isinstance(other, MprisPlayer) and self.name == other.name


    def __hash__(self):
        return hash(self.name)


    def __repr__(self):
        return f"MprisPlayer({self.name!r})"


    def copy(self):
        return MprisPlayer(self.connection, self.name)


    def _call(self, iface, method, *args, signature=None):
        logger.debug("Calling %s on %s", method, self.name)
        return self.connection.call(self.name, MPRIS_OBJECT_PATH, iface, method,
                                    *args, signature=signature)


    def _get_property(self, iface, prop_name):
        return self.connection.get_property(self.name, MPRIS_OBJECT_PATH, iface, prop_name)


    def _set_property(self, iface, prop_name, value):
        logger.debug("Setting %s=%r on %s", prop_name, value, self.name)
        self.connection.set_property(self.name, MPRIS_OBJECT_PATH, iface, prop_name, value)

    # ==========================================
    # org.mpris.MediaPlayer2 (Root Interface)
    # ==========================================

    def raise_player(self):
        """Brings the media player's user interface to the front."""
        self._call(MPRIS_ROOT_IFACE, 'Raise')


    def quit(self):
        """Causes the media player to stop running."""
        self._call(MPRIS_ROOT_IFACE, 'Quit')


    def get_root_properties(self):
        props = self.connection.get_all_properties(self.name, MPRIS_OBJECT_PATH, MPRIS_ROOT_IFACE)
        return RootProperties.from_mapping(props)

    # ==========================================
    # org.mpris.MediaPlayer2.Player (Player Interface)
    # ==========================================

    # --- Methods ---
    def next(self):
        self._call(MPRIS_PLAYER_IFACE, 'Next')


    def previous(self):
        self._call(MPRIS_PLAYER_IFACE, 'Previous')


    def pause(self):
        self._call(MPRIS_PLAYER_IFACE, 'Pause')


    def play_pause(self):
        self._call(MPRIS_PLAYER_IFACE, 'PlayPause')


    def stop(self):
        self._call(MPRIS_PLAYER_IFACE, 'Stop')


    def play(self):
        self._call(MPRIS_PLAYER_IFACE, 'Play')


    def seek(self, offset):
        """Seek relative to the current position, offset in microseconds."""
        self._call(MPRIS_PLAYER_IFACE, 'Seek', offset, signature='x')


    def set_position(self, position):
        """
        Jump to an absolute position (microseconds) in the current track.

        SetPosition needs the id of the current track; when the player does
        not report one there is nothing to seek in and no call is made.
        """
        track_id = self.get_metadata().track_id
        if track_id is None:
            logger.debug("%s has no current track, not setting position", self.name)
            return
        self._call(MPRIS_PLAYER_IFACE, 'SetPosition', track_id, position, signature='ox')


    def open_uri(self, uri):
        self._call(MPRIS_PLAYER_IFACE, 'OpenUri', uri, signature='s')

    # --- Properties ---
    def get_properties(self):
        props = self.connection.get_all_properties(self.name, MPRIS_OBJECT_PATH, MPRIS_PLAYER_IFACE)
        return PlayerProperties.from_mapping(props)


    def get_metadata(self):
        val = self._get_property(MPRIS_PLAYER_IFACE, 'Metadata')
        if not isinstance(val, dict):
            raise TransportError(f"Metadata of {self.name} is not a dictionary")
        return PlayerMetadata.from_mapping(val)


    def get_playback_status(self):
        # "Playing", "Paused", "Stopped"
        return PlaybackStatus.decode(self._get_property(MPRIS_PLAYER_IFACE, 'PlaybackStatus'))


    def get_loop_status(self):
        # "None", "Track", "Playlist"
        return LoopStatus.decode(self._get_property(MPRIS_PLAYER_IFACE, 'LoopStatus'))


    def set_loop_status(self, status):
        self._set_property(MPRIS_PLAYER_IFACE, 'LoopStatus', status.encode())


    def get_volume(self):
        val = to_float(self._get_property(MPRIS_PLAYER_IFACE, 'Volume'))
        if val is None or not math.isfinite(val):
            raise TransportError(f"Volume of {self.name} is not a number")
        return val


    def set_volume(self, volume):
        self._set_property(MPRIS_PLAYER_IFACE, 'Volume', float(volume))


    def set_rate(self, rate):
        self._set_property(MPRIS_PLAYER_IFACE, 'Rate', float(rate))


    def set_shuffle(self, enabled):
        self._set_property(MPRIS_PLAYER_IFACE, 'Shuffle', bool(enabled))

    # ==========================================
    # org.mpris.MediaPlayer2.TrackList (TrackList Interface)
    # ==========================================

    def get_tracklist_properties(self):
        props = self.connection.get_all_properties(self.name, MPRIS_OBJECT_PATH, MPRIS_TRACKLIST_IFACE)
        return TrackListProperties.from_mapping(props)


    def _editable_tracks(self):
        # Tracks of the list, or None when the player refuses edits
        props = self.get_tracklist_properties()
        if not props.can_edit_tracks:
            logger.debug("Track list of %s is not editable", self.name)
            return None
        return props.tracks or []


    def add_track(self, uri, after=NO_TRACK, set_as_current=False):
        """
        Insert `uri` after the track `after`; NO_TRACK puts it at the start.

        Nothing is sent when the track list cannot be edited or `after` is
        not one of its tracks.
        """
        tracks = self._editable_tracks()
        if tracks is None or (after != NO_TRACK and after not in tracks):
            return
        self._call(MPRIS_TRACKLIST_IFACE, 'AddTrack', uri, after, bool(set_as_current), signature='sob')


    def remove_track(self, track_id):
        tracks = self._editable_tracks()
        if tracks is None or track_id not in tracks:
            return
        self._call(MPRIS_TRACKLIST_IFACE, 'RemoveTrack', track_id, signature='o')


    def go_to(self, track_id):
        """Skip to `track_id`; ignored when it is not in the track list."""
        tracks = self.get_tracklist_properties().tracks or []
        if track_id not in tracks:
            logger.debug("%s is not in the track list of %s", track_id, self.name)
            return
        self._call(MPRIS_TRACKLIST_IFACE, 'GoTo', track_id, signature='o')


    def get_tracks_metadata(self, track_ids):
        """Metadata for the given ids, skipping ids not in the track list."""
        tracks = self.get_tracklist_properties().tracks or []
        wanted = [track_id for track_id in track_ids if track_id in tracks]
        if not wanted:
            return []
        reply = self._call(MPRIS_TRACKLIST_IFACE, 'GetTracksMetadata', wanted, signature='ao')
        if not isinstance(reply, list) or not all(isinstance(item, dict) for item in reply):
            raise TransportError(f"Track metadata of {self.name} is not a list of dictionaries")
        return [PlayerMetadata.from_mapping(item) for item in reply]
