"""
Read-only snapshots of the properties a player advertises.

Each record is built from the dictionary returned by a single GetAll (or, for
track metadata, the Metadata property). The FIELDS table of a record maps the
canonical MPRIS name to the attribute holding it and the converter used to
read it; the same table drives display so both stay in sync.
"""
from dataclasses import dataclass
from typing import List, Optional

from mpris_values import (
    extract_value,
    to_bool,
    to_float,
    to_int,
    to_object_path,
    to_str,
    to_str_list,
)


def format_value(value):
    """Render a field value for display."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, list):
        return ", ".join(value)
    return str(value)


class _Projection:

    FIELDS = ()

    @classmethod
    def from_mapping(cls, props):
        return cls(**{
            attr: extract_value(props, name, convert)
            for name, attr, convert in cls.FIELDS
        })


    @classmethod
    def field_names(cls):
        return [name for name, _, _ in cls.FIELDS]


    def get_field(self, name):
        """Display string for one MPRIS field name, None if absent or unknown."""
        for field_name, attr, _ in self.FIELDS:
            if field_name == name:
                value = getattr(self, attr)
                return None if value is None else format_value(value)
        return None


    def present_fields(self):
        """(name, display string) for every field the player advertised."""
        result = []
        for name, attr, _ in self.FIELDS:
            value = getattr(self, attr)
            if value is not None:
                result.append((name, format_value(value)))
        return result


@dataclass(frozen=True)
class RootProperties(_Projection):
    """org.mpris.MediaPlayer2"""
    identity: Optional[str] = None
    desktop_entry: Optional[str] = None
    fullscreen: Optional[bool] = None
    has_track_list: Optional[bool] = None
    supported_mime_types: Optional[List[str]] = None
    supported_uri_schemes: Optional[List[str]] = None
    can_set_fullscreen: Optional[bool] = None
    can_quit: Optional[bool] = None
    can_raise: Optional[bool] = None

    FIELDS = (
        ('Identity', 'identity', to_str),
        ('DesktopEntry', 'desktop_entry', to_str),
        ('Fullscreen', 'fullscreen', to_bool),
        ('HasTrackList', 'has_track_list', to_bool),
        ('SupportedMimeTypes', 'supported_mime_types', to_str_list),
        ('SupportedUriSchemes', 'supported_uri_schemes', to_str_list),
        ('CanSetFullscreen', 'can_set_fullscreen', to_bool),
        ('CanQuit', 'can_quit', to_bool),
        ('CanRaise', 'can_raise', to_bool),
    )


@dataclass(frozen=True)
class PlayerProperties(_Projection):
    """
    org.mpris.MediaPlayer2.Player

    playback_status and loop_status keep the raw string the player sent; use
    MprisPlayer.get_playback_status() / get_loop_status() for the enums.
    """
    playback_status: Optional[str] = None
    loop_status: Optional[str] = None
    shuffle: Optional[bool] = None
    volume: Optional[float] = None
    position: Optional[int] = None  # microseconds
    rate: Optional[float] = None
    minimum_rate: Optional[float] = None
    maximum_rate: Optional[float] = None
    can_control: Optional[bool] = None
    can_play: Optional[bool] = None
    can_pause: Optional[bool] = None
    can_seek: Optional[bool] = None
    can_go_next: Optional[bool] = None
    can_go_previous: Optional[bool] = None

    FIELDS = (
        ('PlaybackStatus', 'playback_status', to_str),
        ('LoopStatus', 'loop_status', to_str),
        ('Shuffle', 'shuffle', to_bool),
        ('Volume', 'volume', to_float),
        ('Position', 'position', to_int),
        ('Rate', 'rate', to_float),
        ('MinimumRate', 'minimum_rate', to_float),
        ('MaximumRate', 'maximum_rate', to_float),
        ('CanControl', 'can_control', to_bool),
        ('CanPlay', 'can_play', to_bool),
        ('CanPause', 'can_pause', to_bool),
        ('CanSeek', 'can_seek', to_bool),
        ('CanGoNext', 'can_go_next', to_bool),
        ('CanGoPrevious', 'can_go_previous', to_bool),
    )


@dataclass(frozen=True)
class PlayerMetadata(_Projection):
    """Metadata of the current track (mpris: and xesam: keys)."""
    art_url: Optional[str] = None
    length: Optional[int] = None  # microseconds
    track_id: Optional[str] = None
    album: Optional[str] = None
    album_artist: Optional[List[str]] = None
    artist: Optional[List[str]] = None
    as_text: Optional[str] = None
    audio_bpm: Optional[int] = None
    auto_rating: Optional[float] = None
    comment: Optional[List[str]] = None
    composer: Optional[List[str]] = None
    content_created: Optional[str] = None
    disc_number: Optional[int] = None
    first_used: Optional[str] = None
    genre: Optional[List[str]] = None
    last_used: Optional[str] = None
    lyricist: Optional[List[str]] = None
    title: Optional[str] = None
    track_number: Optional[int] = None
    url: Optional[str] = None
    use_count: Optional[int] = None
    user_rating: Optional[float] = None

    FIELDS = (
        ('mpris:artUrl', 'art_url', to_str),
        ('mpris:length', 'length', to_int),
        ('mpris:trackid', 'track_id', to_object_path),
        ('xesam:album', 'album', to_str),
        ('xesam:albumArtist', 'album_artist', to_str_list),
        ('xesam:artist', 'artist', to_str_list),
        ('xesam:asText', 'as_text', to_str),
        ('xesam:audioBPM', 'audio_bpm', to_int),
        ('xesam:autoRating', 'auto_rating', to_float),
        ('xesam:comment', 'comment', to_str_list),
        ('xesam:composer', 'composer', to_str_list),
        ('xesam:contentCreated', 'content_created', to_str),
        ('xesam:discNumber', 'disc_number', to_int),
        ('xesam:firstUsed', 'first_used', to_str),
        ('xesam:genre', 'genre', to_str_list),
        ('xesam:lastUsed', 'last_used', to_str),
        ('xesam:lyricist', 'lyricist', to_str_list),
        ('xesam:title', 'title', to_str),
        ('xesam:trackNumber', 'track_number', to_int),
        ('xesam:url', 'url', to_str),
        ('xesam:useCount', 'use_count', to_int),
        ('xesam:userRating', 'user_rating', to_float),
    )


@dataclass(frozen=True)
class TrackListProperties(_Projection):
    """org.mpris.MediaPlayer2.TrackList"""
    tracks: Optional[List[str]] = None
    can_edit_tracks: Optional[bool] = None

    FIELDS = (
        ('Tracks', 'tracks', to_str_list),
        ('CanEditTracks', 'can_edit_tracks', to_bool),
    )
