"""Shared fixtures: an in-memory stand-in for the session bus connection."""

import pytest

from mpris_errors import TransportError

SPOTIFY = "org.mpris.MediaPlayer2.spotify"
VLC = "org.mpris.MediaPlayer2.vlc"
ROOT_IFACE = "org.mpris.MediaPlayer2"
PLAYER_IFACE = "org.mpris.MediaPlayer2.Player"
TRACKLIST_IFACE = "org.mpris.MediaPlayer2.TrackList"


class FakeConnection:
    """Answers property reads from a dict and records every call and write."""

    def __init__(self, services=(), properties=None, replies=None, fail=False):
        self.services = list(services)
        self.properties = properties or {}
        self.replies = replies or {}
        self.calls = []
        self.fail = fail

    def _check(self):
        if self.fail:
            raise TransportError("Connection lost")

    def list_services(self):
        self._check()
        return list(self.services)

    def call(self, service, path, interface, method, *args, signature=None):
        self._check()
        self.calls.append((service, path, interface, method, args, signature))
        return self.replies.get(method)

    def get_all_properties(self, service, path, interface):
        self._check()
        return dict(self.properties.get((service, interface), {}))

    def get_property(self, service, path, interface, name):
        props = self.get_all_properties(service, path, interface)
        if name not in props:
            raise TransportError(f"No such property '{name}'")
        return props[name]

    def set_property(self, service, path, interface, name, value):
        self._check()
        self.calls.append((service, path, "org.freedesktop.DBus.Properties", "Set",
                           (interface, name, value), "ssv"))

    def methods(self):
        """Names of the methods called so far, in order."""
        return [call[3] for call in self.calls]


@pytest.fixture
def connection():
    """Two running players plus unrelated bus names, listed unsorted."""
    return FakeConnection(
        services=[
            "org.freedesktop.DBus",
            VLC,
            ":1.42",
            SPOTIFY,
            "org.mpris.MediaPlayer2",
        ],
        properties={
            (SPOTIFY, ROOT_IFACE): {
                "Identity": "Spotify",
                "CanRaise": True,
                "CanQuit": False,
                "SupportedUriSchemes": ["spotify"],
            },
            (SPOTIFY, PLAYER_IFACE): {
                "PlaybackStatus": "Playing",
                "LoopStatus": "Playlist",
                "Volume": 0.5,
                "Shuffle": True,
                "Position": 12000000,
                "Metadata": {
                    "mpris:trackid": "/com/spotify/track/4uLU6hMCjMI75M1A2tKUQC",
                    "mpris:length": 213000000,
                    "xesam:title": "Never Gonna Give You Up",
                    "xesam:artist": ["Rick Astley"],
                    "xesam:trackNumber": 1,
                },
            },
            (SPOTIFY, TRACKLIST_IFACE): {
                "Tracks": ["/com/spotify/track/1", "/com/spotify/track/2"],
                "CanEditTracks": True,
            },
            (VLC, PLAYER_IFACE): {
                "PlaybackStatus": "Stopped",
                "Metadata": {},
            },
            (VLC, TRACKLIST_IFACE): {
                "Tracks": ["/org/videolan/vlc/playlist/3"],
                "CanEditTracks": False,
            },
        },
    )
