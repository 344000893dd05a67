"""Tests for player discovery and the selection state machine."""

from unittest.mock import patch

import pytest

from conftest import ROOT_IFACE, SPOTIFY, VLC, FakeConnection
from mpris_errors import NoPlayerFound, PlayerNotFound, TransportError
from mpris_player import MprisPlayer
from mpris_prober import find_players, is_player
from mpris_root import MprisRoot


def _root(count):
    names = [f"org.mpris.MediaPlayer2.player{i:02d}" for i in range(count)]
    return MprisRoot(FakeConnection(services=reversed(names)))


class TestFindPlayers:
    """Discovery keeps only MPRIS services, sorted by name."""

    def test_filters_and_sorts(self, connection):
        assert find_players(connection) == [SPOTIFY, VLC]

    def test_prefix_needs_the_dot(self):
        assert is_player("org.mpris.MediaPlayer2.mpv")
        assert is_player("org.mpris.MediaPlayer2.firefox.instance_1_84")
        assert not is_player("org.mpris.MediaPlayer2")
        assert not is_player("org.freedesktop.DBus")

    def test_nothing_running(self):
        assert find_players(FakeConnection(services=["org.freedesktop.DBus"])) == []

    def test_list_failure_propagates(self):
        with pytest.raises(TransportError):
            find_players(FakeConnection(fail=True))


class TestSelection:
    """Selecting players by name and cycling through them."""

    def test_first_player_selected(self, connection):
        root = MprisRoot(connection)
        assert root.list_players() == [SPOTIFY, VLC]
        assert root.player_index == 0
        assert root.current_player().name == SPOTIFY

    def test_next_wraps_around(self, connection):
        root = MprisRoot(connection)
        root.select_next()
        assert root.current_player().name == VLC
        root.select_next()
        assert root.current_player().name == SPOTIFY

    def test_previous_from_first_wraps_to_last(self, connection):
        root = MprisRoot(connection)
        root.select_previous()
        assert root.player_index == 1
        assert root.current_player().name == VLC

    @pytest.mark.parametrize("count", [1, 2, 5])
    def test_next_cycle_closes(self, count):
        root = _root(count)
        for start in range(count):
            root.select(root.players[start])
            for _ in range(count):
                root.select_next()
            assert root.player_index == start

    @pytest.mark.parametrize("count", [1, 3, 4])
    def test_previous_undoes_next(self, count):
        root = _root(count)
        for start in range(count):
            root.select(root.players[start])
            root.select_next()
            assert root.player_index == (start + 1) % count
            root.select_previous()
            assert root.player_index == start

    def test_select_by_name(self, connection):
        root = MprisRoot(connection)
        root.select(VLC)
        assert root.player_index == 1
        assert root.current_player() == MprisPlayer(connection, VLC)

    def test_select_unknown_keeps_selection(self, connection):
        root = MprisRoot(connection)
        root.select(VLC)
        with pytest.raises(PlayerNotFound) as excinfo:
            root.select("org.mpris.MediaPlayer2.rhythmbox")
        assert excinfo.value.name == "org.mpris.MediaPlayer2.rhythmbox"
        assert str(excinfo.value) == "Player 'org.mpris.MediaPlayer2.rhythmbox' not found"
        assert root.player_index == 1
        assert root.current_player().name == VLC

    def test_select_needs_exact_name(self, connection):
        root = MprisRoot(connection)
        with pytest.raises(PlayerNotFound):
            root.select("spotify")
        with pytest.raises(PlayerNotFound):
            root.select("org.mpris.MediaPlayer2.Spotify")

    def test_list_players_is_a_copy(self, connection):
        root = MprisRoot(connection)
        root.list_players().clear()
        assert root.list_players() == [SPOTIFY, VLC]

    def test_handle_shares_connection(self, connection):
        root = MprisRoot(connection)
        assert root.current_player().connection is connection


class TestEmpty:
    """No players running."""

    def test_no_current_player(self):
        root = MprisRoot(FakeConnection(services=["org.freedesktop.DBus"]))
        assert root.player_index is None
        assert root.list_players() == []
        with pytest.raises(NoPlayerFound, match="No player found"):
            root.current_player()

    def test_cycling_is_noop(self):
        root = MprisRoot(FakeConnection())
        root.select_next()
        root.select_previous()
        assert root.player_index is None

    def test_root_operations_need_a_player(self):
        root = MprisRoot(FakeConnection())
        with pytest.raises(NoPlayerFound):
            root.raise_player()
        with pytest.raises(NoPlayerFound):
            root.quit()
        with pytest.raises(NoPlayerFound):
            root.get_properties()

    def test_session_bus_by_default(self):
        pytest.importorskip("dbus")
        fake = FakeConnection()
        with patch("mpris_bus.DBusConnection.session", return_value=fake) as session:
            root = MprisRoot()
        session.assert_called_once_with()
        assert root.connection is fake


class TestDelegation:
    """Root-level operations go to the selected player."""

    def test_raise_and_quit(self, connection):
        root = MprisRoot(connection)
        root.select(VLC)
        root.raise_player()
        root.quit()
        assert [(c[0], c[2], c[3]) for c in connection.calls] == [
            (VLC, ROOT_IFACE, "Raise"),
            (VLC, ROOT_IFACE, "Quit"),
        ]

    def test_get_properties(self, connection):
        props = MprisRoot(connection).get_properties()
        assert props.identity == "Spotify"
