import logging

from mpris_errors import NoPlayerFound, PlayerNotFound
from mpris_player import MprisPlayer
from mpris_prober import find_players

logger = logging.getLogger("mpris.root")


class MprisRoot:
    """
    Core Controller: discovers players once and tracks which one is selected.

    The list of players is fixed when the object is created. Only the
    selection changes afterwards, through select(), select_next() and
    select_previous(); the handle of the selected player is rebuilt each time.
    """
    def __init__(self, connection=None):
        if connection is None:
            from mpris_bus import DBusConnection
            connection = DBusConnection.session()
        self.connection = connection
        self.players = find_players(connection)
        self._player_index = None
        self._player = None
        if self.players:
            self.select(self.players[0])


    @property
    def player_index(self):
        return self._player_index


    def list_players(self):
        return list(self.players)


    def current_player(self):
        if self._player is None:
            raise NoPlayerFound()
        return self._player


    def select(self, name):
        """
        Make `name` the active player.

        Raises:
            PlayerNotFound: `name` is not one of the discovered players. The
                previous selection is kept.
        """
        try:
            index = self.players.index(name)
        except ValueError:
            raise PlayerNotFound(name) from None
        self._player_index = index
        self._player = MprisPlayer(self.connection, name)
        logger.debug("Selected player %s (%d/%d)", name, index + 1, len(self.players))


    def select_next(self):
        if self._player_index is None:
            return
        self.select(self.players[(self._player_index + 1) % len(self.players)])


    def select_previous(self):
        if self._player_index is None:
            return
        # Python's modulo is never negative, so index 0 wraps to the last player
        self.select(self.players[(self._player_index - 1) % len(self.players)])


    def get_properties(self):
        return self.current_player().get_root_properties()


    def raise_player(self):
        self.current_player().raise_player()


    def quit(self):
        self.current_player().quit()
