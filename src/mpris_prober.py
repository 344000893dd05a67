import logging

MPRIS_SERVICE_PREFIX = 'org.mpris.MediaPlayer2.'

logger = logging.getLogger("mpris.prober")


def is_player(service_name):
    return service_name.startswith(MPRIS_SERVICE_PREFIX)


def find_players(connection):
    """
    Finds all running media players that implement the MPRIS2 interface.

    Notice:
    Players are returned sorted by their bus name rather than in the order the
    bus lists them, so indices into the result are reproducible between runs
    as long as the same players are running.
    """
    playernames = sorted(name for name in connection.list_services() if is_player(name))
    logger.debug("Found %d player(s): %s", len(playernames), ", ".join(playernames))
    return playernames
