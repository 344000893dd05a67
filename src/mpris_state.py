"""
Where the last active player is remembered between invocations.

The state directory can be overridden with MPRISCTL_STATE_DIR; otherwise it
follows the XDG base directory layout ($XDG_STATE_HOME/mprisctl, falling back
to ~/.local/state/mprisctl).
"""
import logging
import os

APP_NAME = 'mprisctl'
ACTIVE_PLAYER_FILE = 'active_player'

logger = logging.getLogger("mpris.state")


def state_dir():
    override = os.environ.get('MPRISCTL_STATE_DIR')
    if override:
        return override
    base = os.environ.get('XDG_STATE_HOME') or os.path.join(os.path.expanduser('~'), '.local', 'state')
    return os.path.join(base, APP_NAME)


def active_player_path():
    return os.path.join(state_dir(), ACTIVE_PLAYER_FILE)


def load_active_player(path=None):
    """Returns the stored player name, or None if nothing was stored yet."""
    path = path or active_player_path()
    if not os.path.exists(path):
        return None
    try:
        with open(path, encoding='utf-8') as f:
            name = f.read().strip()
    except UnicodeDecodeError:
        logger.warning("Ignoring unreadable active player file %s", path)
        return None
    logger.debug("Loaded active player %r from %s", name, path)
    return name or None


def save_active_player(name, path=None):
    path = path or active_player_path()
    if load_active_player(path) == name:
        return
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(name)
    logger.debug("Saved active player %r to %s", name, path)
