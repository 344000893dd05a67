class MprisError(Exception):
    """Base class for every error reported by the MPRIS client."""


class NoPlayerFound(MprisError):

    def __init__(self):
        super().__init__("No player found")


class PlayerNotFound(MprisError):

    def __init__(self, name):
        self.name = name
        super().__init__(f"Player '{name}' not found")


class TransportError(MprisError):
    """The bus call failed or returned something unusable."""

    def __init__(self, detail):
        self.detail = detail
        super().__init__(f"DBus error: {detail}")


class EnumDecodeError(MprisError, ValueError):
    """A status property held a string outside its closed set."""

    def __init__(self, value, enum_cls):
        self.value = value
        self.enum_cls = enum_cls
        super().__init__(f"Invalid {enum_cls.__name__} value: {value!r}")
