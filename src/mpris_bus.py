import logging

import dbus

from mpris_errors import TransportError

DBUS_PROPERTIES_IFACE = 'org.freedesktop.DBus.Properties'

logger = logging.getLogger("mpris.bus")


def unwrap(val):
    """Convert dbus-python values into plain Python values."""
    if isinstance(val, dbus.Boolean): return bool(val)
    if isinstance(val, (dbus.String, dbus.ObjectPath, dbus.Signature)): return str(val)
    if isinstance(val, (dbus.Byte, dbus.Int16, dbus.Int32, dbus.Int64, dbus.UInt16, dbus.UInt32, dbus.UInt64)): return int(val)
    if isinstance(val, dbus.Double): return float(val)
    if isinstance(val, (dbus.Array, list)): return [unwrap(x) for x in val]
    if isinstance(val, (dbus.Struct, tuple)): return tuple(unwrap(x) for x in val)
    if isinstance(val, (dbus.Dictionary, dict)): return {unwrap(k): unwrap(v) for k, v in val.items()}
    return val


class DBusConnection:
    """
    Thin request/response layer over a dbus-python bus.

    A proxy is resolved for every call; nothing is cached apart from the bus
    itself, which may be shared freely between players.
    """
    def __init__(self, bus):
        self.bus = bus


    @classmethod
    def session(cls):
        try:
            return cls(dbus.SessionBus())
        except dbus.exceptions.DBusException as e:
            raise TransportError(e.get_dbus_message() or str(e)) from e


    def _interface(self, service, path, interface):
        obj = self.bus.get_object(service, path, introspect=False)
        return dbus.Interface(obj, interface)


    def list_services(self):
        try:
            names = self.bus.list_names()
        except dbus.exceptions.DBusException as e:
            raise TransportError(e.get_dbus_message() or str(e)) from e
        return [str(name) for name in names]


    def call(self, service, path, interface, method, *args, signature=None):
        logger.debug("%s %s.%s%r", service, interface, method, args)
        try:
            iface = self._interface(service, path, interface)
            reply = getattr(iface, method)(*args, signature=signature)
        except dbus.exceptions.DBusException as e:
            raise TransportError(e.get_dbus_message() or str(e)) from e
        return unwrap(reply)


    def get_all_properties(self, service, path, interface):
        return self.call(service, path, DBUS_PROPERTIES_IFACE, 'GetAll',
                         interface, signature='s')


    def get_property(self, service, path, interface, name):
        return self.call(service, path, DBUS_PROPERTIES_IFACE, 'Get',
                         interface, name, signature='ss')


    def set_property(self, service, path, interface, name, value):
        self.call(service, path, DBUS_PROPERTIES_IFACE, 'Set',
                  interface, name, value, signature='ssv')
