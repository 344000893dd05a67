"""
Typed access to loosely typed property mappings.

A player advertises its properties as a dictionary of variants. Each field we
care about is pulled out with `extract_value` and one of the converters below;
a missing key or a value of the wrong type simply yields None so one bad
property never spoils the rest of the fetch.
"""

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def to_bool(value):
    if isinstance(value, bool):
        return value
    return None


def to_int(value):
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if not INT64_MIN <= value <= INT64_MAX:
        return None
    return int(value)


def to_float(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def to_str(value):
    if isinstance(value, str):
        return str(value)
    return None


def to_str_list(value):
    if not isinstance(value, (list, tuple)):
        return None
    if not all(isinstance(item, str) for item in value):
        return None
    return [str(item) for item in value]


def to_object_path(value):
    # Track ids are object paths; players that send them as plain strings
    # are accepted as long as the value is path shaped.
    if isinstance(value, str) and value.startswith('/'):
        return str(value)
    return None


def extract_value(props, key, convert):
    """
    Look up `key` in `props` and convert it.

    Args:
        props: mapping of property name to value, or None
        key: canonical property name, e.g. 'Volume' or 'xesam:title'
        convert: one of the to_* converters of this module

    Returns:
        The converted value, or None if the key is missing or the value does
        not have the expected type.
    """
    if not props or key not in props:
        return None
    return convert(props[key])
