"""Turns parameter names into environment variable names.

Letters are upper-cased, digits kept, and every other character becomes an
underscore. Runs are not collapsed, so "*X()_test" becomes "_X___TEST".

How much of the parameter name is used depends on the naming mode:

    basename   anything after the last '/'
    relative   anything after the lookup path
    absolute   the whole name, minus the leading '/'

Names from a flat listing (no path) are always used whole.
"""

import string
from typing import AnyStr
from typing import Optional

import aenum


@aenum.unique
class NamingMode(aenum.Enum):
    Unspecified = ""
    Basename = "basename"
    Relative = "relative"
    Absolute = "absolute"


def naming_mode(x) -> NamingMode:
    """Parses a naming setting. Anything unrecognized is Unspecified."""
    if isinstance(x, NamingMode):
        return x
    if x is None:
        return NamingMode.Unspecified
    try:
        return NamingMode(str(x).strip().lower())
    except ValueError:
        return NamingMode.Unspecified


_letters = frozenset(string.ascii_letters)
_digits = frozenset(string.digits)


def start_offset(name: AnyStr, path: Optional[AnyStr], naming: NamingMode) -> int:
    if path is None:
        start = 0
    elif naming is NamingMode.Relative:
        start = len(path) if len(name) > len(path) else 0
    elif naming is NamingMode.Absolute:
        start = 1
    else:
        start = name.rfind("/") + 1
    # Skip a separator left behind by a path without a trailing slash.
    if start < len(name) and name[start] == "/":
        start += 1
    return start


def translate(name: AnyStr, path: Optional[AnyStr] = None, naming: NamingMode = NamingMode.Unspecified) -> AnyStr:
    chars = []
    for c in name[start_offset(name, path, naming):]:
        if c in _letters:
            chars.append(c.upper())
        elif c in _digits:
            chars.append(c)
        else:
            chars.append("_")
    return "".join(chars)
