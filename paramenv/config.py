"""Values passed between the provider, the fetcher and the caller."""

from typing import Any
from typing import AnyStr
from typing import NamedTuple
from typing import Optional
from typing import Tuple

from paramenv import naming
from paramenv.naming import NamingMode


class Result(NamedTuple):
    """Outcome of a single remote operation.

    Providers never raise for remote errors. They return a Result and the
    fetch loops decide whether to continue or abandon.
    """
    is_ok: bool
    value: Optional[Any]
    error: Optional[Exception]

    @classmethod
    def ok(cls, value):
        return cls(
            is_ok=True,
            value=value,
            error=None,
        )

    @classmethod
    def failed(cls, error):
        return cls(
            is_ok=False,
            value=None,
            error=error,
        )


class Parameter(NamedTuple):
    name: AnyStr
    value: AnyStr
    type: AnyStr = "String"

    @classmethod
    def from_response(cls, p):
        return cls(
            name=p["Name"],
            value=p.get("Value", ""),
            type=p.get("Type", "String"),
        )


def parse_name_prefixes(x) -> Tuple[AnyStr, ...]:
    """Turns a comma delimited string into an ordered set of prefixes.

    Blank entries are dropped, so an empty or blank string means no filter.
    A list or tuple of strings is accepted as already split.
    """
    if x is None:
        return ()
    if isinstance(x, str):
        x = x.split(",")
    prefixes = []
    for p in x:
        p = p.strip()
        if p and p not in prefixes:
            prefixes.append(p)
    return tuple(prefixes)


class FetchRequest(NamedTuple):
    path: Optional[AnyStr] = None
    recursive: bool = False
    naming: NamingMode = NamingMode.Unspecified
    name_prefixes: Tuple[AnyStr, ...] = ()

    @classmethod
    def from_settings(cls, path=None, recursive=False, naming_mode=None, name_prefixes=None):
        return cls(
            path=path or None,
            recursive=bool(recursive),
            naming=naming.naming_mode(naming_mode),
            name_prefixes=parse_name_prefixes(name_prefixes),
        )

    @property
    def is_by_path(self):
        return bool(self.path)
