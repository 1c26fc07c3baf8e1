"""Where environment bindings come from and where they go.

The build host owns both sides. The ambient environment is only read, for
credentials and {VAR} expansion. Sinks are only written to.
"""

import os
from typing import AnyStr
from typing import Mapping
from typing import MutableMapping
from typing import Optional


class AmbientEnvironment:
    """Read-only view of the environment the build started with."""
    def __init__(self, env: Optional[Mapping] = None):
        self._env = dict(env or {})

    @classmethod
    def from_os(cls):
        return cls(os.environ)

    def __contains__(self, key):
        return key in self._env

    def __getitem__(self, key):
        return self._env[key]

    def get(self, key: AnyStr, default=None):
        return self._env.get(key, default)


class EnvironmentSink:
    def set(self, key: AnyStr, value: AnyStr) -> None:
        raise NotImplementedError()


class DictSink(EnvironmentSink):
    """Writes bindings into a caller supplied mapping. Last write wins."""
    def __init__(self, target: Optional[MutableMapping] = None):
        self.target = {} if target is None else target

    def set(self, key, value):
        self.target[key] = value


class OsEnvironSink(EnvironmentSink):
    @staticmethod
    def set(key, value):
        os.environ[key] = value
