"""Turns the bytes of a settings file into Python objects."""

import json
from typing import Any
from typing import AnyStr

import toml

from paramenv.exceptions import LoadFailure


try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader

import yaml


def obj_from_json(x: AnyStr) -> Any:
    try:
        return json.loads(x)
    except Exception as e:
        raise LoadFailure(e)


def obj_from_toml(x: AnyStr) -> Any:
    try:
        return toml.loads(x)
    except Exception as e:
        raise LoadFailure(e)


def obj_from_yaml(x: AnyStr) -> Any:
    try:
        return yaml.load(x, Loader=Loader)
    except Exception as e:
        raise LoadFailure(e)


def string_from_bytes(x: bytes, encoding='utf8') -> AnyStr:
    try:
        return x.decode(encoding)
    except Exception as e:
        raise LoadFailure(e)
