import os
from typing import AnyStr
from typing import List

import aenum

from paramenv import converters


@aenum.unique
class Format(aenum.Enum):
    pass


def register_format(x):
    aenum.extend_enum(Format, x, x.lower())


settings_loader_by_format = {}


def register_settings_loader(format: Format, loader) -> None:
    settings_loader_by_format[format.value] = loader


format_by_suffix = {}


def register_file_formats(format: Format, suffixes: List[AnyStr]) -> None:
    for suffix in suffixes:
        format_by_suffix[suffix] = format


def format_for_filename(filename):
    _, suffix = os.path.splitext(filename)
    if suffix not in format_by_suffix:
        raise KeyError("suffix %r not known" % suffix)
    return format_by_suffix[suffix]


def settings_loader_for_filename(filename):
    return settings_loader_for_format(format_for_filename(filename))


def settings_loader_for_format(format):
    return settings_loader_by_format[format.value]


register_format("Json")
register_settings_loader(
    Format.Json,
    lambda x: converters.obj_from_json(converters.string_from_bytes(x, encoding='utf8'))
)
register_file_formats(Format.Json, [".json"])

register_format("Toml")
register_settings_loader(
    Format.Toml,
    lambda x: converters.obj_from_toml(converters.string_from_bytes(x, encoding='utf8'))
)
register_file_formats(Format.Toml, [".toml"])

register_format("Yaml")
register_settings_loader(
    Format.Yaml,
    lambda x: converters.obj_from_yaml(converters.string_from_bytes(x, encoding='utf8'))
)
register_file_formats(Format.Yaml, [".yaml", ".yml"])
