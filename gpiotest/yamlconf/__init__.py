# ========================================================================== #
#                                                                            #
#    GPIOTEST - Greybus GPIO test tool.                                      #
#                                                                            #
#    Copyright (C) 2018-2023  Maxim Devaev <mdevaev@gmail.com>               #
#                                                                            #
#    This program is free software: you can redistribute it and/or modify    #
#    it under the terms of the GNU General Public License as published by    #
#    the Free Software Foundation, either version 3 of the License, or       #
#    (at your option) any later version.                                     #
#                                                                            #
#    This program is distributed in the hope that it will be useful,         #
#    but WITHOUT ANY WARRANTY; without even the implied warranty of          #
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the           #
#    GNU General Public License for more details.                            #
#                                                                            #
#    You should have received a copy of the GNU General Public License       #
#    along with this program.  If not, see <https://www.gnu.org/licenses/>.  #
#                                                                            #
# ========================================================================== #


import json
import dataclasses

from typing import Callable
from typing import Any


# =====
class ConfigError(ValueError):
    pass


# =====
_JSON_KEYWORDS = frozenset(["true", "false", "null"])
_JSON_PREFIXES = ("{", "[", "\"")


def build_raw_from_options(options: list[str]) -> dict[str, Any]:
    raw: dict[str, Any] = {}
    for option in options:
        (key, sep, value) = option.partition("=")
        path = [sub.strip() for sub in key.split("/") if sub.strip()]
        if len(path) == 0:
            raise ConfigError(f"Empty option key (required 'key=value' instead of {option!r})")
        if not sep:
            raise ConfigError(f"No value for key {key!r}")

        section = raw
        for sub in path[:-1]:
            section = section.setdefault(sub, {})
        section[path[-1]] = _parse_value(value)
    return raw


def _parse_value(value: str) -> Any:
    # Numbers, bools, null and JSON containers are decoded, anything else is a bare string
    value = value.strip()
    if value.lstrip("-").isdigit() or value in _JSON_KEYWORDS or value.startswith(_JSON_PREFIXES):
        return json.loads(value)
    return value


# =====
@dataclasses.dataclass(frozen=True)
class _OptionMeta:
    default: Any
    unpack_as: str
    help: str


class Section(dict):
    def __init__(self) -> None:
        dict.__init__(self)
        self.__meta: dict[str, _OptionMeta] = {}

    def _unpack(self) -> dict[str, Any]:
        unpacked: dict[str, Any] = {}
        for (key, value) in self.items():
            if isinstance(value, Section):
                unpacked[key] = value._unpack()  # pylint: disable=protected-access
            else:  # Option
                unpacked[self._get_unpack_as(key)] = value
        return unpacked

    def _set_meta(self, key: str, option: "Option") -> None:
        self.__meta[key] = _OptionMeta(
            default=option.default,
            unpack_as=option.unpack_as,
            help=option.help,
        )

    def _get_default(self, key: str) -> Any:
        return self.__meta[key].default

    def _get_unpack_as(self, key: str) -> str:
        return (self.__meta[key].unpack_as or key)

    def _get_help(self, key: str) -> str:
        return self.__meta[key].help

    def __getattribute__(self, key: str) -> Any:
        if key in self:
            return self[key]
        else:  # For pickling
            return dict.__getattribute__(self, key)


def _get_default_type(default: Any) -> Callable[[Any], Any]:
    return (str if default is None else type(default))


class Option:
    def __init__(
        self,
        default: Any,
        type: (Callable[[Any], Any] | None)=None,  # pylint: disable=redefined-builtin
        unpack_as: str="",
        help: str="",  # pylint: disable=redefined-builtin
    ) -> None:

        self.default = default
        self.type: Callable[[Any], Any] = (type or _get_default_type(default))
        self.unpack_as = unpack_as
        self.help = help

    def validate(self, value: Any, path: tuple[str, ...]) -> Any:
        try:
            return self.type(value)
        except (TypeError, ValueError) as err:
            raise ConfigError(f"Invalid value {value!r} for key {'/'.join(path)!r}: {err}")

    def __repr__(self) -> str:
        return f"<Option(default={self.default}, type={self.type}, unpack_as={self.unpack_as})>"


# =====
def make_config(raw: dict[str, Any], scheme: dict[str, Any], _keys: tuple[str, ...]=()) -> Section:
    if not isinstance(raw, dict):
        raise ConfigError(f"The node {('/'.join(_keys) or '/')!r} must be a dictionary")

    for key in raw:
        if key not in scheme:
            raise ConfigError(f"Unknown config key {'/'.join(_keys + (str(key),))!r}")

    config = Section()
    for (key, item) in scheme.items():
        path = _keys + (key,)
        if isinstance(item, Option):
            config[key] = item.validate(raw.get(key, item.default), path)
            config._set_meta(key, item)  # pylint: disable=protected-access
        elif isinstance(item, dict):
            config[key] = make_config(raw.get(key, {}), item, path)
        else:
            raise RuntimeError(f"Incorrect scheme definition for key {'/'.join(path)!r}:"
                               f" the value is {type(item)!r}, not dict() or Option()")
    return config
