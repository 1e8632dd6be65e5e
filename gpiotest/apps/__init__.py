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


import sys
import os
import errno
import argparse
import logging
import logging.config

from typing import NoReturn

import pygments
import pygments.lexers.data
import pygments.formatters

from ..yamlconf import ConfigError
from ..yamlconf import make_config
from ..yamlconf import Section
from ..yamlconf import Option
from ..yamlconf import build_raw_from_options
from ..yamlconf.dumper import make_config_dump
from ..yamlconf.loader import load_yaml_file
from ..yamlconf.merger import yaml_merge

from ..validators.basic import valid_stripped_string_not_empty
from ..validators.basic import valid_bool
from ..validators.basic import valid_int_f1

from ..validators.os import valid_abs_path
from ..validators.os import valid_abs_file

from ..validators.hw import valid_gpio_chip_label
from ..validators.hw import valid_gpio_buffer_size


# =====
class ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        # Usage goes to stdout and the exit code is -EINVAL for any bad argument
        self.print_help(sys.stdout)
        print(f"\nError: {message}", flush=True)
        raise SystemExit(-errno.EINVAL)


def init(
    prog: (str | None)=None,
    description: (str | None)=None,
    add_help: bool=True,
    cli_logging: bool=False,
    argv: (list[str] | None)=None,
) -> tuple[argparse.ArgumentParser, list[str], Section]:

    argv = (argv or sys.argv)
    assert len(argv) > 0

    parser = ArgumentParser(
        prog=(prog or argv[0]),
        description=description,
        add_help=add_help,
    )
    parser.add_argument("--config", default=None, type=valid_abs_file,
                        help="Set config file path", metavar="<file>")
    parser.add_argument("--set-options", default=[], nargs="+",
                        help="Override config options list (like sec/sub/opt=value)", metavar="<k=v>")
    parser.add_argument("--dump-config", action="store_true",
                        help="View current configuration (include all overrides)")
    (options, remaining) = parser.parse_known_args(argv)

    config = _init_config(options.config, options.set_options)
    if options.dump_config:
        _dump_config(config)
        raise SystemExit()

    logging.captureWarnings(True)
    logging.config.dictConfig(config.logging)
    if cli_logging:
        logging.getLogger().handlers[0].setFormatter(logging.Formatter(
            "-- {levelname:>7} -- {message}",
            style="{",
        ))

    return (parser, remaining, config)


# =====
def _init_config(config_path: (str | None), override_options: list[str]) -> Section:
    raw_config: dict = {}
    if config_path:
        config_path = os.path.expanduser(config_path)
        try:
            raw_config = (load_yaml_file(config_path) or {})
        except Exception as ex:
            raise SystemExit(f"ConfigError: Can't read config file {config_path!r}:\n{ex}")
        if not isinstance(raw_config, dict):
            raise SystemExit(f"ConfigError: Top-level of the file {config_path!r} must be a dictionary")

    try:
        yaml_merge(raw_config, (raw_config.pop("override", {}) or {}), "override section")
        yaml_merge(raw_config, build_raw_from_options(override_options), "raw CLI options")
        return make_config(raw_config, _get_config_scheme())
    except (ConfigError, ValueError) as ex:
        raise SystemExit(f"ConfigError: {ex}")


def _dump_config(config: Section) -> None:
    dump = make_config_dump(config)
    if sys.stdout.isatty():
        dump = pygments.highlight(
            dump,
            pygments.lexers.data.YamlLexer(),
            pygments.formatters.TerminalFormatter(bg="dark"),  # pylint: disable=no-member
        )
    print(dump)


def _get_default_logging() -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "{asctime} {levelname:>7} --- {message}",
                "style": "{",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
                "formatter": "default",
            },
        },
        "root": {
            "level": "INFO",
            "handlers": ["console"],
        },
    }


def _get_config_scheme() -> dict:
    return {
        "logging": Option(_get_default_logging(), help="The logging.config.dictConfig() scheme"),

        "gpio": {
            "sysfs":       Option("/sys/class/gpio", type=valid_abs_path, unpack_as="sysfs_path",
                                  help="The GPIO sysfs class directory"),
            "label":       Option("greybus_gpio", type=valid_gpio_chip_label,
                                  help="The label of the GPIO controller under test"),
            "buffer_size": Option(8, type=valid_gpio_buffer_size,
                                  help="Max size of the direction, value and edge readbacks"),
        },

        "test": {
            "repeat":    Option(10, type=valid_int_f1,
                                help="How many times the repeated steps are issued"),
            "aggregate": Option(False, type=valid_bool,
                                help="Fail the case on any failed step instead of the last one only"),
            "tag":       Option("GPIO", type=valid_stripped_string_not_empty,
                                help="The tag of the report lines"),
        },
    }
