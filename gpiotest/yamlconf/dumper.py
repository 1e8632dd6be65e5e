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


import textwrap

from typing import Generator
from typing import Any

import yaml

from . import Section


# =====
def make_config_dump(config: Section, indent: int=4) -> str:
    return "\n".join(_dump_section(config, indent, 0)).strip() + "\n"


def _dump_section(section: Section, indent: int, level: int) -> Generator[str, None, None]:
    prefix = " " * indent * level
    for (key, value) in sorted(section.items()):
        if isinstance(value, Section):
            yield f"{prefix}{key}:"
            yield from _dump_section(value, indent, level + 1)
            yield ""
            continue

        default = section._get_default(key)  # pylint: disable=protected-access
        comment = section._get_help(key)  # pylint: disable=protected-access
        if value != default:
            yield _dump_option(key, default, indent, f"{prefix}# ", comment)
            comment = ""
        yield _dump_option(key, value, indent, prefix, comment)


def _dump_option(key: str, value: Any, indent: int, prefix: str, comment: str) -> str:
    text = yaml.safe_dump(value, indent=indent, allow_unicode=True, default_flow_style=False)
    text = text.replace("\n...\n", "").strip()
    if isinstance(value, (dict, list)) and value:
        text = "\n" + textwrap.indent(text, " " * indent)
    else:
        text = " " + text

    lines = textwrap.indent(f"{key}:{text}", prefix).split("\n")
    if comment:
        lines[0] += f"  # {comment}"
    return "\n".join(lines)
