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


from typing import Any


# =====
def yaml_merge(dest: dict[str, Any], src: (dict[str, Any] | None), source_name: str="") -> None:
    """ Recursively merges the src tree into the dest tree in place """

    if dest is None:
        raise ValueError(f"Could not merge {source_name or 'the source'} into None")
    if src is None:
        return
    if not isinstance(src, dict):
        raise ValueError(f"The {source_name or 'source'} must be a dictionary, not {type(src).__name__}")

    for (key, value) in src.items():
        if isinstance(value, dict) and isinstance(dest.get(key), dict):
            yaml_merge(dest[key], value, source_name)
        else:
            dest[key] = value
