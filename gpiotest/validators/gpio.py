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

from . import check_string_in_list

from .basic import valid_number


# =====
class PinModes:
    SINGLE = "s"
    MULTIPLE = "m"
    ALL = "a"


class GpioDirections:
    IN = "in"
    OUT = "out"
    ALL = frozenset([IN, OUT])


class GpioValues:
    LOW = "0"
    HIGH = "1"
    ALL = frozenset([LOW, HIGH])


class GpioEdges:
    NONE = "none"
    RISING = "rising"
    FALLING = "falling"
    BOTH = "both"
    ALL = frozenset([NONE, RISING, FALLING, BOTH])


# =====
def valid_case_id(arg: Any) -> int:
    return valid_number(arg, min=0, max=65535, name="TestLink case ID")


def valid_pin_mode(arg: Any, variants: frozenset[str]) -> str:
    # Matched exactly apart from the case, " s" is not a pin mode
    return check_string_in_list(arg, "pin mode", variants, strip=False)


def valid_gpio_direction(arg: Any) -> str:
    return check_string_in_list(arg, "GPIO direction", GpioDirections.ALL, False)


def valid_gpio_value(arg: Any) -> str:
    return check_string_in_list(arg, "GPIO value", GpioValues.ALL, False)


def valid_gpio_edge(arg: Any) -> str:
    return check_string_in_list(arg, "GPIO edge", GpioEdges.ALL, False)
