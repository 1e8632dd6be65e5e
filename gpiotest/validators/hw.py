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

from . import check_re_match
from . import check_len

from .basic import valid_number


# =====
def valid_gpio_pin(arg: Any) -> int:
    return valid_number(arg, min=0, name="GPIO pin")


def valid_gpio_chip_label(arg: Any) -> str:
    name = "GPIO chip label"
    return check_len(check_re_match(arg, name, r"^[a-zA-Z0-9_.:-]+$"), name, 255)


def valid_gpio_buffer_size(arg: Any) -> int:
    return valid_number(arg, min=1, max=64, name="GPIO readback buffer size")
