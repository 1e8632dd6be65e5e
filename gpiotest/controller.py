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


import os
import errno
import dataclasses

from typing import Callable

from .logging import get_logger

from .errors import InvalidArgumentError
from .errors import GpioIoError

from .validators import ValidatorError
from .validators.gpio import valid_gpio_direction
from .validators.gpio import valid_gpio_value
from .validators.gpio import valid_gpio_edge


_CHIP_ATTR_LIMIT = 64


# =====
@dataclasses.dataclass(frozen=True)
class ControllerInfo:
    base_pin: int
    line_count: int


class GpioController:
    """
    Greybus GPIO controller as exposed by the kernel GPIO sysfs class.

    Pins are exported through <sysfs>/export and then configured through
    the direction, value and edge attributes of <sysfs>/gpio<pin>/.
    Every failed file access is raised as GpioIoError carrying the errno.
    """

    def __init__(self, sysfs_path: str, label: str, buffer_size: int) -> None:
        self.__sysfs_path = sysfs_path
        self.__label = label
        self.__buffer_size = buffer_size

    # =====

    def discover(self) -> ControllerInfo:
        logger = get_logger(0)
        try:
            chips = sorted(
                name for name in os.listdir(self.__sysfs_path)
                if name.startswith("gpiochip")
            )
        except OSError as err:
            raise GpioIoError.from_os_error(self.__sysfs_path, err)

        for chip in chips:
            if self.__read(chip, "label", limit=_CHIP_ATTR_LIMIT) == self.__label:
                info = ControllerInfo(
                    base_pin=self.__read_int(chip, "base"),
                    line_count=self.__read_int(chip, "ngpio"),
                )
                logger.info("Found GPIO controller %r at %s: base=%d, ngpio=%d",
                            self.__label, chip, info.base_pin, info.line_count)
                return info

        raise GpioIoError(f"Can't find GPIO controller {self.__label!r} in {self.__sysfs_path!r}", -errno.ENODEV)

    def get_count(self, base_pin: int) -> int:
        return self.__read_int(f"gpiochip{base_pin}", "ngpio")

    # =====

    def activate(self, pin: int) -> None:
        self.__write(str(pin), "export")

    def deactivate(self, pin: int) -> None:
        self.__write(str(pin), "unexport")

    def activate_multi(self, pins: list[int]) -> None:
        for pin in pins:
            self.activate(pin)

    def deactivate_multi(self, pins: list[int]) -> None:
        # All of the pins are released even if some of them are failed
        error: (GpioIoError | None) = None
        for pin in pins:
            try:
                self.deactivate(pin)
            except GpioIoError as err:
                get_logger(0).error("Can't deactivate GPIO pin %d: %s", pin, err)
                if error is None:
                    error = err
        if error is not None:
            raise error

    # =====

    def set_direction(self, pin: int, direction: str) -> None:
        self.__write(self.__validated(direction, valid_gpio_direction), f"gpio{pin}", "direction")

    def get_direction(self, pin: int) -> str:
        return self.__read(f"gpio{pin}", "direction")

    def set_value(self, pin: int, value: str) -> None:
        self.__write(self.__validated(value, valid_gpio_value), f"gpio{pin}", "value")

    def get_value(self, pin: int) -> str:
        return self.__read(f"gpio{pin}", "value")

    def set_edge(self, pin: int, edge: str) -> None:
        self.__write(self.__validated(edge, valid_gpio_edge), f"gpio{pin}", "edge")

    def get_edge(self, pin: int) -> str:
        return self.__read(f"gpio{pin}", "edge")

    # =====

    def __validated(self, value: str, validator: Callable[[str], str]) -> str:
        try:
            value = validator(value)
        except ValidatorError as err:
            raise InvalidArgumentError(str(err))
        if len(value) > self.__buffer_size:
            raise InvalidArgumentError(f"The value {value!r} exceeds the buffer size {self.__buffer_size}")
        return value

    def __write(self, value: str, *names: str) -> None:
        path = os.path.join(self.__sysfs_path, *names)
        get_logger(0).debug("Writing %r to %s ...", value, path)
        try:
            with open(path, "w") as file:
                file.write(value)
        except OSError as err:
            raise GpioIoError.from_os_error(path, err)

    def __read(self, *names: str, limit: int=0) -> str:
        path = os.path.join(self.__sysfs_path, *names)
        limit = (limit or self.__buffer_size)
        try:
            with open(path, "rb") as file:
                data = file.read(limit + 2)
        except OSError as err:
            raise GpioIoError.from_os_error(path, err)

        data = data.rstrip(b"\n")
        if len(data) > limit:
            raise GpioIoError(f"The content of {path!r} exceeds the buffer size {limit}", -errno.EOVERFLOW)
        try:
            value = data.decode("ascii")
        except UnicodeDecodeError:
            raise GpioIoError(f"The content of {path!r} is not an ASCII string")
        get_logger(0).debug("Read %r from %s", value, path)
        return value

    def __read_int(self, *names: str) -> int:
        value = self.__read(*names, limit=_CHIP_ATTR_LIMIT)
        try:
            return int(value)
        except ValueError:
            raise GpioIoError(f"The content of {os.path.join(self.__sysfs_path, *names)!r}"
                              f" is not a number: {value!r}")
