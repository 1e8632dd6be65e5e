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


import pathlib

import pytest

from gpiotest.controller import GpioController
from gpiotest.reporter import Reporter


# =====
GREYBUS_BASE = 32
GREYBUS_NGPIO = 4


def _make_chip(sysfs: pathlib.Path, label: str, base: int, ngpio: int) -> None:
    chip = sysfs / f"gpiochip{base}"
    chip.mkdir()
    (chip / "label").write_text(label + "\n")
    (chip / "base").write_text(f"{base}\n")
    (chip / "ngpio").write_text(f"{ngpio}\n")


def _make_pin(sysfs: pathlib.Path, pin: int) -> None:
    # The kernel creates these on export, here they are always present
    path = sysfs / f"gpio{pin}"
    path.mkdir()
    (path / "direction").write_text("in\n")
    (path / "value").write_text("0\n")
    (path / "edge").write_text("none\n")


@pytest.fixture(name="sysfs")
def _sysfs_fixture(tmp_path: pathlib.Path) -> pathlib.Path:
    sysfs = tmp_path / "gpio"
    sysfs.mkdir()
    (sysfs / "export").write_text("")
    (sysfs / "unexport").write_text("")
    _make_chip(sysfs, "pinctrl-soc", 0, GREYBUS_BASE)
    _make_chip(sysfs, "greybus_gpio", GREYBUS_BASE, GREYBUS_NGPIO)
    for pin in range(GREYBUS_BASE, GREYBUS_BASE + GREYBUS_NGPIO):
        _make_pin(sysfs, pin)
    return sysfs


@pytest.fixture(name="controller")
def _controller_fixture(sysfs: pathlib.Path) -> GpioController:
    return GpioController(
        sysfs_path=str(sysfs),
        label="greybus_gpio",
        buffer_size=8,
    )


@pytest.fixture(name="reporter")
def _reporter_fixture() -> Reporter:
    return Reporter("GPIO")
