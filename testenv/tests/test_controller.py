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


import errno
import pathlib

import pytest

from gpiotest.errors import InvalidArgumentError
from gpiotest.errors import GpioIoError

from gpiotest.controller import ControllerInfo
from gpiotest.controller import GpioController

from .conftest import GREYBUS_BASE
from .conftest import GREYBUS_NGPIO


# =====
def test_ok__discover(controller: GpioController) -> None:
    assert controller.discover() == ControllerInfo(base_pin=GREYBUS_BASE, line_count=GREYBUS_NGPIO)


def test_ok__get_count(controller: GpioController) -> None:
    assert controller.get_count(GREYBUS_BASE) == GREYBUS_NGPIO
    assert controller.get_count(0) == GREYBUS_BASE


def test_fail__discover_unknown_label(sysfs: pathlib.Path) -> None:
    controller = GpioController(sysfs_path=str(sysfs), label="foobar", buffer_size=8)
    with pytest.raises(GpioIoError, match="Can't find GPIO controller 'foobar'") as exc_info:
        controller.discover()
    assert exc_info.value.code == -errno.ENODEV


def test_fail__discover_no_sysfs(tmp_path: pathlib.Path) -> None:
    controller = GpioController(sysfs_path=str(tmp_path / "nope"), label="greybus_gpio", buffer_size=8)
    with pytest.raises(GpioIoError) as exc_info:
        controller.discover()
    assert exc_info.value.code == -errno.ENOENT


def test_fail__discover_bad_ngpio(sysfs: pathlib.Path, controller: GpioController) -> None:
    (sysfs / f"gpiochip{GREYBUS_BASE}" / "ngpio").write_text("many\n")
    with pytest.raises(GpioIoError, match="is not a number"):
        controller.discover()


# =====
def test_ok__activate_deactivate(sysfs: pathlib.Path, controller: GpioController) -> None:
    controller.activate(33)
    assert (sysfs / "export").read_text() == "33"
    controller.deactivate(34)
    assert (sysfs / "unexport").read_text() == "34"


def test_ok__activate_multi(controller: GpioController, mocker) -> None:  # type: ignore
    spy = mocker.spy(controller, "activate")
    controller.activate_multi([32, 34, 35])
    assert spy.call_args_list == [mocker.call(32), mocker.call(34), mocker.call(35)]


def test_fail__activate_multi_stops(controller: GpioController, mocker) -> None:  # type: ignore
    mock = mocker.patch.object(controller, "activate", side_effect=[None, GpioIoError("boom"), None])
    with pytest.raises(GpioIoError, match="boom"):
        controller.activate_multi([32, 33, 34])
    assert mock.call_count == 2


def test_fail__deactivate_multi_releases_all(controller: GpioController, mocker) -> None:  # type: ignore
    mock = mocker.patch.object(controller, "deactivate", side_effect=[GpioIoError("first"), GpioIoError("second"), None])
    with pytest.raises(GpioIoError, match="first"):
        controller.deactivate_multi([32, 33, 34])
    assert mock.call_args_list == [mocker.call(32), mocker.call(33), mocker.call(34)]


def test_fail__activate_no_export(sysfs: pathlib.Path, controller: GpioController) -> None:
    (sysfs / "export").unlink()
    (sysfs / "export").mkdir()
    with pytest.raises(GpioIoError) as exc_info:
        controller.activate(33)
    assert exc_info.value.code == -errno.EISDIR


# =====
@pytest.mark.parametrize("direction", ["in", "out"])
def test_ok__direction(sysfs: pathlib.Path, controller: GpioController, direction: str) -> None:
    controller.set_direction(33, direction)
    assert (sysfs / "gpio33" / "direction").read_text() == direction
    assert controller.get_direction(33) == direction


@pytest.mark.parametrize("value", ["0", "1"])
def test_ok__value(controller: GpioController, value: str) -> None:
    controller.set_value(34, value)
    assert controller.get_value(34) == value


@pytest.mark.parametrize("edge", ["none", "rising", "falling", "both"])
def test_ok__edge(controller: GpioController, edge: str) -> None:
    controller.set_edge(35, edge)
    assert controller.get_edge(35) == edge


def test_ok__readback_strips_newline(controller: GpioController) -> None:
    assert controller.get_direction(32) == "in"
    assert controller.get_value(32) == "0"
    assert controller.get_edge(32) == "none"


@pytest.mark.parametrize("method, arg", [
    ("set_direction", "sideways"),
    ("set_direction", "OUT"),
    ("set_value", "2"),
    ("set_value", "high"),
    ("set_edge", "up"),
    ("set_edge", ""),
])
def test_fail__invalid_write(controller: GpioController, method: str, arg: str) -> None:
    with pytest.raises(InvalidArgumentError) as exc_info:
        getattr(controller, method)(33, arg)
    assert exc_info.value.code == -errno.EINVAL


def test_fail__write_exceeds_buffer(sysfs: pathlib.Path) -> None:
    controller = GpioController(sysfs_path=str(sysfs), label="greybus_gpio", buffer_size=4)
    with pytest.raises(InvalidArgumentError, match="exceeds the buffer size 4"):
        controller.set_edge(33, "falling")
    controller.set_edge(33, "both")


def test_fail__readback_exceeds_buffer(sysfs: pathlib.Path, controller: GpioController) -> None:
    (sysfs / "gpio33" / "edge").write_text("something-long\n")
    with pytest.raises(GpioIoError) as exc_info:
        controller.get_edge(33)
    assert exc_info.value.code == -errno.EOVERFLOW


def test_fail__readback_not_ascii(sysfs: pathlib.Path, controller: GpioController) -> None:
    (sysfs / "gpio33" / "value").write_bytes(b"\xff\n")
    with pytest.raises(GpioIoError, match="not an ASCII string"):
        controller.get_value(33)


def test_fail__not_activated_pin(controller: GpioController) -> None:
    with pytest.raises(GpioIoError) as exc_info:
        controller.get_direction(99)
    assert exc_info.value.code == -errno.ENOENT
    with pytest.raises(GpioIoError):
        controller.set_value(99, "1")
