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


import dataclasses

from .validators.gpio import PinModes
from .validators.gpio import GpioDirections
from .validators.gpio import GpioValues
from .validators.gpio import GpioEdges


# =====
class StepOps:
    GET_COUNT = "get_count"
    ACTIVATE = "activate"
    DEACTIVATE = "deactivate"
    SET_DIRECTION = "set_direction"
    GET_DIRECTION = "get_direction"
    SET_VALUE = "set_value"
    GET_VALUE = "get_value"
    SET_EDGE = "set_edge"
    GET_EDGE = "get_edge"

    SETTERS = frozenset([SET_DIRECTION, SET_VALUE, SET_EDGE])
    GETTERS = frozenset([GET_DIRECTION, GET_VALUE, GET_EDGE])


@dataclasses.dataclass(frozen=True)
class Step:
    op: str
    arg: str = ""
    expected: (str | None) = None
    repeated: bool = False

    def __post_init__(self) -> None:
        assert (self.op in StepOps.SETTERS) == bool(self.arg), self
        assert (self.expected is None or self.op in StepOps.GETTERS), self


@dataclasses.dataclass(frozen=True)
class TestCase:
    __test__ = False  # Not a pytest class

    case_id: int
    title: str
    modes: frozenset[str]
    steps: tuple[Step, ...]
    cleanup: bool = True


# =====
def _activate() -> Step:
    return Step(StepOps.ACTIVATE)


def _deactivate() -> Step:
    return Step(StepOps.DEACTIVATE)


def _set_direction(direction: str, repeated: bool=False) -> Step:
    return Step(StepOps.SET_DIRECTION, arg=direction, repeated=repeated)


def _get_direction(expected: (str | None)=None, repeated: bool=False) -> Step:
    return Step(StepOps.GET_DIRECTION, expected=expected, repeated=repeated)


def _set_value(value: str) -> Step:
    return Step(StepOps.SET_VALUE, arg=value)


def _get_value(expected: (str | None)=None) -> Step:
    return Step(StepOps.GET_VALUE, expected=expected)


def _set_edge(edge: str) -> Step:
    return Step(StepOps.SET_EDGE, arg=edge)


def _get_edge(expected: str) -> Step:
    return Step(StepOps.GET_EDGE, expected=expected)


def _activate_output(value: str) -> tuple[Step, ...]:
    return (
        _activate(),
        _set_direction(GpioDirections.OUT),
        _set_value(value),
    )


def _set_and_check_edge(edge: str) -> tuple[Step, ...]:
    return (_set_edge(edge), _get_edge(edge))


_SINGLE = frozenset([PinModes.SINGLE])
_SINGLE_MULTIPLE = frozenset([PinModes.SINGLE, PinModes.MULTIPLE])
_ANY = frozenset([PinModes.SINGLE, PinModes.MULTIPLE, PinModes.ALL])


def _make_set_value_case(case_id: int, title: str, value: str) -> TestCase:
    return TestCase(case_id, title, _SINGLE, (
        *_activate_output(value),
        _get_direction(GpioDirections.OUT),
        _get_value(value),
    ))


def _make_edge_case(case_id: int, title: str, *edges: str) -> TestCase:
    steps = _activate_output(GpioValues.HIGH)
    for edge in edges:
        steps += _set_and_check_edge(edge)
    return TestCase(case_id, title, _SINGLE, steps)


# =====
CASES: dict[int, TestCase] = {case.case_id: case for case in [
    TestCase(263, "GPIO line count response contains the number of GPIO lines", frozenset(), (
        Step(StepOps.GET_COUNT),
    ), cleanup=False),

    TestCase(264, "Generate multiple GPIO Activate Requests", _SINGLE_MULTIPLE, (
        _activate(),
    )),

    TestCase(267, "Generate multiple GPIO Deactivate Requests", _SINGLE_MULTIPLE, (
        _activate(),
        _deactivate(),
    ), cleanup=False),

    TestCase(270, "Generate multiple GPIO Direction Requests", _SINGLE_MULTIPLE, (
        _activate(),
        _get_direction(),
    )),

    TestCase(271, "GPIO Direction Request multiple times for the same line", _SINGLE, (
        _activate(),
        _get_direction(repeated=True),
    )),

    TestCase(272, "GPIO Direction Request for all the GPIO lines", _ANY, (
        _activate(),
        _get_direction(),
    )),

    TestCase(273, "Generate multiple GPIO Direction Input Requests", _SINGLE_MULTIPLE, (
        _activate(),
        _set_direction(GpioDirections.IN),
        _get_direction(GpioDirections.IN),
    )),

    TestCase(274, "GPIO Direction Input Request multiple times for the same line", _SINGLE, (
        _activate(),
        _set_direction(GpioDirections.IN, repeated=True),
        _get_direction(GpioDirections.IN),
    )),

    TestCase(276, "Generate multiple GPIO Direction Output Requests", _SINGLE_MULTIPLE, (
        _activate(),
        _set_direction(GpioDirections.OUT),
        _get_direction(GpioDirections.OUT),
    )),

    TestCase(277, "GPIO Direction Output Request multiple times for the same line", _SINGLE, (
        _activate(),
        _set_direction(GpioDirections.OUT, repeated=True),
        _get_direction(GpioDirections.OUT),
    )),

    TestCase(279, "GPIO Get Response payload returns the line current value", _SINGLE_MULTIPLE, (
        _activate(),
        _set_direction(GpioDirections.IN),
        _get_value(),
    )),

    _make_set_value_case(281, "Set GPIO line to high", GpioValues.HIGH),
    _make_set_value_case(282, "Set GPIO line to low", GpioValues.LOW),

    _make_edge_case(286, "GPIO IRQ type can be set to EDGE_RISING", GpioEdges.RISING),
    _make_edge_case(287, "GPIO IRQ type can be set to EDGE_FALLING", GpioEdges.FALLING),
    _make_edge_case(288, "GPIO IRQ type can be set to EDGE_BOTH", GpioEdges.BOTH),

    TestCase(409, "Change input line to output line", _SINGLE, (
        _activate(),
        _set_direction(GpioDirections.IN),
        _get_value(),
        _deactivate(),
        *_activate_output(GpioValues.HIGH),
        _get_value(GpioValues.HIGH),
    )),

    TestCase(410, "Change output line to input line", _SINGLE, (
        *_activate_output(GpioValues.HIGH),
        _deactivate(),
        _activate(),
        _set_direction(GpioDirections.IN),
        _get_value(),
    )),

    _make_edge_case(411, "Change IRQ type from falling edge to rising edge", GpioEdges.FALLING, GpioEdges.RISING),
    _make_edge_case(412, "Change IRQ type from rising edge to falling edge", GpioEdges.RISING, GpioEdges.FALLING),
    _make_edge_case(413, "Change IRQ type from rising edge to both edges", GpioEdges.RISING, GpioEdges.BOTH),
    _make_edge_case(416, "Change IRQ type from none to both edges", GpioEdges.NONE, GpioEdges.BOTH),
    _make_edge_case(417, "Change IRQ type from both edges to none", GpioEdges.BOTH, GpioEdges.NONE),
]}
