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
import dataclasses

from typing import Callable

from .logging import get_logger

from .errors import GpioTestError
from .errors import InvalidArgumentError
from .errors import VerificationMismatchError

from .validators import ValidatorError
from .validators.gpio import PinModes
from .validators.gpio import valid_pin_mode

from .controller import GpioController

from .reporter import Reporter

from .cases import StepOps
from .cases import Step
from .cases import TestCase
from .cases import CASES


# =====
@dataclasses.dataclass(frozen=True)
class TestConfig:
    __test__ = False  # Not a pytest class

    case_id: int
    pin_mode: str
    pins: tuple[(int | None), (int | None), (int | None)]
    base_pin: int
    line_count: int


def resolve_pins(test_config: TestConfig, modes: frozenset[str]) -> tuple[str, list[int]]:
    try:
        mode = valid_pin_mode(test_config.pin_mode, modes)
    except ValidatorError as err:
        raise InvalidArgumentError(f"ARA-{test_config.case_id} supports the pin modes"
                                   f" {sorted(modes)}: {err}")

    offsets: list[(int | None)]
    if mode == PinModes.ALL:
        offsets = list(range(test_config.line_count))
    elif mode == PinModes.MULTIPLE:
        offsets = list(test_config.pins)
    else:
        offsets = [test_config.pins[0]]

    for (index, offset) in enumerate(offsets):
        if offset is None:
            raise InvalidArgumentError(f"The GPIO pin{index + 1} is required for the pin mode {mode!r}")
    return (mode, [test_config.base_pin + offset for offset in offsets])  # type: ignore


# =====
_CLEANUP_STEP = Step(StepOps.DEACTIVATE)


class _CaseRunner:  # pylint: disable=too-many-instance-attributes
    def __init__(
        self,
        case: TestCase,
        test_config: TestConfig,
        controller: GpioController,
        reporter: Reporter,
        repeat: int,
        aggregate: bool,
    ) -> None:

        self.__case = case
        self.__test_config = test_config
        self.__controller = controller
        self.__reporter = reporter
        self.__repeat = repeat
        self.__aggregate = aggregate

        self.__mode = ""
        self.__pins: list[int] = []

        self.__pin_ops: dict[str, Callable] = {
            StepOps.ACTIVATE:      controller.activate,
            StepOps.DEACTIVATE:    controller.deactivate,
            StepOps.SET_DIRECTION: controller.set_direction,
            StepOps.GET_DIRECTION: controller.get_direction,
            StepOps.SET_VALUE:     controller.set_value,
            StepOps.GET_VALUE:     controller.get_value,
            StepOps.SET_EDGE:      controller.set_edge,
            StepOps.GET_EDGE:      controller.get_edge,
        }

    def run(self) -> int:
        case_id = self.__case.case_id
        if self.__case.modes:
            try:
                (self.__mode, self.__pins) = resolve_pins(self.__test_config, self.__case.modes)
            except InvalidArgumentError as err:
                get_logger(0).error("Can't run ARA-%d: %s", case_id, err)
                self.__reporter.print_test_result(case_id, err.code)
                return err.code

        codes: list[int] = []
        for step in self.__case.steps:
            for _ in range(self.__repeat if step.repeated else 1):
                codes.extend(self.__run_step(step))
        ret = self.__get_result(codes)
        self.__reporter.print_test_result(case_id, ret)

        if self.__case.cleanup:
            cleanup_ret = self.__get_result(self.__run_step(_CLEANUP_STEP))
            if ret == 0:
                ret = cleanup_ret
        return ret

    def __get_result(self, codes: list[int]) -> int:
        if self.__aggregate:
            return next(filter(None, codes), 0)
        # The legacy procedures report only the last operation, earlier failures are logged only
        return (codes[-1] if codes else 0)

    def __run_step(self, step: Step) -> list[int]:
        if step.op == StepOps.GET_COUNT:
            return [self.__perform("get GPIO count", self.__get_count)]

        if self.__mode == PinModes.MULTIPLE and step.op in [StepOps.ACTIVATE, StepOps.DEACTIVATE]:
            multi = (
                self.__controller.activate_multi
                if step.op == StepOps.ACTIVATE
                else self.__controller.deactivate_multi
            )
            return [self.__perform(f"{step.op} pins {self.__pins}", (lambda: multi(self.__pins)))]

        func = self.__pin_ops[step.op]
        codes: list[int] = []
        for pin in self.__pins:
            if step.arg:
                what = f"{step.op} {step.arg!r} on pin {pin}"
                call = (lambda pin=pin: func(pin, step.arg))
            else:
                what = f"{step.op} on pin {pin}"
                call = (lambda pin=pin: func(pin))
            codes.append(self.__perform(what, call, step.expected))
        return codes

    def __get_count(self) -> None:
        count = self.__controller.get_count(self.__test_config.base_pin)
        self.__reporter.print_log(self.__case.case_id, f"GPIO count: {count}")

    def __perform(self, what: str, call: Callable[[], (str | None)], expected: (str | None)=None) -> int:
        case_id = self.__case.case_id
        try:
            value = call()
            if value is not None:
                self.__reporter.print_log(case_id, f"{what}: {value!r}")
            if expected is not None and value != expected:
                raise VerificationMismatchError(what, str(value), expected)
            ret = 0
        except GpioTestError as err:
            get_logger(0).error("ARA-%d: %s", case_id, err)
            ret = err.code
        self.__reporter.check_step_result(case_id, ret, what)
        return ret


# =====
def dispatch(
    test_config: TestConfig,
    controller: GpioController,
    reporter: Reporter,
    repeat: int,
    aggregate: bool,
) -> int:

    logger = get_logger(0)
    case = CASES.get(test_config.case_id)
    if case is None:
        logger.error("Error: The command had error case_id.")
        return -errno.EINVAL

    logger.info("Running ARA-%d: %s ...", case.case_id, case.title)
    return _CaseRunner(
        case=case,
        test_config=test_config,
        controller=controller,
        reporter=reporter,
        repeat=repeat,
        aggregate=aggregate,
    ).run()
