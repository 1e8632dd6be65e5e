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
import errno
import textwrap
import argparse

from ...logging import get_logger

from ...yamlconf import Section

from ...errors import GpioTestError

from ...validators.hw import valid_gpio_pin
from ...validators.gpio import valid_case_id

from ...controller import GpioController

from ...reporter import Reporter

from ...runner import TestConfig
from ...runner import dispatch

from .. import ArgumentParser
from .. import init


# =====
def _run(config: Section, options: argparse.Namespace) -> int:
    logger = get_logger(0)
    controller = GpioController(**config.gpio._unpack())  # pylint: disable=protected-access
    reporter = Reporter(config.test.tag)

    # 1. Check the Greybus GPIO controller
    try:
        info = controller.discover()
    except GpioTestError as err:
        logger.error("Can't discover the GPIO controller: %s", err)
        reporter.check_step_result(options.case_id, err.code, "discover GPIO controller")
        return err.code
    reporter.check_step_result(options.case_id, 0, "discover GPIO controller")

    # 2. Run the requested case
    ret = dispatch(
        test_config=TestConfig(
            case_id=options.case_id,
            pin_mode=options.pin_mode,
            pins=(options.pin1, options.pin2, options.pin3),
            base_pin=info.base_pin,
            line_count=info.line_count,
        ),
        controller=controller,
        reporter=reporter,
        repeat=config.test.repeat,
        aggregate=config.test.aggregate,
    )
    reporter.check_step_result(options.case_id, ret, "run test case")
    return ret


# =====
def main(argv: (list[str] | None)=None) -> None:
    argv = (argv or sys.argv)
    # The config options count too, they are removed from the remaining argv by init()
    too_few_args = (len(argv) < 3)

    (parent_parser, remaining, config) = init(
        add_help=False,
        cli_logging=True,
        argv=argv,
    )
    parser = ArgumentParser(
        prog="gpiotest",
        description="Greybus GPIO compliance tests",
        parents=[parent_parser],
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""
            example:
              case ARA-270 on a board with the GPIO pins 0, 8 and 9 under test:
                gpiotest -c 270 -t m -1 0 -2 8 -3 9
        """),
    )
    parser.add_argument("-c", "-C", dest="case_id", type=valid_case_id, required=True,
                        help="TestLink test case ID", metavar="<case-id>")
    parser.add_argument("-t", "-T", dest="pin_mode", default="",
                        help="'s' for a single pin, 'm' for multiple pins or 'a' for all lines",
                        metavar="<s|m|a>")
    parser.add_argument("-1", dest="pin1", type=valid_gpio_pin, default=None,
                        help="GPIO pin1 number for the single or multiple pins test", metavar="<pin>")
    parser.add_argument("-2", dest="pin2", type=valid_gpio_pin, default=None,
                        help="GPIO pin2 number for the multiple pins test", metavar="<pin>")
    parser.add_argument("-3", dest="pin3", type=valid_gpio_pin, default=None,
                        help="GPIO pin3 number for the multiple pins test", metavar="<pin>")

    if too_few_args:
        parser.print_help(sys.stdout)
        raise SystemExit(-errno.EINVAL)

    options = parser.parse_args(remaining[1:])
    ret = _run(config, options)
    if ret != 0:
        raise SystemExit(ret)
