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


from .logging import get_logger


# =====
class Reporter:
    def __init__(self, tag: str) -> None:
        self.__tag = tag

    def print_log(self, case_id: int, msg: str) -> None:
        get_logger(0).info("[%s] ARA-%d: %s", self.__tag, case_id, msg)

    def check_step_result(self, case_id: int, ret: int, what: str="step") -> None:
        logger = get_logger(0)
        if ret == 0:
            logger.info("[%s] ARA-%d: %s: OK", self.__tag, case_id, what)
        else:
            logger.error("[%s] ARA-%d: %s: FAILED (%d)", self.__tag, case_id, what, ret)

    def print_test_result(self, case_id: int, ret: int) -> None:
        result = ("PASS" if ret == 0 else f"FAIL ({ret})")
        print(f"[{self.__tag}] ARA-{case_id}: {result}", flush=True)
