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


# =====
class GpioTestError(Exception):
    def __init__(self, msg: str, code: int) -> None:
        assert code < 0, code
        super().__init__(msg)
        self.code = code


class InvalidArgumentError(GpioTestError):
    def __init__(self, msg: str) -> None:
        super().__init__(msg, -errno.EINVAL)


class GpioIoError(GpioTestError):
    def __init__(self, msg: str, code: int=-errno.EIO) -> None:
        super().__init__(msg, code)

    @classmethod
    def from_os_error(cls, path: str, err: OSError) -> "GpioIoError":
        return cls(f"Can't access {path!r}: {err.strerror or err}", -(err.errno or errno.EIO))


class VerificationMismatchError(GpioTestError):
    def __init__(self, what: str, value: str, expected: str) -> None:
        super().__init__(f"Unexpected {what}: got {value!r}, expected {expected!r}", -errno.EBADMSG)
        self.value = value
        self.expected = expected
