#!/usr/bin/env python3
# ========================================================================== #
#                                                                            #
#    GPIOTEST - Greybus GPIO test tool.                                      #
#                                                                            #
#    Copyright (C) 2018-2024  Maxim Devaev <mdevaev@gmail.com>               #
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


from setuptools import setup


# =====
def main() -> None:
    setup(
        name="gpiotest",
        version="1.0",
        license="GPLv3",
        author="Maxim Devaev",
        author_email="mdevaev@gmail.com",
        description="Greybus GPIO compliance test tool",
        platforms="any",
        python_requires=">=3.10",

        packages=[
            "gpiotest",
            "gpiotest.validators",
            "gpiotest.yamlconf",
            "gpiotest.apps",
            "gpiotest.apps.gpiotest",
        ],

        install_requires=[
            "PyYAML",
            "Pygments",
        ],

        extras_require={
            "test": [
                "pytest",
                "pytest-mock",
            ],
        },

        entry_points={
            "console_scripts": [
                "gpiotest = gpiotest.apps.gpiotest:main",
            ],
        },

        classifiers=[
            "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
            "Development Status :: 5 - Production/Stable",
            "Programming Language :: Python :: 3.12",
            "Topic :: Software Development :: Testing",
            "Topic :: System :: Hardware",
            "Operating System :: POSIX :: Linux",
            "Intended Audience :: Developers",
        ],
    )


if __name__ == "__main__":
    main()
