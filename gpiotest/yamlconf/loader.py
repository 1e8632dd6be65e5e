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

from typing import IO
from typing import Generator
from typing import Any

import yaml
import yaml.nodes

from .merger import yaml_merge


# =====
def load_yaml_file(path: str) -> Any:
    with open(path) as file:
        try:
            return yaml.load(file, _YamlLoader)
        except Exception as err:
            # Any parser or include failure is reported against the top-level file
            raise ValueError(f"Invalid YAML in the file {path!r}:\n{type(err).__name__}: {err}") from None


# =====
class _YamlLoader(yaml.SafeLoader):
    def __init__(self, file: IO) -> None:
        super().__init__(file)
        self.__root = os.path.dirname(file.name)

    def include(self, node: yaml.nodes.Node) -> dict:
        if isinstance(node, yaml.nodes.SequenceNode):
            names = list(map(str, self.construct_sequence(node)))
        else:
            names = [str(self.construct_scalar(node))]  # type: ignore
        tree: dict = {}
        for path in self.__expand_includes(names):
            yaml_merge(tree, load_yaml_file(path), path)
        return tree

    def __expand_includes(self, names: list[str]) -> Generator[str, None, None]:
        for name in filter(None, names):
            path = os.path.join(self.__root, name)
            if os.path.isdir(path):
                for child in sorted(os.listdir(path)):
                    child_path = os.path.join(path, child)
                    if os.path.isfile(child_path):
                        yield child_path
            else:
                yield path


_YamlLoader.add_constructor("!include", _YamlLoader.include)

# yes/no/on/off and friends stay strings, only true/false are bools
_YamlLoader.yaml_implicit_resolvers = {
    first: [
        (tag, regexp)
        for (tag, regexp) in resolvers
        if not (tag == "tag:yaml.org,2002:bool" and first in "oOyYnN")
    ]
    for (first, resolvers) in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
