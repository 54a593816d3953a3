#
# Copyright 2021 Delphix
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#

# pylint: disable=missing-docstring

from typing import Any, Callable, Dict, List, Optional, Set, Tuple


class Table:
    """
    Generic Table implementation for pretty-printing
    data in columns.
    """

    __slots__ = "fields", "rjustfields", "formatters", "maxfieldlen", "lines"

    def __init__(
            self,
            fields: List[str],
            rjustfields: Optional[Set[str]] = None,
            formatters: Optional[Dict[str, Callable[[Any],
                                                    str]]] = None) -> None:
        self.fields = fields

        if rjustfields is None:
            self.rjustfields: Set[str] = set()
        else:
            self.rjustfields = rjustfields

        if formatters is None:
            formatters = {}
        to_str: Callable[[Any], str] = str
        self.formatters = {
            field: formatters.get(field, to_str) for field in fields
        }

        self.maxfieldlen = dict.fromkeys(fields, 0)
        self.lines: List[Tuple[Any, List[str]]] = []

    def add_row(self, sortkey: Any, values: Dict[str, Any]) -> None:
        row_values = []
        for field in self.fields:
            val = self.formatters[field](values[field])
            row_values.append(val)
            self.maxfieldlen[field] = max(self.maxfieldlen[field], len(val))
        self.lines.append((sortkey, row_values))

    def _justify(self, field: str, text: str) -> str:
        if field in self.rjustfields:
            return f"{text:>{self.maxfieldlen[field]}}"
        return f"{text:<{self.maxfieldlen[field]}}"

    def format_(self, reverse_sort: bool = False) -> List[str]:
        """
        Return the header, the separator and then one line per row,
        ordered by the sort keys given to add_row().
        """
        for field in self.fields:
            self.maxfieldlen[field] = max(self.maxfieldlen[field], len(field))
        headers = [self._justify(field, field) for field in self.fields]
        separators = ['-' * self.maxfieldlen[field] for field in self.fields]
        out = [" ".join(headers).rstrip(), " ".join(separators)]

        self.lines.sort(key=lambda line: line[0], reverse=reverse_sort)
        for _, row_values in self.lines:
            out.append(" ".join(
                self._justify(field, row_values[fid])
                for fid, field in enumerate(self.fields)).rstrip())
        return out

    def print_(self, reverse_sort: bool = False) -> None:
        for line in self.format_(reverse_sort):
            print(line)
