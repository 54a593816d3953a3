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
"""
This module computes and prints the padding a structure would need
for a given ordering of its members, using the arithmetic of
tailalign.align. Ordering the members of a structure from largest to
smallest tends to minimize that padding; comparing the reports of an
ordering before and after sort_sizes_descending() shows by how much.
"""

from typing import List, NamedTuple, Optional

from tailalign.align import (USIZE_MAX, checked_add,
                             largest_power_of_two_factor, padding_size,
                             tail_aligned_size)
from tailalign.error import SizeOverflowError
from tailalign.internal.table import Table


class SizeDesc(NamedTuple):
    """
    A size tagged with the name of what it measures.
    """
    size: int
    name: str


class PaddingEntry(NamedTuple):
    """
    `size` bytes of padding right before the member at `index`.
    """
    index: int
    size: int


class LayoutReport:
    """
    The padding of one ordering of structure members.
    """

    __slots__ = "title", "padding", "trailing", "alignment", "total"

    def __init__(self, title: str) -> None:
        self.title = title
        self.padding: List[PaddingEntry] = []
        self.trailing = 0
        self.alignment: Optional[int] = None
        self.total = 0

    @property
    def padding_total(self) -> int:
        return sum(entry.size for entry in self.padding) + self.trailing


def max_factor(sizes: List[SizeDesc], *, usize_max: int = USIZE_MAX) -> int:
    """
    Return the strictest alignment factor among `sizes`, or 0 if there
    are no sizes.
    """
    return max((largest_power_of_two_factor(desc.size, usize_max=usize_max)
                for desc in sizes),
               default=0)


def incremental_layout(sizes: List[SizeDesc],
                       *,
                       usize_max: int = USIZE_MAX) -> LayoutReport:
    """
    Lay the members out one after the other, each time treating
    everything placed so far as the head and the next member as the
    tail of a tail-aligned allocation.
    """
    report = LayoutReport(
        "Assuming we build the structure member-wise-incrementally...")
    if not sizes:
        return report

    total = sizes[0].size
    if total > usize_max:
        raise SizeOverflowError("incremental_layout")
    for i, desc in enumerate(sizes[1:], start=1):
        padding = padding_size(total, desc.size, usize_max=usize_max).unwrap()
        if padding:
            report.padding.append(PaddingEntry(i, padding))
        total = tail_aligned_size(total, desc.size,
                                  usize_max=usize_max).unwrap()
    report.total = total
    return report


def full_layout(sizes: List[SizeDesc],
                *,
                usize_max: int = USIZE_MAX) -> LayoutReport:
    """
    Lay the members out knowing the alignment requirement of the whole
    structure up front: each member is aligned to its own factor and
    the structure is then rounded up to the strictest one.
    """
    report = LayoutReport(
        "Assuming we build the structure with full knowledge...")
    report.alignment = max_factor(sizes, usize_max=usize_max)
    if not sizes:
        return report

    def add(a: int, b: int) -> int:
        result = checked_add(a, b, usize_max)
        if result is None:
            raise SizeOverflowError("full_layout")
        return result

    total = add(0, sizes[0].size)
    for i, desc in enumerate(sizes[1:], start=1):
        factor = largest_power_of_two_factor(desc.size, usize_max=usize_max)
        total = add(total, desc.size)
        remainder = total % factor
        if remainder:
            report.padding.append(PaddingEntry(i, factor - remainder))
            total = add(total, factor - remainder)

    remainder = total % report.alignment
    if remainder:
        report.trailing = report.alignment - remainder
        total = add(total, report.trailing)
    report.total = total
    return report


def print_order(sizes: List[SizeDesc]) -> None:
    table = Table(["index", "size", "type"], {"index", "size"})
    for i, desc in enumerate(sizes):
        table.add_row(i, {"index": i, "size": desc.size, "type": desc.name})
    table.print_()


def print_report(report: LayoutReport) -> None:
    print(report.title)
    if report.alignment is not None:
        print(f"Alignment requirement: {report.alignment}")
    for entry in report.padding:
        print(f"{entry.size} bytes of padding before {entry.index}")
    if report.trailing:
        print(f"{report.trailing} bytes of padding at the end")
    print(f"Total size: {report.total} bytes")
    print()
