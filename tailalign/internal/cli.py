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
This file contains all the logic of the tailalign "executable"
like the entry point, command line interface, etc...
"""

import argparse
import sys
from typing import List, Optional

import drgn
from tailalign import target
from tailalign.align import (padding_size, sort_sizes_descending,
                             tail_aligned_size, tail_offset)
from tailalign.error import ArgumentsError, Error
from tailalign.layout import (SizeDesc, full_layout, incremental_layout,
                              print_order, print_report)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Sets up argument parsing and does the first pass of validation
    of the command line input.
    """
    parser = argparse.ArgumentParser(
        prog="tailalign",
        description="Tail-aligned storage size and padding calculator")
    parser.add_argument(
        "-a",
        "--arch",
        default="host",
        choices=["host"] + sorted(target.ARCHITECTURES),
        help="platform whose C type sizes and word size are used" +
        " (default: the running machine)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    layout = subparsers.add_parser(
        "layout", help="show the padding of a structure with these members")
    layout.add_argument("type",
                        nargs="+",
                        metavar="<type>",
                        help="C type of each member, e.g. 'char[2]'")
    layout.add_argument("-s",
                        "--sort",
                        action="store_true",
                        help="also show the layout sorted largest first")
    layout.set_defaults(func=run_layout)

    pack = subparsers.add_parser(
        "pack", help="compute the size of a head with a trailing tail")
    pack.add_argument("head",
                      metavar="<head>",
                      help="C type or size in bytes of the head")
    pack.add_argument("tail",
                      metavar="<tail>",
                      help="C type or size in bytes of the tail")
    pack.set_defaults(func=run_pack)

    return parser.parse_args(argv)


def setup_target(args: argparse.Namespace) -> drgn.Program:
    """
    Create the drgn.Program of the selected platform and make it the
    one used by tailalign.target.
    """
    prog = target.create_program(args.arch)
    target.set_prog(prog)
    return prog


def size_operand(text: str, usize_max: int) -> SizeDesc:
    """
    Interpret a command line operand either as a byte count (any base
    accepted by int(), e.g. 16 or 0x10) or as a C type name.
    """
    try:
        size = int(text, 0)
    except ValueError:
        return SizeDesc(target.type_size(text), text)
    if not 0 <= size <= usize_max:
        raise ArgumentsError(f"size {text} does not fit in size_t")
    return SizeDesc(size, "")


def _describe(desc: SizeDesc) -> str:
    if desc.name:
        return f"{desc.name} ({desc.size} bytes)"
    return f"{desc.size} bytes"


def run_layout(args: argparse.Namespace) -> None:
    usize_max = target.word_max()
    sizes = target.describe(args.type)

    print("Original order:")
    print_order(sizes)
    print()
    print_report(incremental_layout(sizes, usize_max=usize_max))
    print_report(full_layout(sizes, usize_max=usize_max))

    if not args.sort:
        return
    sort_sizes_descending(sizes, usize_max=usize_max)
    print("Sorted largest to smallest:")
    print_order(sizes)
    print()
    print_report(incremental_layout(sizes, usize_max=usize_max))
    print_report(full_layout(sizes, usize_max=usize_max))


def run_pack(args: argparse.Namespace) -> None:
    usize_max = target.word_max()
    head = size_operand(args.head, usize_max)
    tail = size_operand(args.tail, usize_max)

    total = tail_aligned_size(head.size, tail.size,
                              usize_max=usize_max).unwrap()
    padding = padding_size(head.size, tail.size,
                           usize_max=usize_max).unwrap()
    print(f"head: {_describe(head)} at offset 0")
    print(f"padding: {padding} bytes at offset {head.size}")
    print(f"tail: {_describe(tail)} at offset {tail_offset(total, tail.size)}")
    print(f"total size: {total} bytes")


def main(argv: Optional[List[str]] = None) -> int:
    """ The entry point of the tailalign "executable" """
    args = parse_arguments(argv)

    try:
        setup_target(args)
        args.func(args)
    except Error as err:
        print(err.text, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
