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
This module wraps the drgn.Program that tailalign uses to turn C type
names into sizes. The program is never attached to a live system or a
core dump; it only carries a platform (architecture, word size and
endianness) so that the built-in C types have the sizes they would
have on that platform.

Like the rest of the package, the infrastructure keeps a single `prog`
global, initialized once by the consumer through set_prog(), and the
helpers below query it.
"""

from typing import Dict, Iterable, List, Tuple

import drgn

from tailalign.align import usize_max_for_bits
from tailalign.error import TypeNotFoundError
from tailalign.layout import SizeDesc

# pylint: disable=missing-function-docstring
# pylint: disable=global-statement
prog: drgn.Program

_LE = drgn.PlatformFlags.IS_LITTLE_ENDIAN
_64 = drgn.PlatformFlags.IS_64_BIT

ARCHITECTURES: Dict[str, Tuple[drgn.Architecture, drgn.PlatformFlags]] = {
    "x86_64": (drgn.Architecture.X86_64, _64 | _LE),
    "i386": (drgn.Architecture.I386, _LE),
    "aarch64": (drgn.Architecture.AARCH64, _64 | _LE),
    "arm": (drgn.Architecture.ARM, _LE),
    "ppc64": (drgn.Architecture.PPC64, _64),
    "s390x": (drgn.Architecture.S390X, _64),
}


def create_program(arch: str = "host") -> drgn.Program:
    """
    Create a drgn.Program for the named architecture, or for the
    machine we are running on if `arch` is "host".
    """
    if arch == "host":
        return drgn.Program(drgn.host_platform)
    try:
        architecture, flags = ARCHITECTURES[arch]
    except KeyError:
        raise ValueError(f"unsupported architecture: {arch}") from None
    return drgn.Program(drgn.Platform(architecture, flags))


def get_prog() -> drgn.Program:
    return prog


def set_prog(myprog: drgn.Program) -> None:
    global prog
    prog = myprog


def get_type(type_name: str) -> drgn.Type:
    """
    Return the drgn.Type for a C type name like "int", "void *" or
    "char[2]".
    """
    try:
        return prog.type(type_name)
    except LookupError as err:
        raise TypeNotFoundError(type_name) from err
    except SyntaxError as err:
        raise TypeNotFoundError(type_name, "not a valid type name") from err


def type_size(type_name: str) -> int:
    """
    Return the size in bytes of a C type on the current platform.
    Incomplete types (e.g. void, unsized arrays) have no size.
    """
    type_ = get_type(type_name)
    try:
        return int(drgn.sizeof(type_))
    except TypeError as err:
        raise TypeNotFoundError(type_name, "type has no size") from err


def describe(type_names: Iterable[str]) -> List[SizeDesc]:
    return [SizeDesc(type_size(name), name) for name in type_names]


def word_bits() -> int:
    return 8 * type_size("size_t")


def word_max() -> int:
    """
    Return the largest value of size_t on the current platform.
    """
    return usize_max_for_bits(word_bits())
