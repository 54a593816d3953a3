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
Main tailalign package module.

tailalign computes the storage size needed to pack a "head" object and
a trailing "tail" object into one allocation, with both objects
suitably aligned and the tail occupying the final bytes. A typical use
is keeping your own context data together with an opaque library
structure whose size is only known at run-time.

The alignment arithmetic lives in tailalign.align and never raises;
failures are reported through tailalign.SizeResult. The reporting
helpers in tailalign.layout and the C type lookup in tailalign.target
build on top of it.
"""

#
# We are being very explicit of what this module exposes
# so as to avoid any future cyclic-dependencies in how
# the modules are imported.
#
from tailalign.error import (Error, ArgumentsError, SizeError,
                             SizeOverflowError, SizeUnderflowError,
                             TypeNotFoundError, ZeroSizeError)
from tailalign.result import Failure, SizeResult
from tailalign.align import (USIZE_BITS, USIZE_MAX, checked_add, checked_mul,
                             checked_tail_offset, largest_power_of_two_factor,
                             padding_size, sort_sizes_descending,
                             tail_aligned_size, tail_offset,
                             usize_max_for_bits)
from tailalign.layout import (LayoutReport, PaddingEntry, SizeDesc,
                              full_layout, incremental_layout, max_factor)

__all__ = [
    'ArgumentsError',
    'Error',
    'Failure',
    'LayoutReport',
    'PaddingEntry',
    'SizeDesc',
    'SizeError',
    'SizeOverflowError',
    'SizeResult',
    'SizeUnderflowError',
    'TypeNotFoundError',
    'USIZE_BITS',
    'USIZE_MAX',
    'ZeroSizeError',
    'checked_add',
    'checked_mul',
    'checked_tail_offset',
    'full_layout',
    'incremental_layout',
    'largest_power_of_two_factor',
    'max_factor',
    'padding_size',
    'sort_sizes_descending',
    'tail_aligned_size',
    'tail_offset',
    'usize_max_for_bits',
]
