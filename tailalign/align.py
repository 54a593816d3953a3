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
This module contains the alignment arithmetic of tailalign.

The functions below answer one question: given a "head" object that
sits at offset zero and a "tail" object whose last byte must be the
last byte of the allocation, how large must the allocation be so that
both objects are suitably aligned, and where does the tail begin?

The alignment requirement of an object is approximated by the largest
power of two that divides its size. All arithmetic is done on an
unsigned machine word whose maximum value is `usize_max` (64 bits by
default). Python integers never wrap, so every addition that could
leave the word is checked explicitly and reported through a
SizeResult instead of producing a bogus value.
"""

from typing import Any, Callable, List, MutableSequence, Optional

from tailalign.result import Failure, SizeResult

USIZE_BITS = 64
USIZE_MAX = (1 << USIZE_BITS) - 1


def usize_max_for_bits(bits: int) -> int:
    """
    Return the maximum value of an unsigned word of the given width.
    """
    if bits <= 0:
        raise ValueError(f"word width must be positive, got {bits}")
    return (1 << bits) - 1


def checked_add(a: int, b: int, usize_max: int = USIZE_MAX) -> Optional[int]:
    """
    Return a + b, or None if the sum does not fit in the word.
    """
    if usize_max - a < b:
        return None
    return a + b


def checked_mul(a: int, b: int, usize_max: int = USIZE_MAX) -> Optional[int]:
    """
    Return a * b, or None if the product does not fit in the word.
    """
    if a != 0 and b > usize_max // a:
        return None
    return a * b


def largest_power_of_two_factor(number: int,
                                *,
                                usize_max: int = USIZE_MAX) -> int:
    """
    Return the largest power of two that divides `number`.

    This is a divisibility search: a candidate factor is accepted only
    while it is not larger than `number`, divides it evenly and can
    still be doubled without leaving the word. The last accepted
    candidate is returned, so the result is always at least 1 and
    never more than a quarter of the word's range. A `number` of zero
    is never reached by any candidate, so it yields 1.
    """
    factor = candidate = 1
    while number >= candidate and number % candidate == 0:
        doubled = checked_mul(candidate, 2, usize_max)
        if doubled is None:
            break
        factor = candidate
        candidate = doubled
    return factor


def tail_aligned_size(head_size: int,
                      tail_size: int,
                      *,
                      usize_max: int = USIZE_MAX) -> SizeResult:
    """
    Return the total size required to satisfy the alignment of two
    objects:
      The head: An object at an offset of zero
      The tail: An object whose final byte is the final byte of the
                total size

    Any padding begins `head_size` bytes into the total size. A zero
    head or tail size fails with Failure.ZERO_INPUT, and a total that
    does not fit in the word, or a size that is itself larger than the
    word, fails with Failure.OVERFLOW. The sentinel of this operation is
    0. Negative sizes raise ValueError.
    """
    operation = "tail_aligned_size"
    if head_size < 0 or tail_size < 0:
        raise ValueError(
            f"sizes must not be negative, got {head_size} and {tail_size}")
    if not head_size or not tail_size:
        return SizeResult.fail(operation, Failure.ZERO_INPUT)
    if head_size > usize_max or tail_size > usize_max:
        return SizeResult.fail(operation, Failure.OVERFLOW)

    hpow = largest_power_of_two_factor(head_size, usize_max=usize_max)
    tpow = largest_power_of_two_factor(tail_size, usize_max=usize_max)

    # The strictest of the two requirements wins.
    factor = max(hpow, tpow)

    total = checked_add(head_size, tail_size, usize_max)
    if total is None:
        return SizeResult.fail(operation, Failure.OVERFLOW)

    remainder = total % factor
    if remainder:
        total = checked_add(total, factor - remainder, usize_max)
        if total is None:
            return SizeResult.fail(operation, Failure.OVERFLOW)
    return SizeResult.success(operation, total)


def padding_size(head_size: int,
                 tail_size: int,
                 *,
                 usize_max: int = USIZE_MAX) -> SizeResult:
    """
    Return the size of any padding that tail_aligned_size() would
    introduce between the head and the tail.

    Failures are those of tail_aligned_size(), but the sentinel of
    this operation is `usize_max` rather than 0.
    """
    operation = "padding_size"
    total = tail_aligned_size(head_size, tail_size, usize_max=usize_max)
    if total.failure is not None:
        return SizeResult.fail(operation, total.failure, sentinel=usize_max)
    return SizeResult.success(operation,
                              total.unwrap() - tail_size - head_size,
                              sentinel=usize_max)


def tail_offset(total_size: int, tail_size: int) -> int:
    """
    Return the offset at which the tail begins within `total_size`.

    No check is made: the caller must pass a `total_size` that is at
    least `tail_size`, typically a result of tail_aligned_size(). If
    that contract is broken the returned number is not an offset. Use
    checked_tail_offset() when the inputs are not known to be sane.
    """
    return total_size - tail_size


def checked_tail_offset(total_size: int, tail_size: int) -> SizeResult:
    """
    Like tail_offset() but fails with Failure.UNDERFLOW when the tail
    does not fit in `total_size`.
    """
    operation = "tail_offset"
    if tail_size > total_size:
        return SizeResult.fail(operation, Failure.UNDERFLOW)
    return SizeResult.success(operation, total_size - tail_size)


def _leading_size(record: Any) -> Any:
    """
    The default sort key: a record is either a size by itself or a
    tuple (e.g. SizeDesc) whose first field is the size.
    """
    if isinstance(record, tuple):
        return record[0] if record else None
    return record


def _is_size(value: Any, usize_max: int) -> bool:
    return (isinstance(value, int) and not isinstance(value, bool) and
            0 <= value <= usize_max)


def sort_sizes_descending(records: Optional[MutableSequence[Any]],
                          key: Optional[Callable[[Any], int]] = None,
                          *,
                          usize_max: int = USIZE_MAX) -> None:
    """
    Sort `records` in place so that their sizes are in descending
    order. The size of each record is extracted by `key`, or by
    _leading_size() if no key is given. Records that share a size may
    end up in any order.

    If `records` is None or empty, or if the size of any record cannot
    be extracted as an unsigned word, this function simply returns
    without modifying anything.
    """
    if not records:
        return
    if key is None:
        key = _leading_size

    sizes = [key(record) for record in records]
    if not all(_is_size(size, usize_max) for size in sizes):
        return

    order: List[int] = sorted(range(len(sizes)),
                              key=sizes.__getitem__,
                              reverse=True)
    reordered = [records[i] for i in order]
    for i, record in enumerate(reordered):
        records[i] = record
