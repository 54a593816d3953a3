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

from typing import List, Tuple

import pytest

from tailalign import (USIZE_MAX, Failure, SizeDesc, checked_add, checked_mul,
                       checked_tail_offset, largest_power_of_two_factor,
                       padding_size, sort_sizes_descending,
                       tail_aligned_size, tail_offset, usize_max_for_bits)

USIZE32_MAX = 2**32 - 1

FACTOR_TABLE = [
    (1, 1),
    (2, 2),
    (3, 1),
    (6, 2),
    (8, 8),
    (12, 4),
    (24, 8),
    (4096, 4096),
    (USIZE_MAX, 1),
    (2**62, 2**62),
    (3 * 2**62, 2**62),
    # a candidate whose double leaves the word is never accepted
    (2**63, 2**62),
    # 0 >= 1 does not hold, so the search never starts
    (0, 1),
]


@pytest.mark.parametrize('number, factor', FACTOR_TABLE)
def test_largest_power_of_two_factor(number: int, factor: int) -> None:
    assert largest_power_of_two_factor(number) == factor


def test_largest_power_of_two_factor_32bit_word() -> None:
    assert largest_power_of_two_factor(2**31, usize_max=USIZE32_MAX) == 2**30
    assert largest_power_of_two_factor(2**30, usize_max=USIZE32_MAX) == 2**30
    assert largest_power_of_two_factor(2**31) == 2**31


def test_largest_power_of_two_factor_is_maximal() -> None:
    for number in range(1, 1025):
        factor = largest_power_of_two_factor(number)
        assert factor >= 1
        assert factor & (factor - 1) == 0
        assert number % factor == 0
        doubled = 2 * factor
        assert doubled > number or number % doubled != 0


SIZE_TABLE = [
    # (head, tail, total, padding)
    (2, 8, 16, 6),
    (8, 2, 16, 6),
    (4, 4, 8, 0),
    (3, 5, 8, 0),
    (6, 4, 12, 2),
    (1, 16, 32, 15),
    (16, 1, 32, 15),
    (24, 8, 32, 0),
    (5, 3, 8, 0),
]


@pytest.mark.parametrize('head, tail, total, padding', SIZE_TABLE)
def test_tail_aligned_size(head: int, tail: int, total: int,
                           padding: int) -> None:
    result = tail_aligned_size(head, tail)

    assert result.ok
    assert result.unwrap() == total
    assert result.as_sentinel() == total
    assert padding_size(head, tail).unwrap() == padding
    assert tail_offset(total, tail) == total - tail


def test_tail_aligned_size_properties() -> None:
    for head in range(1, 65):
        for tail in range(1, 65):
            total = tail_aligned_size(head, tail).unwrap()
            factor = max(largest_power_of_two_factor(head),
                         largest_power_of_two_factor(tail))
            assert total >= head + tail
            assert total % factor == 0
            assert padding_size(head, tail).unwrap() == total - head - tail

            offset = tail_offset(total, tail)
            assert head <= offset
            assert offset + tail == total


ZERO_TABLE: List[Tuple[int, int]] = [(0, 5), (5, 0), (0, 0)]


@pytest.mark.parametrize('head, tail', ZERO_TABLE)
def test_zero_input(head: int, tail: int) -> None:
    total = tail_aligned_size(head, tail)
    padding = padding_size(head, tail)

    assert not total.ok
    assert total.failure == Failure.ZERO_INPUT
    assert total.as_sentinel() == 0
    assert padding.failure == Failure.ZERO_INPUT
    assert padding.as_sentinel() == USIZE_MAX


OVERFLOW_TABLE = [
    # the sum of the sizes overflows
    (USIZE_MAX, 1),
    (1, USIZE_MAX),
    (USIZE_MAX - 1, 2),
    # the sum fits but the padding does not
    (USIZE_MAX - 9, 8),
    # a size that does not fit in the word to begin with
    (USIZE_MAX + 1, 1),
    (1, USIZE_MAX + 1),
]


@pytest.mark.parametrize('head, tail', OVERFLOW_TABLE)
def test_overflow(head: int, tail: int) -> None:
    total = tail_aligned_size(head, tail)
    padding = padding_size(head, tail)

    assert total.failure == Failure.OVERFLOW
    assert total.value is None
    assert total.as_sentinel() == 0
    assert padding.failure == Failure.OVERFLOW
    assert padding.as_sentinel() == USIZE_MAX


NEGATIVE_TABLE: List[Tuple[int, int]] = [(-1, 1), (4, -4), (-8, -8)]


@pytest.mark.parametrize('head, tail', NEGATIVE_TABLE)
def test_negative_size(head: int, tail: int) -> None:
    with pytest.raises(ValueError):
        tail_aligned_size(head, tail)
    with pytest.raises(ValueError):
        padding_size(head, tail)


def test_size_larger_than_32bit_word() -> None:
    total = tail_aligned_size(2**32, 4, usize_max=USIZE32_MAX)
    padding = padding_size(4, 2**32, usize_max=USIZE32_MAX)

    assert total.failure == Failure.OVERFLOW
    assert total.as_sentinel() == 0
    assert padding.failure == Failure.OVERFLOW
    assert padding.as_sentinel() == USIZE32_MAX


def test_largest_total_that_fits() -> None:
    # both sizes are odd, so their even sum needs no padding
    head = USIZE_MAX - 2
    assert tail_aligned_size(head, 1).unwrap() == USIZE_MAX - 1
    assert padding_size(head, 1).unwrap() == 0


def test_overflow_32bit_word() -> None:
    total = tail_aligned_size(USIZE32_MAX - 2, 1, usize_max=USIZE32_MAX)
    assert total.unwrap() == USIZE32_MAX - 1

    total = tail_aligned_size(USIZE32_MAX - 1, 2, usize_max=USIZE32_MAX)
    assert total.failure == Failure.OVERFLOW

    padding = padding_size(USIZE32_MAX, 1, usize_max=USIZE32_MAX)
    assert padding.as_sentinel() == USIZE32_MAX

    # the same sizes are fine on a 64-bit word
    assert tail_aligned_size(USIZE32_MAX - 1, 2).unwrap() == 2**32


def test_tail_offset() -> None:
    assert tail_offset(16, 8) == 8
    assert tail_offset(8, 8) == 0
    assert checked_tail_offset(16, 8).unwrap() == 8


def test_tail_offset_larger_tail() -> None:
    #
    # tail_offset() trusts its caller; when the tail does not fit the
    # result is not an offset, but nothing is raised either.
    #
    offset = tail_offset(4, 8)
    assert not 0 <= offset <= USIZE_MAX

    result = checked_tail_offset(4, 8)
    assert result.failure == Failure.UNDERFLOW
    assert result.as_sentinel() == 0


def test_checked_arithmetic() -> None:
    assert checked_add(1, 2) == 3
    assert checked_add(USIZE_MAX - 1, 1) == USIZE_MAX
    assert checked_add(USIZE_MAX, 1) is None
    assert checked_add(200, 100, usize_max=255) is None

    assert checked_mul(2**63, 1) == 2**63
    assert checked_mul(2**63, 2) is None
    assert checked_mul(0, USIZE_MAX) == 0
    assert checked_mul(128, 2, usize_max=255) is None


def test_usize_max_for_bits() -> None:
    assert usize_max_for_bits(8) == 255
    assert usize_max_for_bits(64) == USIZE_MAX
    with pytest.raises(ValueError):
        usize_max_for_bits(0)


def test_sort_sizes() -> None:
    sizes = [2, 8, 4, 16, 6]

    sort_sizes_descending(sizes)

    assert sizes == [16, 8, 6, 4, 2]


def test_sort_labels_follow_sizes() -> None:
    records = [
        SizeDesc(2, 'two'),
        SizeDesc(8, 'eight'),
        SizeDesc(4, 'four'),
        SizeDesc(16, 'sixteen'),
        SizeDesc(6, 'six'),
    ]

    sort_sizes_descending(records)

    assert records == [
        SizeDesc(16, 'sixteen'),
        SizeDesc(8, 'eight'),
        SizeDesc(6, 'six'),
        SizeDesc(4, 'four'),
        SizeDesc(2, 'two'),
    ]


def test_sort_with_key() -> None:
    records = [{'sz': 1}, {'sz': 32}, {'sz': 4}]

    sort_sizes_descending(records, key=lambda r: r['sz'])

    assert [r['sz'] for r in records] == [32, 4, 1]


def test_sort_ties_keep_all_records() -> None:
    records = [(8, 'a'), (4, 'b'), (8, 'c'), (4, 'd')]

    sort_sizes_descending(records)

    assert [size for size, _ in records] == [8, 8, 4, 4]
    assert sorted(records) == [(4, 'b'), (4, 'd'), (8, 'a'), (8, 'c')]


def test_sort_empty() -> None:
    records: List[int] = []

    sort_sizes_descending(records)
    sort_sizes_descending(None)

    assert records == []


NO_SIZE_TABLE = [
    ['a', 'b'],
    [(), (4, 'b')],
    [(2, 'a'), ('8', 'b')],
    [True, False],
    [2, -1, 8],
]


@pytest.mark.parametrize('records', NO_SIZE_TABLE)
def test_sort_without_sizes_is_noop(records: List[object]) -> None:
    before = list(records)
    identity = [id(record) for record in records]

    sort_sizes_descending(records)

    assert records == before
    assert [id(record) for record in records] == identity


def test_sort_key_larger_than_word_is_noop() -> None:
    records = [1, 2**40, 3]

    sort_sizes_descending(records, usize_max=USIZE32_MAX)

    assert records == [1, 2**40, 3]
