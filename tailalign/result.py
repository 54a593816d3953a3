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
This module contains the SizeResult type returned by the size and
offset computations of tailalign.align.

Instead of folding errors into magic return values, every guarded
computation returns a SizeResult that either holds the computed value
or a Failure tag. The magic value that the computation would have
returned in the C-style API (its "sentinel") travels with the result
so that callers needing that exact behavior can still get it through
as_sentinel().
"""

from enum import Enum
from typing import Optional

from tailalign.error import (SizeError, SizeOverflowError,
                             SizeUnderflowError, ZeroSizeError)


class Failure(Enum):
    """
    The reasons a size or offset computation can fail.
    """
    ZERO_INPUT = "zero input"
    OVERFLOW = "overflow"
    UNDERFLOW = "underflow"


_FAILURE_ERRORS = {
    Failure.ZERO_INPUT: ZeroSizeError,
    Failure.OVERFLOW: SizeOverflowError,
    Failure.UNDERFLOW: SizeUnderflowError,
}


class SizeResult:
    """
    Either a computed size/offset or the Failure that prevented it.
    """

    __slots__ = "operation", "value", "failure", "sentinel"

    def __init__(self,
                 operation: str,
                 value: Optional[int] = None,
                 failure: Optional[Failure] = None,
                 sentinel: int = 0) -> None:
        assert (value is None) != (failure is None)
        self.operation = operation
        self.value = value
        self.failure = failure
        self.sentinel = sentinel

    @classmethod
    def success(cls, operation: str, value: int,
                sentinel: int = 0) -> "SizeResult":
        return cls(operation, value=value, sentinel=sentinel)

    @classmethod
    def fail(cls, operation: str, failure: Failure,
             sentinel: int = 0) -> "SizeResult":
        return cls(operation, failure=failure, sentinel=sentinel)

    @property
    def ok(self) -> bool:
        return self.failure is None

    def as_sentinel(self) -> int:
        """
        Return the value, or the sentinel of the operation that
        produced this result if the computation failed.
        """
        if self.value is None:
            return self.sentinel
        return self.value

    def unwrap(self) -> int:
        """
        Return the value, or raise the SizeError subclass that matches
        the failure.
        """
        if self.failure is not None:
            error: SizeError = _FAILURE_ERRORS[self.failure](self.operation)
            raise error
        assert self.value is not None
        return self.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SizeResult):
            return NotImplemented
        return (self.value, self.failure) == (other.value, other.failure)

    def __hash__(self) -> int:
        return hash((self.value, self.failure))

    def __repr__(self) -> str:
        if self.failure is not None:
            return f"SizeResult({self.operation}: {self.failure.value})"
        return f"SizeResult({self.operation}: {self.value})"
