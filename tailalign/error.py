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
"""This module contains the "tailalign.Error" exception."""


class Error(Exception):
    """
    This is the superclass of all tailalign error exceptions.
    """

    text: str = ""

    def __init__(self, text: str) -> None:
        self.text = f"tailalign: {text}"
        super().__init__(self.text)


class SizeError(Error):
    # pylint: disable=missing-docstring

    operation: str = ""
    message: str = ""

    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        self.message = message
        super().__init__(f"{operation}: {message}")


class ZeroSizeError(SizeError):
    # pylint: disable=missing-docstring

    def __init__(self, operation: str) -> None:
        super().__init__(operation, "head and tail sizes must be non-zero")


class SizeOverflowError(SizeError):
    # pylint: disable=missing-docstring

    def __init__(self, operation: str) -> None:
        super().__init__(operation, "result does not fit the machine word")


class SizeUnderflowError(SizeError):
    # pylint: disable=missing-docstring

    def __init__(self, operation: str) -> None:
        super().__init__(operation, "tail is larger than the total size")


class TypeNotFoundError(Error):
    """
    Thrown when a C type name cannot be resolved to a size.
    """

    type_name: str = ""

    def __init__(self, type_name: str, reason: str = "") -> None:
        self.type_name = type_name
        msg = f"couldn't find type '{type_name}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class ArgumentsError(Error):
    # pylint: disable=missing-docstring

    def __init__(self, message: str) -> None:
        super().__init__(f"invalid input: {message}")
