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

from typing import List

import drgn
from tailalign import target
from tailalign.layout import SizeDesc


def setup_basic_mock_program() -> drgn.Program:
    #
    # We specify an architecture here so we can have consistent
    # results through explicit assumptions like size of pointers
    # and representation of integers.
    #
    return target.create_program("x86_64")


def use_mock_program(prog: drgn.Program) -> drgn.Program:
    target.set_prog(prog)
    return prog


#
# The members of the structure used by the layout tests and their
# sizes on x86_64.
#
MEMBER_TYPES = ['char[2]', 'double', 'int', 'void *', 'short[3]']


def mock_members() -> List[SizeDesc]:
    return [
        SizeDesc(2, 'char[2]'),
        SizeDesc(8, 'double'),
        SizeDesc(4, 'int'),
        SizeDesc(8, 'void *'),
        SizeDesc(6, 'short[3]'),
    ]


MOCK_PROGRAM = setup_basic_mock_program()
MOCK_PROGRAM_32 = target.create_program("i386")
