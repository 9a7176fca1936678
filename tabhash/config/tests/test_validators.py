# Copyright 1999-2024 Alibaba Group Holding Ltd.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import numpy as np
import pytest

from ..validators import (
    is_bit_generator_name,
    is_integer,
    is_non_negative_integer,
    is_seed,
)


@pytest.mark.parametrize("value", ["PCG64", "PCG64DXSM", "Philox", "SFC64", "MT19937"])
def test_bit_generator_name_valid(value):
    assert is_bit_generator_name(value)


@pytest.mark.parametrize("value", ["pcg64", "Generator", "RandomState", "", None, 1])
def test_bit_generator_name_invalid(value):
    assert not is_bit_generator_name(value)


@pytest.mark.parametrize(
    "value,valid",
    [
        (None, True),
        (0, True),
        (2**80, True),
        (np.uint64(3), True),
        (-1, False),
        (True, False),
        (1.0, False),
        ("1", False),
    ],
)
def test_is_seed_validator(value, valid):
    assert is_seed(value) is valid


@pytest.mark.parametrize(
    "value,valid", [("a", False), (1, True), (0, True), (-1, False), (False, False)]
)
def test_is_non_negative_integer_validator(value, valid):
    assert is_non_negative_integer(value) is valid
    assert is_integer(value) is (valid or value == -1)
