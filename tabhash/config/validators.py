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

from typing import Callable

import numpy as np

ValidatorType = Callable[..., bool]


class Validator:
    def __init__(self, func: ValidatorType):
        self._func = func

    def __call__(self, arg) -> bool:
        return self._func(arg)

    def __or__(self, other):
        return OrValidator(self, other)


class OrValidator(Validator):
    def __init__(self, lhs: Validator, rhs: Validator):
        super().__init__(lambda x: lhs(x) or rhs(x))


def _is_integral(x) -> bool:
    # bool is an int subclass but never a meaningful seed or size
    return isinstance(x, (int, np.integer)) and not isinstance(x, (bool, np.bool_))


is_null = Validator(lambda x: x is None)
is_bool = Validator(lambda x: isinstance(x, bool))
is_integer = Validator(_is_integral)
is_non_negative_integer = Validator(lambda x: is_integer(x) and bool(x >= 0))
is_seed = is_null | is_non_negative_integer


def is_bit_generator_name(name) -> bool:
    """
    Check if `name` refers to a bit generator class shipped with numpy.random
    """
    if not isinstance(name, str):
        return False
    bit_gen_cls = getattr(np.random, name, None)
    return isinstance(bit_gen_cls, type) and issubclass(
        bit_gen_cls, np.random.BitGenerator
    )
