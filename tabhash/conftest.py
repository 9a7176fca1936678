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

from .config import reset_global_options
from .random import reset_seed_sequences
from .tabulation import Tab32Simple, Tab32Twisted, Tab64Simple, Tab64Twisted

_all_hasher_classes = [Tab32Simple, Tab32Twisted, Tab64Simple, Tab64Twisted]


@pytest.fixture(autouse=True)
def isolated_random_state():
    reset_global_options()
    reset_seed_sequences()
    try:
        yield
    finally:
        reset_global_options()
        reset_seed_sequences()


@pytest.fixture
def rng():
    return np.random.default_rng(0x7AB5EED)


@pytest.fixture(params=_all_hasher_classes, ids=lambda cls: cls.__name__)
def hasher_cls(request):
    return request.param


@pytest.fixture(params=[Tab32Simple, Tab64Simple], ids=lambda cls: cls.__name__)
def simple_hasher_cls(request):
    return request.param


@pytest.fixture(params=[Tab32Twisted, Tab64Twisted], ids=lambda cls: cls.__name__)
def twisted_hasher_cls(request):
    return request.param
