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

from importlib.metadata import PackageNotFoundError

from .config import option_context, options
from .errors import InvalidTableShape, TabHashError
from .random import RandomState
from .table import TableShape, generate_table, table_from_list, table_to_list
from .tabulation import (
    SimpleTabulationHash,
    Tab32Simple,
    Tab32Twisted,
    Tab64Simple,
    Tab64Twisted,
    TabulationHash,
    TwistedTabulationHash,
    get_hasher_class,
)


def _get_version():
    from importlib.metadata import version

    return version("tabhash")


try:
    __version__ = _get_version()
except PackageNotFoundError:  # pragma: no cover
    pass
