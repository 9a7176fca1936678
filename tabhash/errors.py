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

from typing import Optional


class TabHashError(Exception):
    pass


class InvalidTableShape(TabHashError, ValueError):
    """
    Raised when a supplied table does not fit the hasher it is given to,
    either by its row / column counts or by the width of its entries.
    """

    def __init__(self, reason: str, expected=None, actual: Optional[tuple] = None):
        self.reason = reason
        self.expected = expected
        self.actual = actual
        super().__init__(reason)

    def __str__(self):
        msg = self.reason
        if self.expected is not None:
            msg += f" (expected {self.expected!r})"
        return msg
