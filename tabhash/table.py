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

import logging
from dataclasses import dataclass
from numbers import Integral
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from .config import options
from .errors import InvalidTableShape
from .random import RandomState, RandomStateType

logger = logging.getLogger(__name__)

TABLE_COLUMNS = 256
SUPPORTED_WIDTHS = (32, 64)
_WORD_MASK = (1 << 64) - 1

TableType = Union[np.ndarray, Sequence[Sequence[int]]]


@dataclass(frozen=True)
class TableShape:
    """
    Shape of a tabulation table: one row per key byte, one column per byte
    value, entries of `entry_bits` bits.
    """

    rows: int
    entry_bits: int
    columns: int = TABLE_COLUMNS

    @classmethod
    def for_variant(cls, width: int, twisted: bool = False) -> "TableShape":
        if width not in SUPPORTED_WIDTHS:
            raise ValueError(
                f"Key width must be one of {SUPPORTED_WIDTHS}, got {width}"
            )
        return cls(rows=width // 8, entry_bits=2 * width if twisted else width)

    @property
    def word_bits(self) -> int:
        return min(self.entry_bits, 64)

    @property
    def words(self) -> int:
        return self.entry_bits // self.word_bits

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(f"uint{self.word_bits}")

    @property
    def storage_shape(self) -> Tuple[int, ...]:
        if self.words == 1:
            return self.rows, self.columns
        # wide entries keep (low, high) 64-bit halves on the last axis
        return self.rows, self.columns, self.words

    @property
    def max_entry(self) -> int:
        return (1 << self.entry_bits) - 1


def generate_table(
    shape: TableShape, random_state: RandomStateType = None
) -> np.ndarray:
    """
    Generate a table of independent, uniformly distributed entries.

    Parameters
    ----------
    shape : TableShape
        Shape of the table to generate.
    random_state : optional
        Source of randomness, see ``tabhash.random.get_random_generator``.

    Returns
    -------
    out : numpy.ndarray
        Table in storage layout, of shape ``shape.storage_shape``.
    """
    if not isinstance(random_state, RandomState):
        random_state = RandomState(random_state)
    table = random_state.random_integers(shape.word_bits, shape.storage_shape)
    logger.debug(
        "Generated table with %d rows of %d-bit entries",
        shape.rows,
        shape.entry_bits,
    )
    return table


def _check_dims(dims: Tuple[int, ...], shape: TableShape) -> None:
    if len(dims) < 1 or dims[0] != shape.rows:
        actual = dims[0] if dims else 0
        raise InvalidTableShape(
            f"Table should have {shape.rows} rows, got {actual}", shape, dims
        )
    if len(dims) < 2 or dims[1] != shape.columns:
        actual = dims[1] if len(dims) > 1 else 0
        raise InvalidTableShape(
            f"Table rows should have {shape.columns} entries, got {actual}",
            shape,
            dims,
        )
    if dims[2:] != shape.storage_shape[2:]:
        raise InvalidTableShape(
            f"Table entries should be {shape.entry_bits} bits wide, "
            f"got array of shape {dims}",
            shape,
            dims,
        )


def validate_table(
    table: TableType, shape: TableShape, allow_cast: Optional[bool] = None
) -> np.ndarray:
    """
    Check that `table` fits `shape` and return a private copy in
    storage layout.

    Numpy arrays are expected in storage layout and of the storage dtype.
    Arrays of another integer dtype are accepted only when `allow_cast`
    (default: option ``table.allow_cast``, off) is on and every value fits
    the entry width.
    Anything else is read as nested sequences of Python ints.
    """
    if not isinstance(table, np.ndarray) or table.dtype == object:
        return table_from_list(table, shape)

    if allow_cast is None:
        allow_cast = options.table.allow_cast

    _check_dims(table.shape, shape)
    if table.dtype != shape.dtype:
        if not allow_cast or table.dtype.kind not in "ui":
            raise InvalidTableShape(
                f"Table entries should be of dtype {shape.dtype}, got {table.dtype}",
                shape,
                table.shape,
            )
        if table.size and (
            table.min() < 0 or int(table.max()) > np.iinfo(shape.dtype).max
        ):
            raise InvalidTableShape(
                f"Table entries do not fit into {shape.word_bits} bits",
                shape,
                table.shape,
            )
    return np.array(table, dtype=shape.dtype, order="C", copy=True)


def table_from_list(table: Sequence[Sequence[int]], shape: TableShape) -> np.ndarray:
    """
    Convert a table given as rows of Python ints into storage layout.
    """
    try:
        rows = [list(row) for row in table]
    except TypeError:
        raise InvalidTableShape(
            "Table should be a sequence of rows of integers", shape
        ) from None

    # entries are single ints here, whatever the storage layout
    dims = (len(rows), len(rows[0]) if rows else 0)
    _check_dims(dims + shape.storage_shape[2:], shape)

    out = np.empty(shape.storage_shape, dtype=shape.dtype)
    for row_idx, row in enumerate(rows):
        if len(row) != shape.columns:
            raise InvalidTableShape(
                f"Row {row_idx} should have {shape.columns} entries, got {len(row)}",
                shape,
            )
        for col_idx, val in enumerate(row):
            if not isinstance(val, Integral) or isinstance(val, bool):
                raise InvalidTableShape(
                    f"Entry [{row_idx}][{col_idx}] is not an integer: {val!r}",
                    shape,
                )
            if not 0 <= val <= shape.max_entry:
                raise InvalidTableShape(
                    f"Entry [{row_idx}][{col_idx}] does not fit into "
                    f"{shape.entry_bits} bits",
                    shape,
                )
        if shape.words == 1:
            out[row_idx] = [int(v) for v in row]
        else:
            out[row_idx, :, 0] = [int(v) & _WORD_MASK for v in row]
            out[row_idx, :, 1] = [int(v) >> 64 for v in row]
    logger.debug("Loaded table with %d rows from integer lists", shape.rows)
    return out


def table_to_list(table: np.ndarray) -> List[List[int]]:
    """
    Convert a table in storage layout into rows of Python ints, joining
    (low, high) halves of wide entries.
    """
    if table.ndim == 2:
        return table.tolist()
    return [
        [(int(hi) << 64) | int(lo) for lo, hi in row.tolist()] for row in table
    ]
