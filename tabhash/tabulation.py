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
from numbers import Integral
from typing import Dict, List, Tuple, Type, Union

import numpy as np

from .config import options
from .random import RandomStateType
from .table import TableShape, TableType, generate_table, table_to_list, validate_table

logger = logging.getLogger(__name__)

KeyArrayType = Union[np.ndarray, List[int], Tuple[int, ...]]


class TabulationHash:
    """
    Base of tabulation hash functions over unsigned integers of `width` bits.

    A hash function is fully determined by its table, which is generated
    from a source of randomness on construction or supplied by the caller
    through :meth:`with_table`. The table is never modified afterwards, so
    one instance can be shared freely between threads.
    """

    __slots__ = ("_table", "_lookup")

    width: int = None
    twisted: bool = False
    table_shape: TableShape = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.width is not None:
            cls.table_shape = TableShape.for_variant(cls.width, cls.twisted)
            cls._key_dtype = np.dtype(f"uint{cls.width}")
            cls._key_max = (1 << cls.width) - 1

    def __init__(self, random_state: RandomStateType = None):
        if self.width is None:
            raise TypeError(f"{type(self).__name__} cannot be instantiated")
        self._set_table(generate_table(self.table_shape, random_state))

    @classmethod
    def new(cls, random_state: RandomStateType = None) -> "TabulationHash":
        return cls(random_state)

    @classmethod
    def with_table(cls, table: TableType) -> "TabulationHash":
        """
        Create a hash function from a previously obtained table.

        Parameters
        ----------
        table : numpy.ndarray or sequence of sequences of int
            Table in storage layout, as returned by :meth:`get_table`, or
            given as rows of Python ints, as returned by
            :meth:`get_table_list`. The table is copied.

        Returns
        -------
        out : TabulationHash
            Hash function of the same class which uses the table verbatim.

        Raises
        ------
        InvalidTableShape
            If the number of rows or columns, or the width of entries,
            does not match the class.
        """
        if cls.width is None:
            raise TypeError(f"{cls.__name__} cannot be instantiated")
        storage = validate_table(table, cls.table_shape)
        logger.debug("Restoring %s from supplied table", cls.__name__)
        obj = cls.__new__(cls)
        obj._set_table(storage)
        return obj

    restore = with_table

    def _set_table(self, table: np.ndarray) -> None:
        table.flags.writeable = False
        self._table = table
        # plain ints are much faster than numpy scalars for single keys
        self._lookup = table_to_list(table)

    def get_table(self) -> np.ndarray:
        """
        Return a copy of the table in storage layout. Changes to the
        copy never affect the hash function.
        """
        return self._table.copy()

    snapshot = get_table

    def get_table_list(self) -> List[List[int]]:
        return [list(row) for row in self._lookup]

    def _check_key(self, key) -> int:
        if not options.hashing.check_keys:
            return int(key) & self._key_max
        if isinstance(key, (bool, np.bool_)) or not isinstance(key, Integral):
            raise TypeError(
                f"Key should be an unsigned integer, got {type(key).__name__}"
            )
        key = int(key)
        if not 0 <= key <= self._key_max:
            raise ValueError(f"Key {key} does not fit into {self.width} bits")
        return key

    def _to_key_array(self, keys: KeyArrayType) -> np.ndarray:
        if isinstance(keys, np.ndarray):
            arr = keys
        else:
            # mixing ints below and above 2**63 would otherwise give float64
            arr = np.asarray(keys, dtype=object)
        if arr.size == 0:
            return np.empty(arr.shape, dtype=self._key_dtype)
        if arr.dtype == object:
            checked = (self._check_key(k) for k in arr.ravel())
            return np.fromiter(checked, dtype=self._key_dtype, count=arr.size).reshape(
                arr.shape
            )
        if arr.dtype.kind not in "ui":
            raise TypeError(f"Keys should be unsigned integers, got {arr.dtype}")
        if arr.dtype != self._key_dtype:
            if options.hashing.check_keys and (
                arr.min() < 0 or int(arr.max()) > self._key_max
            ):
                raise ValueError(f"Keys do not fit into {self.width} bits")
            arr = arr.astype(self._key_dtype)
        return arr

    def _key_byte(self, keys: np.ndarray, idx: int) -> np.ndarray:
        return ((keys >> (8 * idx)) & 0xFF).astype(np.intp)

    def hash(self, key: int) -> int:
        """
        Hash a single key of `width` bits into a value of `width` bits.
        """
        return self._hash_int(self._check_key(key))

    def hash_array(self, keys: KeyArrayType) -> np.ndarray:
        """
        Hash every key of an array. The result has the shape of `keys`
        and an unsigned dtype of `width` bits.
        """
        return self._hash_keys(self._to_key_array(keys))

    def __call__(self, key):
        if isinstance(key, Integral):
            return self.hash(key)
        return self.hash_array(key)

    def _hash_int(self, key: int) -> int:
        raise NotImplementedError

    def _hash_keys(self, keys: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return np.array_equal(self._table, other._table)

    def __hash__(self):
        return hash((type(self).__name__, self._table.tobytes()))

    def __reduce__(self):
        return type(self).with_table, (self._table,)

    def __repr__(self):
        return (
            f"{type(self).__name__}(rows={self.table_shape.rows}, "
            f"entry_bits={self.table_shape.entry_bits})"
        )


class SimpleTabulationHash(TabulationHash):
    """
    Simple tabulation hashing: the key is split into bytes, each byte
    selects an entry from its own row of the table, and the entries are
    combined with xor.

    Keys differing only in byte i have hashes differing exactly by the xor
    of the two entries byte i selects.
    """

    __slots__ = ()

    def _hash_int(self, key: int) -> int:
        h = 0
        for row in self._lookup:
            h ^= row[key & 0xFF]
            key >>= 8
        return h

    def _hash_keys(self, keys: np.ndarray) -> np.ndarray:
        h = np.zeros(keys.shape, dtype=self._key_dtype)
        for idx in range(self.table_shape.rows):
            h ^= self._table[idx, self._key_byte(keys, idx)]
        return h


class TwistedTabulationHash(TabulationHash):
    """
    Twisted tabulation hashing, after Thorup, "Fast and Powerful Hashing
    using Tabulation" (https://arxiv.org/abs/1505.01523).

    Entries are twice as wide as keys. All bytes but the last are combined
    as in simple tabulation; the last byte is xor-ed with the low byte of
    the accumulated value before its lookup, and the high half of the final
    accumulator is returned.
    """

    __slots__ = ()

    twisted = True

    def _hash_int(self, key: int) -> int:
        h = 0
        lookup = self._lookup
        for row in lookup[:-1]:
            h ^= row[key & 0xFF]
            key >>= 8
        # the twist: last index depends on what was accumulated so far
        h ^= lookup[-1][(key ^ h) & 0xFF]
        return h >> self.width

    def _hash_keys(self, keys: np.ndarray) -> np.ndarray:
        shape = self.table_shape
        # view entries as (low, ..., high) 64-bit words in both cases
        table = self._table.reshape(shape.rows, shape.columns, shape.words)
        acc = np.zeros(keys.shape + (shape.words,), dtype=shape.dtype)
        for idx in range(shape.rows - 1):
            acc ^= table[idx, self._key_byte(keys, idx)]

        last = self._key_byte(keys, shape.rows - 1)
        twisted_idx = last ^ (acc[..., 0] & 0xFF).astype(np.intp)
        acc ^= table[shape.rows - 1, twisted_idx]

        if shape.words == 1:
            return (acc[..., 0] >> self.width).astype(self._key_dtype)
        # xor has no carries, so the high word is exactly acc >> 64
        return acc[..., -1].astype(self._key_dtype)


class Tab32Simple(SimpleTabulationHash):
    """
    Simple tabulation hashing of 32-bit keys.

    Examples
    --------
    >>> from tabhash import Tab32Simple
    >>> h = Tab32Simple(random_state=42)
    >>> h.hash(47) == Tab32Simple.with_table(h.get_table()).hash(47)
    True
    """

    __slots__ = ()
    width = 32


class Tab32Twisted(TwistedTabulationHash):
    """
    Twisted tabulation hashing of 32-bit keys, with 64-bit table entries.
    """

    __slots__ = ()
    width = 32


class Tab64Simple(SimpleTabulationHash):
    """
    Simple tabulation hashing of 64-bit keys.
    """

    __slots__ = ()
    width = 64


class Tab64Twisted(TwistedTabulationHash):
    """
    Twisted tabulation hashing of 64-bit keys, with 128-bit table entries
    stored as pairs of 64-bit words.
    """

    __slots__ = ()
    width = 64


_hasher_classes: Dict[Tuple[int, bool], Type[TabulationHash]] = {
    (cls.width, cls.twisted): cls
    for cls in (Tab32Simple, Tab32Twisted, Tab64Simple, Tab64Twisted)
}


def get_hasher_class(width: int, twisted: bool = False) -> Type[TabulationHash]:
    try:
        return _hasher_classes[(width, bool(twisted))]
    except KeyError:
        raise ValueError(f"No tabulation hash for {width}-bit keys") from None
