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

import threading
from numbers import Integral
from typing import Dict, Optional, Union

import numpy as np

from .config import options

RandomStateType = Union[
    None,
    int,
    np.random.SeedSequence,
    np.random.BitGenerator,
    np.random.Generator,
    np.random.RandomState,
    "RandomState",
]

_global_seed_sequences: Dict[int, np.random.SeedSequence] = dict()
_global_seed_lock = threading.Lock()


def _next_seed_sequence() -> np.random.SeedSequence:
    seed = options.random.seed
    if seed is None:
        # draws fresh entropy from the OS on every call
        return np.random.SeedSequence()
    with _global_seed_lock:
        try:
            root = _global_seed_sequences[seed]
        except KeyError:
            root = _global_seed_sequences[seed] = np.random.SeedSequence(seed)
        return root.spawn(1)[0]


def reset_seed_sequences() -> None:
    """
    Forget spawned children of `random.seed`, so that the next tables
    generated under the same seed are identical to the first ones.
    """
    with _global_seed_lock:
        _global_seed_sequences.clear()


def new_bit_generator(
    seed_seq: np.random.SeedSequence, name: Optional[str] = None
) -> np.random.BitGenerator:
    name = name or options.random.bit_generator
    return getattr(np.random, name)(seed_seq)


def get_random_generator(random_state: RandomStateType = None) -> np.random.Generator:
    """
    Resolve anything that can act as a source of randomness into a numpy
    Generator.

    Parameters
    ----------
    random_state : None, int, SeedSequence, BitGenerator, Generator, or RandomState
        When None, a new stream is created, either from OS entropy or, when
        the option ``random.seed`` is set, as a spawned child of that seed.
        Integers and seed sequences seed a new bit generator of the kind
        named by ``random.bit_generator``. Generators are used as is and
        will advance.

    Returns
    -------
    out : numpy.random.Generator
    """
    if random_state is None:
        return np.random.Generator(new_bit_generator(_next_seed_sequence()))
    elif isinstance(random_state, RandomState):
        return random_state.to_numpy()
    elif isinstance(random_state, np.random.Generator):
        return random_state
    elif isinstance(random_state, np.random.BitGenerator):
        return np.random.Generator(random_state)
    elif isinstance(random_state, np.random.RandomState):
        # legacy states only provide entropy for a new stream
        entropy = random_state.randint(0, 1 << 32, size=4, dtype=np.uint64)
        seed_seq = np.random.SeedSequence(entropy.tolist())
        return np.random.Generator(new_bit_generator(seed_seq))
    elif isinstance(random_state, np.random.SeedSequence):
        return np.random.Generator(new_bit_generator(random_state))
    elif isinstance(random_state, Integral) and not isinstance(random_state, bool):
        if random_state < 0:
            raise ValueError(f"Seed must be non-negative, got {random_state}")
        seed_seq = np.random.SeedSequence(int(random_state))
        return np.random.Generator(new_bit_generator(seed_seq))
    raise TypeError(
        f"Cannot use object of type {type(random_state).__name__} as random state"
    )


class RandomState:
    def __init__(self, seed=None):
        self._generator = get_random_generator(seed)

    def seed(self, seed=None):
        """
        Seed the generator.

        This method is called when `RandomState` is initialized. It can be
        called again to re-seed the generator.

        Parameters
        ----------
        seed : int, SeedSequence or BitGenerator, optional
            Seed for `RandomState`. When omitted, a new independent stream
            is used.
        """
        self._generator = get_random_generator(seed)

    def to_numpy(self) -> np.random.Generator:
        return self._generator

    @classmethod
    def from_numpy(cls, np_generator: np.random.Generator) -> "RandomState":
        state = RandomState.__new__(cls)
        state._generator = np_generator
        return state

    def random_integers(self, bits: int, size) -> np.ndarray:
        """
        Draw uniform unsigned integers covering the full range of a
        32 or 64 bit word.
        """
        dtype = np.dtype(f"uint{bits}")
        return self._generator.integers(
            0, np.iinfo(dtype).max, size=size, dtype=dtype, endpoint=True
        )
