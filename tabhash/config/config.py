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

import contextlib
import contextvars
from copy import deepcopy
from typing import Any, Dict, Optional

from .validators import ValidatorType, is_bit_generator_name, is_bool, is_seed

_DEFAULT_BIT_GENERATOR = "PCG64"


class OptionError(Exception):
    pass


class AttributeDict(dict):
    def __init__(self, *args, **kwargs):
        self._inited = False
        super().__init__(*args, **kwargs)
        self._inited = True

    def __getattr__(self, item: str):
        if item in self:
            val = self[item]
            if isinstance(val, AttributeDict):
                return val
            return val[0]
        return object.__getattribute__(self, item)

    def __dir__(self):
        return list(self.keys())

    def register(
        self, key: str, value: Any, validator: Optional[ValidatorType] = None
    ) -> None:
        self[key] = value, validator

    def _setattr(self, key: str, value: Any) -> None:
        if key not in self or isinstance(self[key], AttributeDict):
            raise OptionError(f"Cannot identify configuration name '{key}'.")

        validate = self[key][1]
        if validate is not None and not validate(value):
            raise ValueError(f"Cannot set value {value!r} to option {key}")
        self[key] = value, validate

    def __setattr__(self, key: str, value: Any):
        if key == "_inited" or not self._inited:
            super().__setattr__(key, value)
        else:
            self._setattr(key, value)


class Config:
    def __init__(self, config=None):
        self._config = config or AttributeDict()

    def __dir__(self):
        return list(self._config.keys())

    def __getattr__(self, item: str):
        return getattr(self._config, item)

    def __setattr__(self, key: str, value: Any):
        if key.startswith("_"):
            object.__setattr__(self, key, value)
            return
        setattr(self._config, key, value)

    def register_option(
        self, option: str, value: Any, validator: Optional[ValidatorType] = None
    ) -> None:
        assert validator is None or callable(validator)
        splits = option.split(".")
        conf = self._config

        for name in splits[:-1]:
            config = conf.get(name)
            if config is None:
                val = AttributeDict()
                conf[name] = val
                conf = val
            elif not isinstance(config, dict):
                raise AttributeError(
                    f"Fail to set option: {option}, conflict has encountered"
                )
            else:
                conf = config

        key = splits[-1]
        if conf.get(key) is not None:
            raise AttributeError(f"Fail to set option: {option}, option has been set")

        conf.register(key, value, validator)

    def update(self, new_config: Dict[str, Any]) -> None:
        for option, value in new_config.items():
            attrs = option.split(".")
            cur_cfg = self
            for sub_cfg_name in attrs[:-1]:
                try:
                    cur_cfg = getattr(cur_cfg, sub_cfg_name)
                except AttributeError:
                    raise OptionError(
                        f"Cannot identify configuration name '{option}'."
                    ) from None
            setattr(cur_cfg, attrs[-1], value)


default_options = Config()

default_options.register_option(
    "random.bit_generator", _DEFAULT_BIT_GENERATOR, validator=is_bit_generator_name
)
default_options.register_option("random.seed", None, validator=is_seed)
default_options.register_option("table.allow_cast", False, validator=is_bool)
default_options.register_option("hashing.check_keys", True, validator=is_bool)

_options_ctx_var = contextvars.ContextVar("_options_ctx_var")


def reset_global_options():
    global _options_ctx_var

    _options_ctx_var = contextvars.ContextVar("_options_ctx_var")
    _options_ctx_var.set(default_options)


reset_global_options()


def get_global_options(copy: bool = False) -> Config:
    ret = _options_ctx_var.get(None)

    if ret is None:
        if not copy:
            ret = default_options
        else:
            ret = Config(deepcopy(default_options._config))
        _options_ctx_var.set(ret)
    return ret


def set_global_options(opts: Config) -> None:
    _options_ctx_var.set(opts)


@contextlib.contextmanager
def option_context(config: Dict[str, Any] = None):
    global_options = get_global_options(copy=True)

    try:
        config = config or dict()
        local_options = Config(deepcopy(global_options._config))
        local_options.update(config)
        set_global_options(local_options)
        yield local_options
    finally:
        set_global_options(global_options)


class OptionsProxy:
    def __dir__(self):
        return dir(get_global_options())

    def __getattribute__(self, attr):
        return getattr(get_global_options(), attr)

    def __setattr__(self, key, value):
        setattr(get_global_options(), key, value)


options = OptionsProxy()
