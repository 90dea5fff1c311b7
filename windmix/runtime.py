"""Process-wide runtime options.

Every option can be given as keyword argument, or through an environment
variable ``WINDMIX_<OPTION>``; keyword arguments take precedence. Values are
validated and coerced whenever they are assigned.
"""

import os
from collections import namedtuple

from windmix.logs import LOGLEVELS

ENV_PREFIX = "WINDMIX_"
FLOAT_TYPES = ("float64", "float32")
TRUTHY_STRINGS = frozenset(("1", "true", "on", "yes"))


def one_of(choices):
    def validate(value):
        normalized = value.lower() if isinstance(value, str) else value
        if normalized not in choices:
            raise ValueError(f"{value!r} is not one of {choices}")
        return normalized

    return validate


def to_bool(value):
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY_STRINGS
    return bool(value)


def apply_loglevel(value):
    from windmix.logs import setup_logging

    loglevel = one_of(LOGLEVELS)(value)
    setup_logging(loglevel=loglevel)
    return loglevel


RuntimeOption = namedtuple("RuntimeOption", ("validate", "default"))

RUNTIME_OPTIONS = {
    "float_type": RuntimeOption(one_of(FLOAT_TYPES), "float64"),
    "loglevel": RuntimeOption(apply_loglevel, "info"),
    "netcdf_compression": RuntimeOption(to_bool, True),
    "force_overwrite": RuntimeOption(to_bool, False),
    "diskless_mode": RuntimeOption(to_bool, False),
}


class RuntimeSettings:
    __slots__ = tuple(RUNTIME_OPTIONS)

    def __init__(self, **kwargs):
        unknown = set(kwargs) - set(RUNTIME_OPTIONS)
        if unknown:
            raise TypeError(f"unknown runtime settings: {', '.join(sorted(unknown))}")

        for name, option in RUNTIME_OPTIONS.items():
            value = kwargs.get(name, os.environ.get(ENV_PREFIX + name.upper(), option.default))
            setattr(self, name, value)

    def __setattr__(self, name, value):
        option = RUNTIME_OPTIONS.get(name)
        if option is None:
            raise AttributeError(f"unknown runtime setting {name!r}")

        try:
            value = option.validate(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f'Got invalid value for runtime setting "{name}": {e!s}') from None

        object.__setattr__(self, name, value)

    def as_dict(self):
        return {name: getattr(self, name) for name in RUNTIME_OPTIONS}

    def update(self, **kwargs):
        for name, value in kwargs.items():
            setattr(self, name, value)
        return self

    def __repr__(self):
        items = ", ".join(f"{name}={value!r}" for name, value in sorted(self.as_dict().items()))
        return f"{type(self).__name__}({items})"
