"""Raw value lookup and the immutable resolved environment."""

import os
import logging
from types import MappingProxyType
from collections.abc import Mapping
from typing import Any, Dict, Iterator, Optional

from ._types import EnvSource

logger = logging.getLogger(__name__)


def read_raw(source: Optional[EnvSource], key: str) -> Optional[str]:
    """
    Look up the raw string for ``key``.

    Args:
        source: A mapping of names to strings, a callable returning a string or
            None, or None for the current process environment
        key: Environment variable name

    Returns:
        The raw string, or None when the variable is absent
    """
    if source is None:
        source = os.environ

    if isinstance(source, Mapping):
        value = source.get(key)
    elif callable(source):
        value = source(key)
    else:
        raise TypeError(f"Unsupported environment source: {type(source).__name__}")

    if value is None:
        logger.debug(f"{key} is not set")
        return None
    return str(value)


class ResolvedEnv(Mapping):
    """
    Read-only view over validated environment values.

    Values are available both as items (``env["PORT"]``) and attributes
    (``env.PORT``). A declared variable shadows a mapping method of the same
    name, so ``env.items`` is the variable when ``items`` was declared and the
    method otherwise. The underlying data is copied on
    construction into a read-only proxy and every form of assignment or
    deletion raises.
    """

    __slots__ = ("_data",)

    def __init__(self, values: Dict[str, Any]):
        object.__setattr__(self, "_data", MappingProxyType(dict(values)))

    def __getattribute__(self, name: str) -> Any:
        if not name.startswith("_"):
            data = object.__getattribute__(self, "_data")
            if name in data:
                return data[name]
        return object.__getattribute__(self, name)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __getattr__(self, name: str) -> Any:
        if name == "_data":
            raise AttributeError(name)
        try:
            return self._data[name]
        except KeyError:
            raise AttributeError(f"'{type(self).__name__}' has no variable '{name}'") from None

    def __setattr__(self, name: str, value: Any):
        raise AttributeError(f"Cannot set '{name}': resolved environment is read-only")

    def __delattr__(self, name: str):
        raise AttributeError(f"Cannot delete '{name}': resolved environment is read-only")

    def __setitem__(self, key: str, value: Any):
        raise TypeError(f"Cannot set '{key}': resolved environment is read-only")

    def __delitem__(self, key: str):
        raise TypeError(f"Cannot delete '{key}': resolved environment is read-only")

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ResolvedEnv):
            return dict(self._data) == dict(other._data)
        if isinstance(other, Mapping):
            return dict(self._data) == dict(other)
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self._data)!r})"

    def __dir__(self):
        return list(super().__dir__()) + list(self._data)

    def __reduce__(self):
        return (type(self), (dict(self._data),))

    def to_dict(self) -> Dict[str, Any]:
        """Return a detached, mutable copy of the values."""
        return dict(self._data)
