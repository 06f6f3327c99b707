# Copyright The OpenTelemetry Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Out-of-band metadata for functions, classes and objects.

Frameworks describe what a function *is* (a route, a guarded handler, a
cron job) by attaching metadata to it. This module is the key-value store
those markers live in. Entries are kept in a private dictionary on the
target itself, so they live exactly as long as the target does.

Lookups on a class follow its MRO, the way attribute lookup does; lookups
on a function or an object only see their own entries. Bound methods,
``staticmethod`` and ``classmethod`` objects are resolved to the function
they wrap.

.. code:: python

    from opentelemetry.instrumentation.components.metadata import (
        define_metadata,
        get_metadata,
    )

    def handler(): ...

    define_metadata("path", "/hello", handler)
    assert get_metadata("path", handler) == "/hello"
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, Hashable

_METADATA_ATTR = "__opentelemetry_metadata__"
_MISSING = object()


def resolve_target(target: Any) -> Any:
    """Return the object metadata for ``target`` is actually stored on."""
    if isinstance(target, (staticmethod, classmethod)) or inspect.ismethod(
        target
    ):
        return target.__func__
    return target


def _own_store(target: Any, create: bool = False) -> dict | None:
    try:
        namespace = vars(target)
    except TypeError:
        if create:
            raise TypeError(
                f"Cannot attach metadata to {target!r}: it has no __dict__"
            ) from None
        return None

    store = namespace.get(_METADATA_ATTR)
    if store is None and create:
        store = {}
        try:
            setattr(target, _METADATA_ATTR, store)
        except AttributeError as exc:
            raise TypeError(f"Cannot attach metadata to {target!r}") from exc
    return store


def _stores(target: Any):
    target = resolve_target(target)
    if isinstance(target, type):
        for klass in target.__mro__:
            store = _own_store(klass)
            if store:
                yield store
        return
    store = _own_store(target)
    if store:
        yield store


def define_metadata(key: Hashable, value: Any, target: Any) -> None:
    """Define ``key`` on ``target``, replacing any previous own value."""
    _own_store(resolve_target(target), create=True)[key] = value


def get_metadata(key: Hashable, target: Any, default: Any = None) -> Any:
    for store in _stores(target):
        value = store.get(key, _MISSING)
        if value is not _MISSING:
            return value
    return default


def has_metadata(key: Hashable, target: Any) -> bool:
    return any(key in store for store in _stores(target))


def get_own_metadata(key: Hashable, target: Any, default: Any = None) -> Any:
    store = _own_store(resolve_target(target))
    if store is None:
        return default
    return store.get(key, default)


def get_metadata_keys(target: Any) -> list:
    """Return every key visible on ``target``, nearest definition first."""
    keys = []
    for store in _stores(target):
        keys.extend(key for key in store if key not in keys)
    return keys


def delete_metadata(key: Hashable, target: Any) -> bool:
    store = _own_store(resolve_target(target))
    if store is None or key not in store:
        return False
    del store[key]
    return True


def set_metadata(key: Hashable, value: Any) -> Callable[[Any], Any]:
    """Decorator form of :func:`define_metadata`.

    Works on functions, classes and static or class methods, and returns
    the decorated object unchanged::

        @set_metadata("roles", ["admin"])
        def delete_user(self, user_id): ...
    """

    def decorator(target):
        define_metadata(key, value, target)
        return target

    return decorator
