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

"""Trace-name tags and the "already instrumented" flag on callables.

Every proxy built by :func:`~.wrapper.wrap` is tagged with its span name and
activated. Passes check :func:`is_active` before wrapping, which is what
keeps several passes over the same classes from stacking proxies.
"""

from __future__ import annotations

from typing import Any, Callable

from opentelemetry.instrumentation.components.constants import (
    TRACE_METADATA,
    TRACE_METADATA_ACTIVE,
)
from opentelemetry.instrumentation.components.metadata import (
    _METADATA_ATTR,
    define_metadata,
    get_metadata,
    get_metadata_keys,
    has_metadata,
    resolve_target,
)

# Attributes functools.update_wrapper manages itself
_NOT_COPIED = frozenset((_METADATA_ATTR, "__wrapped__"))


def tag(func: Callable, name: str | None) -> None:
    define_metadata(TRACE_METADATA, name, func)


def has_tag(func: Any) -> bool:
    return has_metadata(TRACE_METADATA, func)


def get_tag(func: Any) -> str | None:
    return get_metadata(TRACE_METADATA, func)


def activate(func: Callable) -> None:
    define_metadata(TRACE_METADATA_ACTIVE, True, func)


def is_active(func: Any) -> bool:
    if func is None:
        return False
    return bool(get_metadata(TRACE_METADATA_ACTIVE, func, False))


def copy_metadata(source: Any, destination: Any) -> None:
    """Copy every tag carried by ``source`` onto ``destination``.

    This covers the keys of the metadata store (ours and the framework's)
    and plain function attributes, which is where many Python frameworks
    keep their markers. The store itself is copied key by key so the two
    callables never share it.
    """
    source = resolve_target(source)
    destination = resolve_target(destination)

    try:
        attributes = vars(source)
    except TypeError:
        attributes = {}
    for name, value in attributes.items():
        if name not in _NOT_COPIED:
            setattr(destination, name, value)

    for key in get_metadata_keys(source):
        define_metadata(key, get_metadata(key, source), destination)
