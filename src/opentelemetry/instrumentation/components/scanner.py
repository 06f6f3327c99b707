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

from __future__ import annotations

import weakref
from logging import getLogger

_logger = getLogger(__name__)

_CONSTRUCTOR_NAMES = frozenset(("__new__", "__init__", "__init_subclass__"))


def _is_accessor(value) -> bool:
    # property, slots, __dict__/__weakref__ and any other data descriptor
    value_type = type(value)
    return isinstance(value, property) or (
        hasattr(value_type, "__set__") or hasattr(value_type, "__delete__")
    )


def _is_method(value) -> bool:
    if isinstance(value, (staticmethod, classmethod)):
        value = value.__func__
    return callable(value) and not isinstance(value, type)


class MetadataScanner:
    """Lists the method names a class defines or inherits.

    The MRO is walked from the class itself up to, but excluding,
    ``object``. The first definition of a name wins, so an override shadows
    the definitions of its bases and every name is reported once. Accessors
    (properties and other data descriptors), constructors and non-callable
    attributes are left out.

    Results are cached per class.
    """

    def __init__(self):
        self._cache = weakref.WeakKeyDictionary()

    def get_all_method_names(self, klass) -> tuple[str, ...]:
        if not isinstance(klass, type):
            return ()

        try:
            return self._cache[klass]
        except KeyError:
            pass
        except TypeError:
            # unhashable metaclass instances are scanned without caching
            return self._scan(klass)

        names = self._scan(klass)
        self._cache[klass] = names
        return names

    @staticmethod
    def _scan(klass: type) -> tuple[str, ...]:
        visited = set()
        names = []
        for level in klass.__mro__:
            if level is object:
                break
            for name, value in vars(level).items():
                if name in visited:
                    continue
                visited.add(name)
                if (
                    _is_accessor(value)
                    or name in _CONSTRUCTOR_NAMES
                    or not _is_method(value)
                ):
                    continue
                names.append(name)
        _logger.debug("Scanned %s: %s", klass.__qualname__, names)
        return tuple(names)


# Shared by every pass so a class is only walked once per process.
scanner = MetadataScanner()
