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

from typing import Any, Iterator

from opentelemetry.instrumentation.components.container import (
    ComponentEntry,
)


def _is_instrumentable(entry: Any) -> bool:
    return entry is not None and isinstance(
        getattr(entry, "metatype", None), type
    )


class ComponentEnumerator:
    """Walks a modules container for classes that can be instrumented.

    Both methods return a fresh generator on every call, so several passes
    can each walk the registry independently. The registry is never
    modified.
    """

    def __init__(self, modules_container):
        self._modules_container = modules_container

    def controllers(self) -> Iterator[ComponentEntry]:
        for module in self._modules_container.values():
            for controller in module.controllers.values():
                if _is_instrumentable(controller):
                    yield controller

    def providers(self) -> Iterator[ComponentEntry]:
        for module in self._modules_container.values():
            for provider in module.providers.values():
                if _is_instrumentable(provider):
                    yield provider
