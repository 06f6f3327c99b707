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
A minimal model of the component registry the passes read from.

Dependency-injection containers differ in how they build and resolve
components; the passes only need to know which classes were registered as
controllers or providers, under which name and token. Any registry that
exposes ``values()`` of modules, each with ``controllers`` and ``providers``
mappings of :class:`InstanceWrapper`-like entries, can be instrumented. The
classes below are a plain implementation of that shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Hashable, Protocol


class ComponentEntry(Protocol):
    name: str
    token: Any
    metatype: Any


class ModuleLike(Protocol):
    controllers: Any
    providers: Any


@dataclass
class InstanceWrapper:
    """A registered component: its name, lookup token and class.

    ``metatype`` is ``None`` (or not a class) for value and factory
    providers; those are never instrumented.
    """

    name: str
    token: Any = None
    metatype: Any = None

    def __post_init__(self):
        if self.token is None:
            self.token = (
                self.metatype if self.metatype is not None else self.name
            )


@dataclass
class Module:
    name: str
    controllers: dict[Hashable, InstanceWrapper] = field(default_factory=dict)
    providers: dict[Hashable, InstanceWrapper] = field(default_factory=dict)

    def add_controller(self, klass: type) -> InstanceWrapper:
        wrapper = InstanceWrapper(klass.__name__, klass, klass)
        self.controllers[klass] = wrapper
        return wrapper

    def add_provider(
        self,
        provider: Any,
        token: Any = None,
        name: str | None = None,
    ) -> InstanceWrapper:
        """Register ``provider`` (a class or a plain value) under ``token``."""
        if isinstance(provider, type):
            metatype = provider
            default_name = provider.__name__
        else:
            metatype = None
            default_name = str(token)
        token = token if token is not None else provider
        wrapper = InstanceWrapper(name or default_name, token, metatype)
        self.providers[token] = wrapper
        return wrapper


class ModulesContainer(dict):
    """Modules by name."""

    def add_module(self, name: str) -> Module:
        module = self.get(name)
        if module is None:
            module = self[name] = Module(name)
        return module
