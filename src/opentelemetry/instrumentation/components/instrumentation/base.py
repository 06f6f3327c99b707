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
Shared machinery of the component passes.

A pass walks the controllers or providers of a modules container, asks a
predicate about each of their methods, and replaces the ones it accepts
with traced proxies installed on the class. The steps are:

1. select components from the :class:`~..enumerator.ComponentEnumerator`;
2. list their methods with the shared :class:`~..scanner.MetadataScanner`;
3. keep the methods the pass predicate accepts;
4. drop methods that are already traced (:func:`~..marker.is_active`);
5. wrap each remaining method and install the proxy in its slot.

A failure on one method is logged and does not stop the pass.
"""

from __future__ import annotations

import inspect
from abc import abstractmethod
from dataclasses import dataclass, field
from logging import getLogger
from typing import Any, Callable, Collection, Iterable, Mapping

from opentelemetry.instrumentation.components.constants import (
    PATH_METADATA,
    PATTERN_METADATA,
    TRACE_METADATA,
)
from opentelemetry.instrumentation.components.enumerator import (
    ComponentEnumerator,
)
from opentelemetry.instrumentation.components.marker import (
    get_tag,
    is_active,
)
from opentelemetry.instrumentation.components.metadata import has_metadata
from opentelemetry.instrumentation.components.package import _instruments
from opentelemetry.instrumentation.components.scanner import scanner
from opentelemetry.instrumentation.components.wrapper import wrap
from opentelemetry.instrumentation.instrumentor import BaseInstrumentor
from opentelemetry.trace import SpanKind

_logger = getLogger(__name__)

_MISSING = object()


@dataclass(frozen=True)
class SpanSpec:
    """How a pass wants one member traced."""

    name: str
    attributes: Mapping[str, Any] = field(default_factory=dict)
    kind: SpanKind | None = None
    wrap_stream: bool = False


def get_member(owner: Any, name: str) -> Any:
    """Return the function behind ``owner.name``.

    On a class the raw function is returned (static and class methods are
    unwrapped); on an instance the bound method is.
    """
    if isinstance(owner, type):
        member = inspect.getattr_static(owner, name)
        if isinstance(member, (staticmethod, classmethod)):
            return member.__func__
        return member
    return getattr(owner, name)


def set_member(owner: Any, name: str, value: Any) -> None:
    """Install ``value`` as ``owner.name``, keeping static/class methods."""
    if isinstance(owner, type):
        member = inspect.getattr_static(owner, name, None)
        if isinstance(member, (staticmethod, classmethod)):
            value = type(member)(value)
    setattr(owner, name, value)


def callback_name(method: Any, fallback: str) -> str:
    return getattr(method, "__name__", None) or fallback


def enhancer_name(enhancer: Any) -> str:
    if isinstance(enhancer, type):
        return enhancer.__name__
    return type(enhancer).__name__


class BaseTraceInstrumentor(BaseInstrumentor):
    """Base class of the passes over a modules container.

    Subclasses implement :meth:`_setup_instrumentation`. ``instrument()``
    expects the container as ``modules_container`` and accepts an optional
    ``tracer_provider``; ``uninstrument()`` puts back every member the pass
    replaced.
    """

    # Name used by OTEL_PYTHON_COMPONENTS_DISABLED_INSTRUMENTATIONS
    name = ""

    def instrumentation_dependencies(self) -> Collection[str]:
        return _instruments

    def _instrument(self, **kwargs: Any):
        modules_container = kwargs.get("modules_container")
        if modules_container is None:
            raise ValueError(
                f"{type(self).__name__} needs a modules_container "
                "to instrument"
            )
        self._enumerator = ComponentEnumerator(modules_container)
        self._tracer_provider = kwargs.get("tracer_provider")
        self._replaced = []
        self._setup_instrumentation()

    def _uninstrument(self, **kwargs: Any):
        for owner, name, previous in reversed(self._replaced):
            if previous is _MISSING:
                delattr(owner, name)
            else:
                setattr(owner, name, previous)
        self._replaced = []

    @abstractmethod
    def _setup_instrumentation(self):
        """Find and wrap the members this pass is responsible for."""

    def get_controllers(self):
        return self._enumerator.controllers()

    def get_providers(self):
        return self._enumerator.providers()

    @staticmethod
    def is_path(method: Any) -> bool:
        return has_metadata(PATH_METADATA, method)

    @staticmethod
    def is_microservice(method: Any) -> bool:
        return has_metadata(PATTERN_METADATA, method)

    @staticmethod
    def is_decorated(target: Any) -> bool:
        return has_metadata(TRACE_METADATA, target)

    @staticmethod
    def is_affected(method: Any) -> bool:
        return is_active(method)

    @staticmethod
    def get_trace_name(target: Any) -> str | None:
        return get_tag(target)

    def wrap(self, method: Callable[..., Any], spec: SpanSpec):
        return wrap(
            method,
            spec.name,
            spec.attributes,
            kind=spec.kind,
            wrap_stream=spec.wrap_stream,
            tracer_provider=self._tracer_provider,
        )

    def replace(
        self, owner: Any, name: str, method: Callable[..., Any], spec: SpanSpec
    ) -> Callable[..., Any]:
        """Wrap ``method`` and install the proxy as ``owner.name``."""
        traced = self.wrap(method, spec)
        try:
            previous = vars(owner).get(name, _MISSING)
        except TypeError:
            previous = _MISSING
        set_member(owner, name, traced)
        self._replaced.append((owner, name, previous))
        _logger.debug("%s mapped %s", type(self).__name__, spec.name)
        return traced

    def instrument_methods(
        self,
        components: Iterable[Any],
        predicate: Callable[[Any], bool],
        describe: Callable[[Any, str, Any], SpanSpec],
    ) -> None:
        """Trace the methods of ``components`` accepted by ``predicate``.

        ``describe(component, member_name, method)`` returns the span to
        open for an accepted method.
        """
        for component in components:
            owner = component.metatype
            for name in scanner.get_all_method_names(owner):
                try:
                    method = get_member(owner, name)
                    if is_active(method) or not predicate(method):
                        continue
                    self.replace(
                        owner, name, method, describe(component, name, method)
                    )
                except Exception:  # pylint: disable=broad-except
                    _logger.exception(
                        "Failed to instrument %s.%s", component.name, name
                    )
