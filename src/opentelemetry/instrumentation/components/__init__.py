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
Traces the components of a dependency-injection application: route
handlers, guards, interceptors, pipes, event listeners, scheduled jobs and
GraphQL resolvers, without changing their code.

Each kind of component is handled by its own instrumentor. An instrumentor
reads the modules container of the application, finds the methods the
framework marked (a route path, a guard list, cron options, ...) and
replaces them with proxies that run the original method inside a span.
Methods are only ever wrapped once, whatever the number of instrumentors
that select them.

Usage
-----

.. code:: python

    from opentelemetry.instrumentation.components import instrument_components

    # once every module is registered, before serving requests
    instrumentors = instrument_components(modules_container)

    # or a subset, in this order
    from opentelemetry.instrumentation.components.instrumentation.controller import (
        ControllerInstrumentor,
    )

    instrument_components(
        modules_container, instrumentations=[ControllerInstrumentor]
    )

Any instrumentor can also be used on its own:

.. code:: python

    ControllerInstrumentor().instrument(
        modules_container=modules_container,
        tracer_provider=tracer_provider,
    )

Methods can be opted in explicitly with
:func:`~.decorators.span` and :func:`~.decorators.traceable`; those are
handled before any other instrumentor runs.

Configuration
-------------

``OTEL_PYTHON_COMPONENTS_DISABLED_INSTRUMENTATIONS`` takes a comma-separated
list of instrumentor names to skip (``decorator``, ``controller``,
``graphql_resolver``, ``guard``, ``interceptor``, ``event_emitter``,
``schedule``, ``pipe``, ``logger``) or ``*`` to skip them all.

API
---
"""

from __future__ import annotations

from logging import getLogger
from os import environ
from typing import Any, Iterable

from opentelemetry import trace
from opentelemetry.instrumentation.components.decorators import (
    span,
    traceable,
)
from opentelemetry.instrumentation.components.environment_variables import (
    OTEL_PYTHON_COMPONENTS_DISABLED_INSTRUMENTATIONS,
)
from opentelemetry.instrumentation.components.instrumentation.controller import (
    ControllerInstrumentor,
)
from opentelemetry.instrumentation.components.instrumentation.decorator import (
    DecoratorInstrumentor,
)
from opentelemetry.instrumentation.components.instrumentation.event_emitter import (
    EventEmitterInstrumentor,
)
from opentelemetry.instrumentation.components.instrumentation.graphql_resolver import (
    GraphQLResolverInstrumentor,
)
from opentelemetry.instrumentation.components.instrumentation.guard import (
    GuardInstrumentor,
)
from opentelemetry.instrumentation.components.instrumentation.interceptor import (
    InterceptorInstrumentor,
)
from opentelemetry.instrumentation.components.instrumentation.logger import (
    LoggerInstrumentor,
)
from opentelemetry.instrumentation.components.instrumentation.pipe import (
    PipeInstrumentor,
)
from opentelemetry.instrumentation.components.instrumentation.schedule import (
    ScheduleInstrumentor,
)
from opentelemetry.instrumentation.components.trace_service import (
    TraceService,
)
from opentelemetry.instrumentation.components.version import __version__
from opentelemetry.instrumentation.components.wrapper import (
    trace_instance,
    wrap,
)
from opentelemetry.instrumentation.instrumentor import BaseInstrumentor

_logger = getLogger(__name__)

SKIPPED_INSTRUMENTATIONS_WILDCARD = "*"

DEFAULT_INSTRUMENTATIONS = (
    ControllerInstrumentor,
    GraphQLResolverInstrumentor,
    GuardInstrumentor,
    InterceptorInstrumentor,
    EventEmitterInstrumentor,
    ScheduleInstrumentor,
    PipeInstrumentor,
    LoggerInstrumentor,
)


def _disabled_instrumentations() -> list[str]:
    disabled = environ.get(
        OTEL_PYTHON_COMPONENTS_DISABLED_INSTRUMENTATIONS, ""
    )
    # to handle users entering "guard , pipe" or "guard, pipe" with spaces
    return [name.strip() for name in disabled.split(",") if name.strip()]


def instrument_components(
    modules_container: Any,
    instrumentations: Iterable[type[BaseInstrumentor]] | None = None,
    tracer_provider: trace.TracerProvider | None = None,
    **kwargs: Any,
) -> list[BaseInstrumentor]:
    """Run the decorator instrumentor, then ``instrumentations`` in order.

    ``instrumentations`` defaults to :data:`DEFAULT_INSTRUMENTATIONS`.
    Returns the instrumentors that ran, for :func:`uninstrument_components`.
    """
    if instrumentations is None:
        instrumentations = DEFAULT_INSTRUMENTATIONS
    disabled = _disabled_instrumentations()

    instrumented = []
    for instrumentor_class in dict.fromkeys(
        (DecoratorInstrumentor, *instrumentations)
    ):
        if SKIPPED_INSTRUMENTATIONS_WILDCARD in disabled:
            break
        if instrumentor_class.name in disabled:
            _logger.debug(
                "Instrumentation skipped for %s", instrumentor_class.name
            )
            continue

        instrumentor = instrumentor_class()
        if instrumentor.is_instrumented_by_opentelemetry:
            _logger.debug(
                "%s is already instrumented", instrumentor_class.name
            )
            continue
        instrumentor.instrument(
            modules_container=modules_container,
            tracer_provider=tracer_provider,
            **kwargs,
        )
        instrumented.append(instrumentor)
        _logger.debug("Instrumented %s", instrumentor_class.name)
    return instrumented


def uninstrument_components(instrumentors: Iterable[BaseInstrumentor]) -> None:
    """Undo :func:`instrument_components`, last instrumentor first."""
    for instrumentor in reversed(list(instrumentors)):
        instrumentor.uninstrument()


__all__ = [
    "DEFAULT_INSTRUMENTATIONS",
    "ControllerInstrumentor",
    "DecoratorInstrumentor",
    "EventEmitterInstrumentor",
    "GraphQLResolverInstrumentor",
    "GuardInstrumentor",
    "InterceptorInstrumentor",
    "LoggerInstrumentor",
    "PipeInstrumentor",
    "ScheduleInstrumentor",
    "TraceService",
    "__version__",
    "instrument_components",
    "span",
    "trace_instance",
    "traceable",
    "uninstrument_components",
    "wrap",
]
