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
Span-emitting proxies for arbitrary callables.

:func:`wrap` replaces a function with one that runs it inside a new active
span. How long the span lives depends on what the function is:

* a plain function: the span ends as soon as the call returns or raises;
* a coroutine function: the span ends when the coroutine settles;
* with ``wrap_stream=True``: if the call produces an async iterable (directly
  or by way of an awaitable), the span stays open until the iteration
  finishes, fails or is closed. Any other value ends the span immediately
  and is returned untouched.

Errors are recorded on the span (exception event and ``ERROR`` status) and
re-raised as is. Because the span is made current, spans opened by the
wrapped code, including code run between awaits or between items of a
traced stream, become its children.

.. code:: python

    from opentelemetry.instrumentation.components.wrapper import wrap

    class HelloService:
        def hello(self):
            return "hello"

    HelloService.hello = wrap(HelloService.hello, "HelloService.hello")
"""

from __future__ import annotations

import functools
import inspect
from dataclasses import dataclass, field
from logging import getLogger
from types import MappingProxyType
from typing import Any, AsyncIterator, Callable, Mapping

from opentelemetry import trace
from opentelemetry.instrumentation.components.attributes import (
    COMPONENT_CLASS,
    COMPONENT_METHOD,
)
from opentelemetry.instrumentation.components.constants import TRACER_NAME
from opentelemetry.instrumentation.components.marker import (
    activate,
    copy_metadata,
    is_active,
    tag,
)
from opentelemetry.instrumentation.components.scanner import scanner
from opentelemetry.instrumentation.components.version import __version__
from opentelemetry.trace import Span, SpanKind, Status, StatusCode

_logger = getLogger(__name__)


def _get_tracer(tracer_provider: trace.TracerProvider | None) -> trace.Tracer:
    return trace.get_tracer(
        TRACER_NAME,
        __version__,
        tracer_provider=tracer_provider,
    )


@dataclass(frozen=True)
class TracedCall:
    """Everything a proxy needs to know about the callable it replaces."""

    original: Callable[..., Any]
    span_name: str
    attributes: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({})
    )
    kind: SpanKind = SpanKind.INTERNAL
    wrap_stream: bool = False
    tracer_provider: trace.TracerProvider | None = None
    # None: looked up from the global tracer provider on every call
    tracer: trace.Tracer | None = None

    def start_span(self) -> Span:
        tracer = self.tracer
        if tracer is None:
            tracer = _get_tracer(self.tracer_provider)
        return tracer.start_span(self.span_name, kind=self.kind)


def _activate(span: Span):
    return trace.use_span(
        span,
        end_on_exit=False,
        record_exception=False,
        set_status_on_exception=False,
    )


def _record_exception(span: Span, exc: BaseException) -> None:
    if span.is_recording():
        span.record_exception(exc)
        span.set_status(Status(StatusCode.ERROR, str(exc)))


def _is_stream(value: Any) -> bool:
    return hasattr(type(value), "__aiter__")


def _trace_stream(value: Any, span: Span) -> Any:
    """Hand ``span`` over to whatever ends ``value``."""
    if inspect.isawaitable(value):
        return _await_stream(value, span)
    if _is_stream(value):
        return _iterate_stream(value, span)
    span.end()
    return value


async def _await_stream(awaitable, span: Span) -> Any:
    try:
        with _activate(span):
            value = await awaitable
    except Exception as exc:
        _record_exception(span, exc)
        span.end()
        raise
    except BaseException:
        span.end()
        raise
    return _trace_stream(value, span)


async def _iterate_stream(stream, span: Span) -> AsyncIterator[Any]:
    iterator = None
    try:
        iterator = stream.__aiter__()
        while True:
            # re-entered for every item: the consumer may run in another
            # context between two items
            with _activate(span):
                try:
                    item = await iterator.__anext__()
                except StopAsyncIteration:
                    break
            yield item
    except Exception as exc:
        _record_exception(span, exc)
        raise
    finally:
        # closing the traced stream early closes its source too
        try:
            aclose = getattr(iterator, "aclose", None)
            if aclose is not None:
                with _activate(span):
                    await aclose()
        finally:
            span.end()


def _sync_proxy(call: TracedCall) -> Callable[..., Any]:
    original = call.original

    def traced(*args, **kwargs):
        span = call.start_span()
        handed_off = False
        try:
            with _activate(span):
                span.set_attributes(call.attributes)
                result = original(*args, **kwargs)
            if call.wrap_stream:
                handed_off = True
                return _trace_stream(result, span)
            return result
        except Exception as exc:
            _record_exception(span, exc)
            raise
        finally:
            if not handed_off:
                span.end()

    return traced


def _async_proxy(call: TracedCall) -> Callable[..., Any]:
    original = call.original

    async def traced(*args, **kwargs):
        span = call.start_span()
        handed_off = False
        try:
            with _activate(span):
                span.set_attributes(call.attributes)
                result = await original(*args, **kwargs)
            if call.wrap_stream:
                handed_off = True
                return _trace_stream(result, span)
            return result
        except Exception as exc:
            _record_exception(span, exc)
            raise
        finally:
            if not handed_off:
                span.end()

    return traced


def wrap(
    func: Callable[..., Any],
    span_name: str,
    attributes: Mapping[str, Any] | None = None,
    kind: SpanKind | None = None,
    wrap_stream: bool = False,
    tracer_provider: trace.TracerProvider | None = None,
) -> Callable[..., Any]:
    """Return a traced replacement for ``func``.

    Args:
        func: the function to trace. It is called with exactly the
            arguments the proxy receives, so unbound functions installed on
            a class and bound methods installed on an instance both work.
        span_name: name of the span opened for each call.
        attributes: set on the span once, before ``func`` runs.
        kind: span kind, ``SpanKind.INTERNAL`` by default.
        wrap_stream: keep the span open until a returned async iterable is
            exhausted.
        tracer_provider: tracer provider to use instead of the global one.

    The proxy carries the name, docstring and metadata of ``func``, is
    tagged with ``span_name`` and marked active. Wrapping a proxy again is
    not prevented here; callers check :func:`~.marker.is_active` first.
    """
    if not callable(func):
        raise TypeError(f"Cannot trace {func!r}: it is not callable")

    call = TracedCall(
        original=func,
        span_name=span_name,
        attributes=MappingProxyType(dict(attributes or {})),
        kind=kind if kind is not None else SpanKind.INTERNAL,
        wrap_stream=wrap_stream,
        tracer_provider=tracer_provider,
        tracer=(
            _get_tracer(tracer_provider)
            if tracer_provider is not None
            else None
        ),
    )
    if inspect.iscoroutinefunction(func):
        proxy = _async_proxy(call)
    else:
        proxy = _sync_proxy(call)

    functools.update_wrapper(proxy, func, updated=())
    copy_metadata(func, proxy)
    tag(proxy, span_name)
    activate(proxy)
    return proxy


def trace_instance(
    instance: Any,
    attributes: Mapping[str, Any] | None = None,
    tracer_provider: trace.TracerProvider | None = None,
) -> Any:
    """Trace every method of one object, leaving its class untouched.

    Each method gets a span named ``ClassName.method``. Methods that are
    already traced are skipped.
    """
    class_name = type(instance).__name__
    for name in scanner.get_all_method_names(type(instance)):
        method = getattr(instance, name)
        if is_active(method):
            continue
        method_name = getattr(method, "__name__", name)
        traced = wrap(
            method,
            f"{class_name}.{method_name}",
            {
                COMPONENT_CLASS: class_name,
                COMPONENT_METHOD: method_name,
                **(attributes or {}),
            },
            tracer_provider=tracer_provider,
        )
        setattr(instance, name, traced)
        _logger.debug("Mapped %s.%s", class_name, name)
    return instance
