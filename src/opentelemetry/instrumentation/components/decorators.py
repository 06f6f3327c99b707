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
Explicit opt-in for tracing.

:func:`span` marks one method, :func:`traceable` marks every method of a
class. Marked methods are wrapped by
:class:`~.instrumentation.decorator.DecoratorInstrumentor` once the class
is registered in the modules container.

.. code:: python

    from opentelemetry.instrumentation.components.decorators import span

    class HelloService:
        @span()
        def hello(self): ...        # span "HelloService.hello"

        @span("greet")
        def hello_again(self): ...  # span "HelloService.greet"
"""

from __future__ import annotations

from typing import Callable, TypeVar

from opentelemetry.instrumentation.components.constants import TRACE_METADATA
from opentelemetry.instrumentation.components.metadata import define_metadata

T = TypeVar("T")


def span(name: str | None = None) -> Callable[[T], T]:
    """Mark a method for tracing, optionally under a custom span name."""

    def decorator(method: T) -> T:
        define_metadata(TRACE_METADATA, name, method)
        return method

    return decorator


def traceable(name: str | None = None) -> Callable[[T], T]:
    """Mark every method of a class for tracing."""

    def decorator(klass: T) -> T:
        define_metadata(TRACE_METADATA, name, klass)
        return klass

    return decorator
