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

from opentelemetry import trace
from opentelemetry.instrumentation.components.constants import TRACER_NAME
from opentelemetry.instrumentation.components.version import __version__


class TraceService:
    """Access to the tracer and the current span for application code."""

    def __init__(self, tracer_provider: trace.TracerProvider | None = None):
        self._tracer_provider = tracer_provider

    def get_tracer(self) -> trace.Tracer:
        return trace.get_tracer(
            TRACER_NAME, __version__, tracer_provider=self._tracer_provider
        )

    @staticmethod
    def get_span() -> trace.Span | None:
        """Return the current span, or ``None`` outside of any span."""
        span = trace.get_current_span()
        if not span.get_span_context().is_valid:
            return None
        return span

    def start_span(self, name: str, **kwargs) -> trace.Span:
        """Start a span that is *not* made current; the caller ends it."""
        return self.get_tracer().start_span(name, **kwargs)
