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
Correlates standard library log records with the current span.

While a span is recording, every message logged through ``logging.Logger``
is added to the span as an event and prefixed with the trace id, so log
lines can be matched to traces without a structured log pipeline.

.. code:: python

    from opentelemetry.instrumentation.components.instrumentation.logger import (
        LoggerInstrumentor,
    )

    LoggerInstrumentor().instrument()
"""

from __future__ import annotations

import logging
from typing import Any, Collection

from wrapt import wrap_function_wrapper

from opentelemetry import trace
from opentelemetry.instrumentation.components.package import _instruments
from opentelemetry.instrumentation.instrumentor import BaseInstrumentor
from opentelemetry.instrumentation.utils import (
    is_instrumentation_enabled,
    unwrap,
)

_logger = logging.getLogger(__name__)

# Logger.exception goes through Logger.error, so it is not patched itself.
_LOG_METHODS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def _traced_log(wrapped, instance, args, kwargs):
    # one more frame between the caller and Logger.findCaller
    kwargs = {**kwargs, "stacklevel": kwargs.get("stacklevel", 1) + 1}
    if (
        not args
        or not is_instrumentation_enabled()
        or not instance.isEnabledFor(_LOG_METHODS[wrapped.__name__])
    ):
        return wrapped(*args, **kwargs)

    span = trace.get_current_span()
    span_context = span.get_span_context()
    if not span_context.is_valid or not span.is_recording():
        return wrapped(*args, **kwargs)

    message = args[0]
    span.add_event(str(message))
    trace_id = trace.format_trace_id(span_context.trace_id)
    return wrapped(f"[{trace_id}] {message}", *args[1:], **kwargs)


class LoggerInstrumentor(BaseInstrumentor):
    """Adds log messages to the current span and prefixes its trace id."""

    name = "logger"

    def instrumentation_dependencies(self) -> Collection[str]:
        return _instruments

    def _instrument(self, **kwargs: Any):
        for method in _LOG_METHODS:
            wrap_function_wrapper(logging.Logger, method, _traced_log)
        _logger.debug("LoggerInstrumentor: patched logging.Logger")

    def _uninstrument(self, **kwargs: Any):
        for method in _LOG_METHODS:
            unwrap(logging.Logger, method)
