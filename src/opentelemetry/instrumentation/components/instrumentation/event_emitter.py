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

from opentelemetry.instrumentation.components.attributes import (
    COMPONENT_CALLBACK,
    COMPONENT_EVENT,
    COMPONENT_PROVIDER,
    COMPONENT_TYPE,
)
from opentelemetry.instrumentation.components.constants import (
    EVENT_LISTENER_METADATA,
)
from opentelemetry.instrumentation.components.instrumentation.base import (
    BaseTraceInstrumentor,
    SpanSpec,
    callback_name,
)
from opentelemetry.instrumentation.components.metadata import get_metadata


def _event_name(method, fallback: str) -> str:
    # listener metadata is a list of {"event": ..., ...} options
    listeners = get_metadata(EVENT_LISTENER_METADATA, method) or ()
    for options in listeners:
        event = options.get("event") if isinstance(options, dict) else None
        if event is not None:
            return str(event)
    return fallback


class EventEmitterInstrumentor(BaseTraceInstrumentor):
    """Traces provider methods registered as event listeners."""

    name = "event_emitter"

    def _setup_instrumentation(self):
        self.instrument_methods(
            self.get_providers(), self._is_listener, self._describe
        )

    def _is_listener(self, method) -> bool:
        return not self.is_decorated(method) and bool(
            get_metadata(EVENT_LISTENER_METADATA, method)
        )

    @staticmethod
    def _describe(provider, name, method) -> SpanSpec:
        callback = callback_name(method, name)
        event = _event_name(method, callback)
        return SpanSpec(
            f"{provider.name}.{event}",
            {
                COMPONENT_TYPE: "event",
                COMPONENT_PROVIDER: provider.name,
                COMPONENT_CALLBACK: callback,
                COMPONENT_EVENT: event,
            },
        )
