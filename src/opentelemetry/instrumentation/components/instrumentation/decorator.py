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

from opentelemetry.instrumentation.components.attributes import (
    COMPONENT_CALLBACK,
    COMPONENT_CONTROLLER,
    COMPONENT_NAME,
    COMPONENT_PROVIDER,
    COMPONENT_TYPE,
)
from opentelemetry.instrumentation.components.instrumentation.base import (
    BaseTraceInstrumentor,
    SpanSpec,
    callback_name,
)


class DecoratorInstrumentor(BaseTraceInstrumentor):
    """Traces methods marked with :func:`~..decorators.span` and every
    method of classes marked with :func:`~..decorators.traceable`.

    A name given to the decorator replaces the method name in the span
    name and is reported as ``component.name``.
    """

    name = "decorator"

    def _setup_instrumentation(self):
        for provider in self.get_providers():
            self.instrument_methods(
                (provider,),
                self._selector(provider.metatype),
                self._describer("custom", COMPONENT_PROVIDER),
            )
        for controller in self.get_controllers():
            self.instrument_methods(
                (controller,),
                self._selector(controller.metatype),
                self._describer("controller_method", COMPONENT_CONTROLLER),
            )

    def _selector(self, klass):
        if self.is_decorated(klass):
            return lambda method: True
        return self.is_decorated

    def _describer(self, component_type: str, owner_key: str):
        def describe(component, name, method) -> SpanSpec:
            callback = callback_name(method, name)
            trace_name = self.get_trace_name(method)
            attributes = {
                COMPONENT_TYPE: component_type,
                owner_key: component.name,
                COMPONENT_CALLBACK: callback,
            }
            if trace_name:
                attributes[COMPONENT_NAME] = trace_name
            return SpanSpec(
                f"{component.name}.{trace_name or callback}", attributes
            )

        return describe
