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
    COMPONENT_CONTROLLER,
    COMPONENT_TYPE,
)
from opentelemetry.instrumentation.components.instrumentation.base import (
    BaseTraceInstrumentor,
    SpanSpec,
    callback_name,
)
from opentelemetry.trace import SpanKind


class ControllerInstrumentor(BaseTraceInstrumentor):
    """Traces route and message-pattern handlers as ``SERVER`` spans.

    Handlers carrying an explicit ``span()`` decoration are left to
    :class:`~.decorator.DecoratorInstrumentor`.
    """

    name = "controller"

    def _setup_instrumentation(self):
        self.instrument_methods(
            self.get_controllers(), self._is_handler, self._describe
        )

    def _is_handler(self, method) -> bool:
        return not self.is_decorated(method) and (
            self.is_path(method) or self.is_microservice(method)
        )

    @staticmethod
    def _describe(controller, name, method) -> SpanSpec:
        callback = callback_name(method, name)
        return SpanSpec(
            f"{controller.name}.{callback}",
            {
                COMPONENT_TYPE: "handler",
                COMPONENT_CONTROLLER: controller.name,
                COMPONENT_CALLBACK: callback,
            },
            kind=SpanKind.SERVER,
        )
