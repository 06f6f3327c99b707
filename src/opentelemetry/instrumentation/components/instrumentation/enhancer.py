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
Guards, interceptors and pipes.

These are not traced where they are defined but where they are attached: a
controller class or one of its methods lists them under a metadata key, or
they are registered globally as providers under an ``APP_*`` token. Each
attached class (or instance) gets its hook method traced, and the metadata
list is defined again so the framework picks up the traced objects.
"""

from __future__ import annotations

from logging import getLogger
from typing import Any, Callable

from opentelemetry.instrumentation.components.attributes import (
    COMPONENT_CALLBACK,
    COMPONENT_CONTROLLER,
    COMPONENT_PROVIDER,
    COMPONENT_SCOPE,
    COMPONENT_TYPE,
    SCOPE_CONTROLLER,
    SCOPE_CONTROLLER_METHOD,
    SCOPE_GLOBAL,
)
from opentelemetry.instrumentation.components.instrumentation.base import (
    BaseTraceInstrumentor,
    SpanSpec,
    callback_name,
    enhancer_name,
    get_member,
)
from opentelemetry.instrumentation.components.marker import is_active
from opentelemetry.instrumentation.components.metadata import (
    define_metadata,
    get_metadata,
    has_metadata,
)
from opentelemetry.instrumentation.components.scanner import scanner

_logger = getLogger(__name__)


class EnhancerTraceInstrumentor(BaseTraceInstrumentor):
    """Traces the hook method of attached enhancers.

    Subclasses set the metadata key the enhancers are listed under, the
    provider token of global enhancers, the hook method name and the
    ``component.type`` value.
    """

    metadata_key: str = ""
    global_token: str = ""
    method_name: str = ""
    component_type: str = ""
    wrap_stream = False
    # whether enhancers attached to a whole controller class are traced
    controller_scope = True

    def is_enhanced(self, target: Any) -> bool:
        return has_metadata(self.metadata_key, target)

    def get_enhancers(self, target: Any) -> list:
        return list(get_metadata(self.metadata_key, target) or [])

    def accepts_method(self, method: Any) -> bool:
        return self.is_enhanced(method)

    def _setup_instrumentation(self):
        for controller in self.get_controllers():
            if self.controller_scope and self.is_enhanced(controller.metatype):
                self._instrument_controller(controller)

            owner = controller.metatype
            for name in scanner.get_all_method_names(owner):
                try:
                    method = get_member(owner, name)
                    if self.accepts_method(method):
                        self._instrument_controller_method(
                            controller, method, callback_name(method, name)
                        )
                except Exception:  # pylint: disable=broad-except
                    _logger.exception(
                        "Failed to instrument %s of %s.%s",
                        self.component_type,
                        controller.name,
                        name,
                    )

        self._instrument_globals()

    def _instrument_controller(self, controller):
        def describe(enhancer):
            return SpanSpec(
                f"{controller.name}.{enhancer}",
                {
                    COMPONENT_CONTROLLER: controller.name,
                    COMPONENT_TYPE: self.component_type,
                    COMPONENT_PROVIDER: enhancer,
                    COMPONENT_SCOPE: SCOPE_CONTROLLER,
                },
                wrap_stream=self.wrap_stream,
            )

        enhancers = self._wrap_enhancers(
            self.get_enhancers(controller.metatype), describe
        )
        if enhancers:
            define_metadata(self.metadata_key, enhancers, controller.metatype)

    def _instrument_controller_method(self, controller, method, callback):
        def describe(enhancer):
            return SpanSpec(
                f"{controller.name}.{callback}.{enhancer}",
                {
                    COMPONENT_TYPE: self.component_type,
                    COMPONENT_CONTROLLER: controller.name,
                    COMPONENT_PROVIDER: enhancer,
                    COMPONENT_CALLBACK: callback,
                    COMPONENT_SCOPE: SCOPE_CONTROLLER_METHOD,
                },
                wrap_stream=self.wrap_stream,
            )

        enhancers = self._wrap_enhancers(self.get_enhancers(method), describe)
        if enhancers:
            define_metadata(self.metadata_key, enhancers, method)

    def _wrap_enhancers(
        self, enhancers: list, describe: Callable[[str], SpanSpec]
    ) -> list:
        for enhancer in enhancers:
            name = enhancer_name(enhancer)
            try:
                hook = get_member(enhancer, self.method_name)
                if not is_active(hook):
                    self.replace(
                        enhancer, self.method_name, hook, describe(name)
                    )
            except Exception:  # pylint: disable=broad-except
                _logger.exception(
                    "Failed to instrument %s %s", self.component_type, name
                )
        return enhancers

    def _instrument_globals(self):
        for provider in self.get_providers():
            token = provider.token
            if not (isinstance(token, str) and self.global_token in token):
                continue
            owner = provider.metatype
            try:
                hook = get_member(owner, self.method_name)
                if is_active(hook):
                    continue
                self.replace(
                    owner,
                    self.method_name,
                    hook,
                    SpanSpec(
                        owner.__name__,
                        {
                            COMPONENT_TYPE: self.component_type,
                            COMPONENT_PROVIDER: owner.__name__,
                            COMPONENT_SCOPE: SCOPE_GLOBAL,
                        },
                        wrap_stream=self.wrap_stream,
                    ),
                )
            except Exception:  # pylint: disable=broad-except
                _logger.exception(
                    "Failed to instrument global %s %s",
                    self.component_type,
                    provider.name,
                )
