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

"""Span attribute keys emitted by the component instrumentation."""

COMPONENT_TYPE = "component.type"
COMPONENT_CONTROLLER = "component.controller"
COMPONENT_PROVIDER = "component.provider"
COMPONENT_CALLBACK = "component.callback"
COMPONENT_NAME = "component.name"
COMPONENT_SCOPE = "component.scope"
COMPONENT_EVENT = "component.event"
COMPONENT_SCHEDULE_TYPE = "component.schedule_type"
COMPONENT_RESOLVER_TYPE = "component.resolver_type"
COMPONENT_CLASS = "component.class"
COMPONENT_METHOD = "component.method"

# component.scope values
SCOPE_CONTROLLER = "controller"
SCOPE_CONTROLLER_METHOD = "controller_method"
SCOPE_GLOBAL = "global"
