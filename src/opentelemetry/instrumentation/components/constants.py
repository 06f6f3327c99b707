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

"""Metadata keys and registry tokens shared by the component passes.

The TRACE_* keys belong to this instrumentation. The remaining keys are
the capability markers a web, RPC, GraphQL, scheduling or event framework
leaves on the classes and functions it manages; a pass only ever reads them
(and re-defines the guard, interceptor and pipe lists it wraps).
"""

TRACER_NAME = "opentelemetry.instrumentation.components"

# Our own markers, stored on the callable.
TRACE_METADATA = "OPEN_TELEMETRY_TRACE_METADATA"
TRACE_METADATA_ACTIVE = "OPEN_TELEMETRY_TRACE_METADATA_ACTIVE"

# Routing
PATH_METADATA = "path"
METHOD_METADATA = "method"
PATTERN_METADATA = "microservices:pattern"

# Enhancers attached to a controller class or to one of its methods
GUARDS_METADATA = "__guards__"
INTERCEPTORS_METADATA = "__interceptors__"
PIPES_METADATA = "__pipes__"

# Global enhancers are registered as providers under these tokens
APP_GUARD = "APP_GUARD"
APP_INTERCEPTOR = "APP_INTERCEPTOR"
APP_PIPE = "APP_PIPE"

# Events and scheduling
EVENT_LISTENER_METADATA = "EVENT_LISTENER_METADATA"
SCHEDULE_CRON_OPTIONS = "SCHEDULE_CRON_OPTIONS"
SCHEDULE_INTERVAL_OPTIONS = "SCHEDULE_INTERVAL_OPTIONS"
SCHEDULE_TIMEOUT_OPTIONS = "SCHEDULE_TIMEOUT_OPTIONS"
SCHEDULER_NAME = "SCHEDULER_NAME"

# GraphQL
RESOLVER_NAME_METADATA = "graphql:resolver_name"
RESOLVER_TYPE_METADATA = "graphql:resolver_type"
