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

from opentelemetry.instrumentation.components.constants import (
    APP_GUARD,
    GUARDS_METADATA,
)
from opentelemetry.instrumentation.components.instrumentation.enhancer import (
    EnhancerTraceInstrumentor,
)


class GuardInstrumentor(EnhancerTraceInstrumentor):
    """Traces ``can_activate`` of controller, method and global guards."""

    name = "guard"
    metadata_key = GUARDS_METADATA
    global_token = APP_GUARD
    method_name = "can_activate"
    component_type = "guard"
