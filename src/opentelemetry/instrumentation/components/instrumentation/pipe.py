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
    APP_PIPE,
    PIPES_METADATA,
)
from opentelemetry.instrumentation.components.instrumentation.enhancer import (
    EnhancerTraceInstrumentor,
)


class PipeInstrumentor(EnhancerTraceInstrumentor):
    """Traces ``transform`` of the pipes bound to route handlers and of
    global pipes."""

    name = "pipe"
    metadata_key = PIPES_METADATA
    global_token = APP_PIPE
    method_name = "transform"
    component_type = "pipe"
    controller_scope = False

    def accepts_method(self, method):
        return self.is_path(method) and self.is_enhanced(method)
