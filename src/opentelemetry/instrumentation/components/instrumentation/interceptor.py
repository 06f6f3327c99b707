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
    APP_INTERCEPTOR,
    INTERCEPTORS_METADATA,
)
from opentelemetry.instrumentation.components.instrumentation.enhancer import (
    EnhancerTraceInstrumentor,
)


class InterceptorInstrumentor(EnhancerTraceInstrumentor):
    """Traces ``intercept`` of controller, method and global interceptors.

    ``intercept`` returns the stream of results produced downstream of the
    interceptor, so its span lasts until that stream is exhausted.
    """

    name = "interceptor"
    metadata_key = INTERCEPTORS_METADATA
    global_token = APP_INTERCEPTOR
    method_name = "intercept"
    component_type = "interceptor"
    wrap_stream = True
