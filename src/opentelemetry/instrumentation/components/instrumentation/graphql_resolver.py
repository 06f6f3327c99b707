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
    COMPONENT_PROVIDER,
    COMPONENT_RESOLVER_TYPE,
    COMPONENT_TYPE,
)
from opentelemetry.instrumentation.components.constants import (
    RESOLVER_NAME_METADATA,
    RESOLVER_TYPE_METADATA,
)
from opentelemetry.instrumentation.components.instrumentation.base import (
    BaseTraceInstrumentor,
    SpanSpec,
    callback_name,
)
from opentelemetry.instrumentation.components.metadata import (
    get_metadata,
    has_metadata,
)

_TRACED_OPERATIONS = ("Query", "Mutation", "Subscription")


class GraphQLResolverInstrumentor(BaseTraceInstrumentor):
    """Traces query, mutation and subscription resolvers.

    A subscription resolver returns the stream of events sent to the
    client; its span covers the whole subscription.
    """

    name = "graphql_resolver"

    def _setup_instrumentation(self):
        resolvers = (
            provider
            for provider in self.get_providers()
            if has_metadata(RESOLVER_NAME_METADATA, provider.metatype)
        )
        self.instrument_methods(resolvers, self._is_resolver, self._describe)

    @staticmethod
    def _is_resolver(method) -> bool:
        return (
            get_metadata(RESOLVER_TYPE_METADATA, method) in _TRACED_OPERATIONS
        )

    @staticmethod
    def _describe(provider, name, method) -> SpanSpec:
        callback = callback_name(method, name)
        operation = get_metadata(RESOLVER_TYPE_METADATA, method)
        return SpanSpec(
            f"Resolver->{provider.name}.{callback}",
            {
                COMPONENT_TYPE: "resolver",
                COMPONENT_PROVIDER: provider.name,
                COMPONENT_CALLBACK: callback,
                COMPONENT_RESOLVER_TYPE: operation,
            },
            wrap_stream=operation == "Subscription",
        )
