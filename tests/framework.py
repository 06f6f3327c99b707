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
A stand-in for the web, RPC, GraphQL, scheduling and event frameworks whose
components are instrumented. The decorators only leave the capability
markers a real framework would; nothing here dispatches requests.
"""

from __future__ import annotations

import uuid

from opentelemetry.instrumentation.components.constants import (
    APP_GUARD,
    APP_INTERCEPTOR,
    APP_PIPE,
    EVENT_LISTENER_METADATA,
    GUARDS_METADATA,
    INTERCEPTORS_METADATA,
    METHOD_METADATA,
    PATH_METADATA,
    PATTERN_METADATA,
    PIPES_METADATA,
    RESOLVER_NAME_METADATA,
    RESOLVER_TYPE_METADATA,
    SCHEDULE_CRON_OPTIONS,
    SCHEDULE_INTERVAL_OPTIONS,
    SCHEDULE_TIMEOUT_OPTIONS,
    SCHEDULER_NAME,
)
from opentelemetry.instrumentation.components.container import (
    ModulesContainer,
)
from opentelemetry.instrumentation.components.metadata import (
    define_metadata,
    get_metadata,
)

_GLOBAL_TOKENS = {
    "guard": APP_GUARD,
    "interceptor": APP_INTERCEPTOR,
    "pipe": APP_PIPE,
}


def controller(path: str = "/"):
    def decorator(klass):
        define_metadata(PATH_METADATA, path, klass)
        return klass

    return decorator


def get(path: str = "/"):
    def decorator(method):
        define_metadata(PATH_METADATA, path, method)
        define_metadata(METHOD_METADATA, "GET", method)
        return method

    return decorator


def message_pattern(pattern: str):
    def decorator(method):
        define_metadata(PATTERN_METADATA, pattern, method)
        return method

    return decorator


def _enhancer_decorator(key):
    def use(*enhancers):
        def decorator(target):
            define_metadata(key, list(enhancers), target)
            return target

        return decorator

    return use


use_guards = _enhancer_decorator(GUARDS_METADATA)
use_interceptors = _enhancer_decorator(INTERCEPTORS_METADATA)
use_pipes = _enhancer_decorator(PIPES_METADATA)


def on_event(event, **options):
    def decorator(method):
        listeners = list(get_metadata(EVENT_LISTENER_METADATA, method) or [])
        listeners.append({"event": event, **options})
        define_metadata(EVENT_LISTENER_METADATA, listeners, method)
        return method

    return decorator


def cron(expression: str, name: str | None = None):
    def decorator(method):
        options = {"cron_time": expression}
        if name:
            options["name"] = name
        define_metadata(SCHEDULE_CRON_OPTIONS, options, method)
        return method

    return decorator


def _delayed(key):
    def schedule(seconds: float, name: str | None = None):
        def decorator(method):
            define_metadata(key, {"seconds": seconds}, method)
            if name:
                define_metadata(SCHEDULER_NAME, name, method)
            return method

        return decorator

    return schedule


interval = _delayed(SCHEDULE_INTERVAL_OPTIONS)
timeout = _delayed(SCHEDULE_TIMEOUT_OPTIONS)


def resolver(name: str | None = None):
    def decorator(klass):
        define_metadata(RESOLVER_NAME_METADATA, name or klass.__name__, klass)
        return klass

    return decorator


def _operation(operation):
    def factory():
        def decorator(method):
            define_metadata(RESOLVER_TYPE_METADATA, operation, method)
            return method

        return decorator

    return factory


query = _operation("Query")
mutation = _operation("Mutation")
subscription = _operation("Subscription")
resolve_field = _operation("ResolveField")


def create_container(
    controllers=(), providers=(), global_enhancers=None
) -> ModulesContainer:
    """One module holding the given classes.

    ``global_enhancers`` maps "guard", "interceptor" or "pipe" to classes
    registered under the matching ``APP_*`` token.
    """
    container = ModulesContainer()
    module = container.add_module("AppModule")
    for klass in controllers:
        module.add_controller(klass)
    for provider in providers:
        module.add_provider(provider)
    for kind, enhancers in (global_enhancers or {}).items():
        for enhancer in enhancers:
            module.add_provider(
                enhancer, token=f"{_GLOBAL_TOKENS[kind]}:{uuid.uuid4()}"
            )
    return container
