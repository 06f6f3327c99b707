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

import asyncio

from opentelemetry.instrumentation.components.instrumentation.controller import (
    ControllerInstrumentor,
)
from opentelemetry.instrumentation.components.instrumentation.interceptor import (
    InterceptorInstrumentor,
)
from opentelemetry.trace import StatusCode

from .base import ComponentsTestBase
from .framework import controller, create_container, get, use_interceptors

DELAY = 0.1


async def collect(stream):
    return [item async for item in stream]


class LoggingInterceptor:
    def intercept(self, context, call_handler):
        return self._handle(call_handler)

    async def _handle(self, call_handler):
        await asyncio.sleep(DELAY)
        yield call_handler()


class CacheInterceptor:
    async def intercept(self, context, call_handler):
        await asyncio.sleep(0)
        return self._cached(call_handler)

    async def _cached(self, call_handler):
        yield call_handler()


class FailingInterceptor:
    def intercept(self, context, call_handler):
        return self._fail()

    async def _fail(self):
        await asyncio.sleep(0)
        raise PermissionError("denied")
        yield  # pylint: disable=unreachable


class TestInterceptorInstrumentor(ComponentsTestBase):
    def setUp(self):
        super().setUp()

        @use_interceptors(LoggingInterceptor)
        @controller("/cats")
        class CatsController:
            @use_interceptors(FailingInterceptor)
            @get("/")
            def find_all(self):
                return ["tom"]

        self.controller_class = CatsController
        container = create_container(
            controllers=[CatsController],
            global_enhancers={"interceptor": [CacheInterceptor]},
        )
        self.instrument(ControllerInstrumentor(), container)
        self.instrument(InterceptorInstrumentor(), container)

    def test_span_covers_the_stream(self):
        cats = self.controller_class()
        stream = LoggingInterceptor().intercept(None, cats.find_all)

        self.assertEqual(self.finished_spans(), ())
        self.assertEqual(asyncio.run(collect(stream)), [["tom"]])

        handler, interceptor = self.finished_spans()
        self.assertEqual(interceptor.name, "CatsController.LoggingInterceptor")
        self.assertEqual(
            dict(interceptor.attributes),
            {
                "component.type": "interceptor",
                "component.controller": "CatsController",
                "component.provider": "LoggingInterceptor",
                "component.scope": "controller",
            },
        )
        self.assertGreaterEqual(
            interceptor.end_time - interceptor.start_time, DELAY * 1e9
        )
        self.assertEqual(handler.name, "CatsController.find_all")
        self.assertEqual(handler.parent.span_id, interceptor.context.span_id)

    def test_awaited_stream(self):
        async def run():
            stream = await CacheInterceptor().intercept(None, lambda: "hit")
            return await collect(stream)

        self.assertEqual(asyncio.run(run()), ["hit"])

        (span,) = self.finished_spans()
        self.assertEqual(span.name, "CacheInterceptor")
        self.assertEqual(span.attributes["component.scope"], "global")

    def test_stream_error(self):
        stream = FailingInterceptor().intercept(None, None)

        with self.assertRaises(PermissionError):
            asyncio.run(collect(stream))

        (span,) = self.finished_spans()
        self.assertEqual(
            span.name, "CatsController.find_all.FailingInterceptor"
        )
        self.assertEqual(span.status.status_code, StatusCode.ERROR)
        self.assertEqual(span.attributes["component.callback"], "find_all")
