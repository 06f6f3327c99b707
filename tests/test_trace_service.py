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

from opentelemetry.instrumentation.components import TraceService
from opentelemetry.test.test_base import TestBase


class TestTraceService(TestBase):
    def setUp(self):
        super().setUp()
        self.service = TraceService(tracer_provider=self.tracer_provider)

    def test_current_span(self):
        self.assertIsNone(self.service.get_span())

        with self.service.get_tracer().start_as_current_span("work") as span:
            self.assertIs(self.service.get_span(), span)

    def test_start_span(self):
        span = self.service.start_span("manual", attributes={"key": "value"})

        self.assertIsNone(self.service.get_span())
        span.end()

        (finished,) = self.memory_exporter.get_finished_spans()
        self.assertEqual(finished.name, "manual")
        self.assertEqual(finished.attributes["key"], "value")
        self.assertEqual(
            finished.instrumentation_scope.name,
            "opentelemetry.instrumentation.components",
        )
