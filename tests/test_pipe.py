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

from opentelemetry.instrumentation.components.instrumentation.pipe import (
    PipeInstrumentor,
)
from opentelemetry.instrumentation.components.marker import is_active

from .base import ComponentsTestBase
from .framework import controller, create_container, get, use_pipes


class ParseIntPipe:
    def transform(self, value, metadata=None):
        return int(value)


class TrimPipe:
    def transform(self, value, metadata=None):
        return value.strip()


class ClassPipe:
    def transform(self, value, metadata=None):
        return value


class HelperPipe:
    def transform(self, value, metadata=None):
        return value


class ValidationPipe:
    def transform(self, value, metadata=None):
        if value is None:
            raise ValueError("value is required")
        return value


class TestPipeInstrumentor(ComponentsTestBase):
    def setUp(self):
        super().setUp()

        @use_pipes(ClassPipe)
        @controller("/cats")
        class CatsController:
            @use_pipes(ParseIntPipe, TrimPipe)
            @get("/:id")
            def find_one(self, cat_id):
                return cat_id

            @use_pipes(HelperPipe)
            def helper(self):
                pass

        self.instrument(
            PipeInstrumentor(),
            create_container(
                controllers=[CatsController],
                global_enhancers={"pipe": [ValidationPipe]},
            ),
        )

    def test_route_pipes(self):
        self.assertEqual(ParseIntPipe().transform("42"), 42)
        self.assertEqual(TrimPipe().transform(" tom "), "tom")

        parse, trim = self.finished_spans()
        self.assertEqual(parse.name, "CatsController.find_one.ParseIntPipe")
        self.assertEqual(trim.name, "CatsController.find_one.TrimPipe")
        self.assertEqual(
            dict(parse.attributes),
            {
                "component.type": "pipe",
                "component.controller": "CatsController",
                "component.provider": "ParseIntPipe",
                "component.callback": "find_one",
                "component.scope": "controller_method",
            },
        )

    def test_global_pipe(self):
        with self.assertRaises(ValueError):
            ValidationPipe().transform(None)

        (span,) = self.finished_spans()
        self.assertEqual(span.name, "ValidationPipe")
        self.assertEqual(span.attributes["component.scope"], "global")
        self.assertEqual(span.events[0].name, "exception")

    def test_pipes_off_routes_are_not_traced(self):
        self.assertFalse(is_active(ClassPipe.transform))
        self.assertFalse(is_active(HelperPipe.transform))
