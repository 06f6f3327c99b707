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

from unittest import TestCase

from opentelemetry.instrumentation.components.marker import (
    activate,
    copy_metadata,
    get_tag,
    has_tag,
    is_active,
    tag,
)
from opentelemetry.instrumentation.components.metadata import (
    define_metadata,
    get_metadata,
)


class TestMarker(TestCase):
    def test_tag(self):
        def handler():
            pass

        self.assertFalse(has_tag(handler))
        tag(handler, "Hello.handler")
        self.assertTrue(has_tag(handler))
        self.assertEqual(get_tag(handler), "Hello.handler")

    def test_activate(self):
        def handler():
            pass

        self.assertFalse(is_active(handler))
        self.assertFalse(is_active(None))
        activate(handler)
        self.assertTrue(is_active(handler))

    def test_copy_metadata(self):
        def source():
            pass

        def destination():
            pass

        define_metadata("path", "/hello", source)
        source.roles = ["admin"]

        copy_metadata(source, destination)

        self.assertEqual(get_metadata("path", destination), "/hello")
        self.assertEqual(destination.roles, ["admin"])

        define_metadata("path", "/other", destination)
        self.assertEqual(get_metadata("path", source), "/hello")
