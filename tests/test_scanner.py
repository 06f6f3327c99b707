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

from opentelemetry.instrumentation.components.scanner import MetadataScanner


class Base:
    region = "eu"

    def __init__(self):
        self.value = 1

    @property
    def size(self):
        return 1

    def hello(self):
        pass

    def base_only(self):
        pass


class Middle(Base):
    def middle_only(self):
        pass

    @staticmethod
    def static_helper():
        pass

    @classmethod
    def create(cls):
        return cls()


class Derived(Middle):
    class Options:
        pass

    def hello(self):
        pass

    def derived_only(self):
        pass


class TestMetadataScanner(TestCase):
    def setUp(self):
        self.scanner = MetadataScanner()

    def test_walks_the_whole_chain(self):
        self.assertEqual(
            self.scanner.get_all_method_names(Derived),
            (
                "hello",
                "derived_only",
                "middle_only",
                "static_helper",
                "create",
                "base_only",
            ),
        )

    def test_excludes_accessors_constructors_and_attributes(self):
        names = self.scanner.get_all_method_names(Base)

        self.assertEqual(names, ("hello", "base_only"))
        for excluded in ("__init__", "size", "region"):
            self.assertNotIn(excluded, names)

    def test_nested_classes_are_not_methods(self):
        self.assertNotIn("Options", self.scanner.get_all_method_names(Derived))

    def test_not_a_class(self):
        self.assertEqual(self.scanner.get_all_method_names(None), ())
        self.assertEqual(self.scanner.get_all_method_names(Base()), ())

    def test_results_are_cached(self):
        class Service:
            def first(self):
                pass

        names = self.scanner.get_all_method_names(Service)
        Service.second = lambda self: None

        self.assertIs(self.scanner.get_all_method_names(Service), names)
        self.assertEqual(names, ("first",))
        self.assertEqual(
            MetadataScanner().get_all_method_names(Service),
            ("first", "second"),
        )
