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

OTEL_PYTHON_COMPONENTS_DISABLED_INSTRUMENTATIONS = (
    "OTEL_PYTHON_COMPONENTS_DISABLED_INSTRUMENTATIONS"
)
"""
.. envvar:: OTEL_PYTHON_COMPONENTS_DISABLED_INSTRUMENTATIONS

Comma-separated names of component instrumentations to skip (for example
guard,pipe). * skips all of them.
"""
