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

from __future__ import annotations

from opentelemetry.instrumentation.components.attributes import (
    COMPONENT_CALLBACK,
    COMPONENT_NAME,
    COMPONENT_PROVIDER,
    COMPONENT_SCHEDULE_TYPE,
    COMPONENT_TYPE,
)
from opentelemetry.instrumentation.components.constants import (
    SCHEDULE_CRON_OPTIONS,
    SCHEDULE_INTERVAL_OPTIONS,
    SCHEDULE_TIMEOUT_OPTIONS,
    SCHEDULER_NAME,
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

_SCHEDULE_TYPES = (
    (SCHEDULE_CRON_OPTIONS, "cron"),
    (SCHEDULE_TIMEOUT_OPTIONS, "timeout"),
    (SCHEDULE_INTERVAL_OPTIONS, "interval"),
)


def schedule_type(method) -> str | None:
    for key, kind in _SCHEDULE_TYPES:
        if has_metadata(key, method):
            return kind
    return None


def schedule_name(method) -> str | None:
    """Return the name a job was registered under, if it was given one."""
    if has_metadata(SCHEDULE_CRON_OPTIONS, method):
        options = get_metadata(SCHEDULE_CRON_OPTIONS, method)
        if isinstance(options, dict):
            return options.get("name") or None
        return getattr(options, "name", None) or None
    return get_metadata(SCHEDULER_NAME, method) or None


class ScheduleInstrumentor(BaseTraceInstrumentor):
    """Traces provider methods run by a scheduler (cron, interval, timeout)."""

    name = "schedule"

    def _setup_instrumentation(self):
        self.instrument_methods(
            self.get_providers(), self._is_job, self._describe
        )

    def _is_job(self, method) -> bool:
        return (
            not self.is_decorated(method)
            and schedule_type(method) is not None
        )

    @staticmethod
    def _describe(provider, name, method) -> SpanSpec:
        callback = callback_name(method, name)
        job_name = schedule_name(method)
        attributes = {
            COMPONENT_TYPE: "schedule",
            COMPONENT_PROVIDER: provider.name,
            COMPONENT_CALLBACK: callback,
            COMPONENT_SCHEDULE_TYPE: schedule_type(method),
        }
        if job_name:
            attributes[COMPONENT_NAME] = job_name
        return SpanSpec(f"{provider.name}.{job_name or callback}", attributes)
