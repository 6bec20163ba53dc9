# Copyright 2026 Firefly Software Solutions Inc.
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
"""StructlogAdapter: default LoggingPort implementation using structlog."""

from __future__ import annotations

import logging
import sys

import structlog

from typed_extconf.settings import LoggingSettings


def _renderer(output_format: str) -> structlog.types.Processor:
    if output_format.lower() == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


class StructlogAdapter:
    """Routes structlog through stdlib logging on stderr.

    Generated source and tables go to stdout; log lines never mix with them.
    """

    def configure(self, settings: LoggingSettings) -> None:
        """Configure structlog from the tool's logging settings."""
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                _renderer(str(settings.format)),
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s",
            stream=sys.stderr,
            level=getattr(logging, str(settings.level).upper(), logging.INFO),
            force=True,
        )
        for name, level in settings.levels.items():
            self.set_level(name, str(level))

    def set_level(self, name: str, level: str) -> None:
        """Set the level of one stdlib logger; unknown names fall back to INFO."""
        logging.getLogger(name).setLevel(getattr(logging, level.upper(), logging.INFO))
