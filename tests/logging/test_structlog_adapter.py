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
"""Tests for LoggingPort and StructlogAdapter."""

import logging
from typing import Any

import pytest

from flyspec.core.config import Config
from flyspec.logging import LoggingPort, StructlogAdapter


@pytest.fixture(autouse=True)
def _reset_structlog():
    import structlog

    yield
    structlog.reset_defaults()


class TestLoggingPortProtocol:
    def test_conforming_class_is_instance(self):
        class FakeLogging:
            def configure(self, config: Any) -> None:
                pass

            def get_logger(self, name: str) -> Any:
                pass

            def set_level(self, name: str, level: str) -> None:
                pass

        assert isinstance(FakeLogging(), LoggingPort)

    def test_non_conforming_class_is_not_instance(self):
        class Incomplete:
            def get_logger(self, name: str) -> Any:
                pass

        assert not isinstance(Incomplete(), LoggingPort)


class TestStructlogAdapter:
    def test_implements_logging_port(self):
        assert isinstance(StructlogAdapter(), LoggingPort)

    def test_configure_with_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter._root_level == "INFO"
        assert adapter._format == "console"

    def test_configure_reads_levels_and_format(self):
        adapter = StructlogAdapter()
        config = Config(
            {"flyspec": {"logging": {"format": "json", "level": {"root": "debug", "flyspec.query": "warning"}}}}
        )
        adapter.configure(config)
        assert adapter._root_level == "DEBUG"
        assert adapter._format == "json"
        assert logging.getLogger("flyspec.query").level == logging.WARNING

    def test_get_logger(self):
        logger = StructlogAdapter().get_logger("flyspec.test")
        assert hasattr(logger, "debug")

    def test_set_level(self):
        StructlogAdapter().set_level("flyspec.repository", "ERROR")
        assert logging.getLogger("flyspec.repository").level == logging.ERROR

    def test_configure_applies_env_level_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("FLYSPEC_LOGGING_LEVEL_ROOT", "error")
        adapter = StructlogAdapter()
        adapter.configure(Config({"flyspec": {"logging": {"level": {"root": "debug"}}}}))
        assert adapter._root_level == "ERROR"
