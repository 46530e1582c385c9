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
"""Tests for StructlogAdapter."""

import logging

import structlog

from pytinder.core.config import Config
from pytinder.logging.structlog_adapter import StructlogAdapter


class TestStructlogAdapterConfigure:
    def test_configure_with_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter._root_level == "INFO"
        assert adapter._format == "console"

    def test_configure_reads_root_level(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"pytinder": {"logging": {"level": {"root": "debug"}}}}))
        assert adapter._root_level == "DEBUG"

    def test_configure_reads_format(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"pytinder": {"logging": {"format": "JSON"}}}))
        assert adapter._format == "json"

    def test_configure_applies_per_module_levels(self):
        adapter = StructlogAdapter()
        config = Config({"pytinder": {"logging": {"level": {"root": "INFO", "pytinder.client": "DEBUG"}}}})

        adapter.configure(config)

        assert adapter._module_levels == {"pytinder.client": "DEBUG"}
        assert logging.getLogger("pytinder.client").level == logging.DEBUG

    def test_configure_from_packaged_defaults(self, tmp_path):
        adapter = StructlogAdapter()
        adapter.configure(Config.from_sources(tmp_path))
        assert adapter._root_level == "INFO"


class TestStructlogAdapterLogging:
    def test_get_logger_returns_bound_logger(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        logger = adapter.get_logger("pytinder.test")
        assert callable(getattr(logger, "info", None))
        assert callable(getattr(logger, "warning", None))

    def test_events_carry_key_values(self):
        with structlog.testing.capture_logs() as captured:
            structlog.get_logger("pytinder.test").warning("circuit_opened", circuit="GET")
        assert captured == [{"event": "circuit_opened", "circuit": "GET", "log_level": "warning"}]

    def test_set_level(self):
        adapter = StructlogAdapter()
        adapter.set_level("pytinder.client.retry", "WARNING")
        assert logging.getLogger("pytinder.client.retry").level == logging.WARNING
