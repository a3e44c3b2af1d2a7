"""
Tests for Settings and the dependency injection Container
"""

import asyncio

import pytest

from devflow_analytics.adapters.inbound import AnalysisWorkerPool, RequestDispatcher
from devflow_analytics.application.services import AnalysisService
from devflow_analytics.config import Container, Settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("DEVFLOW_WORKERS", "DEVFLOW_TASK_TIMEOUT", "DEVFLOW_SHUTDOWN_TIMEOUT", "DEVFLOW_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings.from_env()
        assert settings == Settings()
        assert settings.worker_count == 1
        assert settings.task_timeout == 30.0

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("DEVFLOW_WORKERS", "4")
        monkeypatch.setenv("DEVFLOW_TASK_TIMEOUT", "2.5")
        monkeypatch.setenv("DEVFLOW_SHUTDOWN_TIMEOUT", "1")
        monkeypatch.setenv("DEVFLOW_LOG_LEVEL", "debug")
        settings = Settings.from_env()
        assert settings.worker_count == 4
        assert settings.task_timeout == 2.5
        assert settings.shutdown_timeout == 1.0
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("value", ["0", "-1"])
    def test_non_positive_timeout_disables_it(self, monkeypatch, value):
        monkeypatch.setenv("DEVFLOW_TASK_TIMEOUT", value)
        assert Settings.from_env().task_timeout is None


class TestContainer:

    def test_wiring(self, clock):
        container = Container(settings=Settings(worker_count=2, task_timeout=5.0), clock=clock)
        assert isinstance(container.analysis_service(), AnalysisService)
        assert isinstance(container.dispatcher(), RequestDispatcher)

        pool = container.worker_pool()
        assert isinstance(pool, AnalysisWorkerPool)
        assert pool is container.worker_pool()
        assert pool.task_timeout == 5.0

    def test_services_are_not_shared(self, clock):
        container = Container(clock=clock)
        assert container.analysis_service() is not container.analysis_service()

    def test_pool_round_trip_and_close(self, clock, wire_nodes):
        container = Container(clock=clock)

        async def scenario():
            pool = container.worker_pool()
            await pool.start()
            report = await pool.analyze_progress(wire_nodes, [])
            await container.close()
            return report, pool.running

        report, running = asyncio.run(scenario())
        assert report["summary"]["totalNodes"] == 3
        assert running is False
        assert container._pool is None

    def test_from_settings(self):
        container = Container.from_settings(Settings(log_level="WARNING"))
        assert container.settings.log_level == "WARNING"
