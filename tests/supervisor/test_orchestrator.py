"""Tests for the boot orchestrator."""

from __future__ import annotations

import pytest

from bootwatch.core.config import BootwatchConfig
from bootwatch.core.exceptions import ConfigurationError, DiscoveryError
from bootwatch.ports.runtime_ports import ContainerInspection
from bootwatch.supervisor.orchestrator import BootOrchestrator, RunOutcome
from bootwatch.supervisor.progress_reporter import ProgressPhase
from tests.fakes.runtime import FakeClock, FakeContainer, FakeContainerRuntime

ID_A = "a" * 64
ID_B = "b" * 64
ID_C = "c" * 64


class TestBootOrchestrator:
    """Test a full supervision pass against the fake runtime."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.clock = FakeClock()
        self.runtime = FakeContainerRuntime(clock=self.clock)
        config = BootwatchConfig(
            BOOTWATCH_DAEMON_CHECK_INTERVAL=3.0, BOOTWATCH_POLL_INTERVAL=10.0
        )
        self.orchestrator = BootOrchestrator.from_config(
            self.runtime, config, clock=self.clock, sleep=self.clock.sleep
        )

    def started_ids(self) -> list[str | None]:
        return [cid for op, cid in self.runtime.calls if op == "start"]

    @pytest.mark.asyncio
    async def test_mixed_candidates(self, caplog: pytest.LogCaptureFixture) -> None:
        """Running is skipped, one comes up, one times out."""
        self.runtime.add(FakeContainer(ID_A, "/a", status="running"))
        self.runtime.add(FakeContainer(ID_B, "/b", after_start=["running"]))
        self.runtime.add(FakeContainer(ID_C, "/c", after_start=["exited"]))

        outcome = await self.orchestrator.run(30)

        assert outcome.started_count == 1
        assert outcome.failed_count == 1
        assert self.started_ids() == [ID_B[:12], ID_C[:12]]
        assert "Container /a (aaaaaaaaaaaa) is already running. Status: running" in (
            caplog.messages
        )
        assert "  Started containers: 1" in caplog.messages
        assert "  Failed containers: 1" in caplog.messages

    @pytest.mark.asyncio
    async def test_running_candidate_is_never_started(self) -> None:
        self.runtime.add(FakeContainer(ID_A, "/a", status="running"))

        outcome = await self.orchestrator.run(30)

        assert outcome == RunOutcome(
            started_count=0, failed_count=0, elapsed_ms=outcome.elapsed_ms
        )
        assert self.started_ids() == []
        # Only the discovery inspection, no polling.
        assert self.runtime.count("inspect") == 1

    @pytest.mark.asyncio
    async def test_start_failure_does_not_stop_the_loop(self) -> None:
        self.runtime.add(FakeContainer(ID_B, "/b", start_error="no such image"))
        self.runtime.add(FakeContainer(ID_C, "/c"))

        outcome = await self.orchestrator.run(15)

        assert outcome.started_count == 1
        assert outcome.failed_count == 1
        assert self.started_ids() == [ID_B[:12], ID_C[:12]]

    @pytest.mark.asyncio
    async def test_containers_with_other_policies_are_ignored(self) -> None:
        self.runtime.add(FakeContainer(ID_A, "/a", restart_policy="no"))
        self.runtime.add(FakeContainer(ID_B, "/b", restart_policy="unless-stopped"))

        outcome = await self.orchestrator.run(30)

        assert outcome.started_count == 0
        assert outcome.failed_count == 0
        assert self.started_ids() == []

    @pytest.mark.asyncio
    async def test_waits_for_daemon_before_discovery(self) -> None:
        self.runtime.ping_failures = 3
        self.runtime.add(FakeContainer(ID_B, "/b"))

        outcome = await self.orchestrator.run(30)

        assert outcome.started_count == 1
        assert [op for op, _ in self.runtime.calls][:5] == [
            "ping",
            "ping",
            "ping",
            "ping",
            "list",
        ]
        assert self.runtime.ping_times == [0.0, 3.0, 6.0, 9.0]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("timeout", [0, -5])
    async def test_non_positive_timeout_rejected_before_ping(
        self, timeout: int
    ) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            await self.orchestrator.run(timeout)

        assert exc_info.value.error_code == "CONFIG_001"
        assert self.runtime.calls == []

    @pytest.mark.asyncio
    async def test_discovery_error_propagates(self) -> None:
        self.runtime.list_error = "connection reset by peer"

        with pytest.raises(DiscoveryError):
            await self.orchestrator.run(30)

        assert self.started_ids() == []

    @pytest.mark.asyncio
    async def test_post_start_audit_is_logged(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        self.runtime.add(FakeContainer(ID_B, "/b"))

        await self.orchestrator.run(30)

        assert (
            "Post-start inspection for container /b (bbbbbbbbbbbb) - Status: running"
            in caplog.messages
        )

    @pytest.mark.asyncio
    async def test_audit_failure_does_not_change_counts(self) -> None:
        container = self.runtime.add(FakeContainer(ID_B, "/b"))
        calls = {"inspect": 0}
        original_inspect = self.runtime.inspect

        async def inspect(container_id: str) -> ContainerInspection:
            calls["inspect"] += 1
            # discovery, poll, then the audit
            if calls["inspect"] == 3:
                container.inspect_error = "gone"
            return await original_inspect(container_id)

        self.runtime.inspect = inspect  # type: ignore[method-assign]

        outcome = await self.orchestrator.run(30)

        assert outcome.started_count == 1
        assert outcome.failed_count == 0

    @pytest.mark.asyncio
    async def test_reporter_reaches_complete_phase(self) -> None:
        await self.orchestrator.run(30)

        summary = self.orchestrator.reporter.get_run_summary()
        assert summary["final_phase"] == ProgressPhase.COMPLETE.value
        assert summary["phases"] == [
            "initializing",
            "waiting_for_daemon",
            "discovering",
            "supervising",
            "complete",
        ]
        assert summary["success"] is True

    @pytest.mark.asyncio
    async def test_failed_bring_ups_name_their_catalog_entry(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        self.runtime.add(FakeContainer(ID_B, "/b", start_error="no such image"))
        self.runtime.add(FakeContainer(ID_C, "/c", after_start=["exited"]))

        await self.orchestrator.run(15)

        assert (
            "Container /b (bbbbbbbbbbbb) left down (START_001: Container Start Failed)"
            in caplog.messages
        )
        assert (
            "Container /c (cccccccccccc) left down "
            "(START_002: Container Start Timed Out)" in caplog.messages
        )
        assert any(
            m.startswith("Container Start Timed Out (START_002)")
            and "last_status: exited" in m
            for m in caplog.messages
        )

    @pytest.mark.asyncio
    async def test_announce_false_skips_banner(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        await self.orchestrator.run(30, announce=False)

        assert "Starting docker-bootwatch..." not in caplog.messages
        assert "  Started containers: 0" in caplog.messages
