"""bootwatch Supervisor.

Waits for the Docker daemon, selects always-restart containers and brings the
stopped ones up one at a time.
"""

from __future__ import annotations

from bootwatch.supervisor.bring_up import BringUpOutcome, StartAndWaitSupervisor
from bootwatch.supervisor.discovery import Candidate, CandidateSelector
from bootwatch.supervisor.orchestrator import BootOrchestrator, RunOutcome
from bootwatch.supervisor.polling import poll_until
from bootwatch.supervisor.progress_reporter import BootProgressReporter
from bootwatch.supervisor.readiness import DaemonReadinessGate

__all__ = [
    "BootOrchestrator",
    "BootProgressReporter",
    "BringUpOutcome",
    "Candidate",
    "CandidateSelector",
    "DaemonReadinessGate",
    "RunOutcome",
    "StartAndWaitSupervisor",
    "poll_until",
]
