"""Admission control for outbound submissions.

A blocking gate bounds how many submissions may be granted per window; each
grant releases its slot automatically after a fixed delay.
"""

from crpt_client.adapters.rate_limit.base import AbstractAdmissionGate, GateState, Grant
from crpt_client.adapters.rate_limit.factory import create_admission_gate
from crpt_client.adapters.rate_limit.gate import FixedDelayAdmissionGate
from crpt_client.adapters.rate_limit.scheduler import DelayScheduler, ShutdownReport

__all__ = [
    "AbstractAdmissionGate",
    "DelayScheduler",
    "FixedDelayAdmissionGate",
    "GateState",
    "Grant",
    "ShutdownReport",
    "create_admission_gate",
]
