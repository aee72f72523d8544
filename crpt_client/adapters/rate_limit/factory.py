"""Factory for building the admission gate from configuration."""

from crpt_client.adapters.rate_limit.gate import FixedDelayAdmissionGate
from crpt_client.core.config import GateSettings, settings


def create_admission_gate(gate_settings: GateSettings | None = None) -> FixedDelayAdmissionGate:
    """Build an admission gate from settings.

    Args:
        gate_settings: Optional gate settings; defaults to the global settings.

    Returns:
        FixedDelayAdmissionGate with its own release scheduler.

    Raises:
        InvalidConfigurationError: If the configured limit or window is not positive.
    """
    cfg = gate_settings or settings.gate
    return FixedDelayAdmissionGate(
        request_limit=cfg.request_limit,
        window_seconds=cfg.window_seconds,
        close_grace_seconds=cfg.close_grace_seconds,
    )
