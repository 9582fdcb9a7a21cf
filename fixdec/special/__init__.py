"""
Special values (NaN / Infinity) propagation and error policy.
"""

# Load the domain package first: it imports the kernel, which imports
# state_machine, so importing state_machine first would hit a circular import.
import fixdec.core.domain  # noqa: F401
from fixdec.special.state_machine import (
    STATE_MACHINE,
    Operand,
    SpecialResolution,
    SpecialValueStateMachine,
)

__all__ = [
    "STATE_MACHINE",
    "Operand",
    "SpecialResolution",
    "SpecialValueStateMachine",
]
