"""
Domain models and value objects.

Contains the Decimal value type, its configuration and the digit store.
"""

from fixdec.core.domain.config import (
    DEFAULT_CONFIG,
    GUARD_DIGITS,
    DecimalConfig,
    working_config,
)
from fixdec.core.domain.digits import (
    Magnitude,
    lead_trim,
    normalize,
    parse_digits,
    set_precision,
    trail_trim,
)
from fixdec.core.domain.kinds import NumKind
from fixdec.core.domain.number import Decimal, NativeType

__all__ = [
    # Config
    "DecimalConfig",
    "DEFAULT_CONFIG",
    "GUARD_DIGITS",
    "working_config",
    # Digit store
    "Magnitude",
    "lead_trim",
    "trail_trim",
    "normalize",
    "set_precision",
    "parse_digits",
    # Value type
    "Decimal",
    "NativeType",
    "NumKind",
]
