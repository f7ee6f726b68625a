"""
Core math modules для formula-engine

Arbitrary-precision числа (BigInteger, BigDecimal, BigRational) поверх
сменяемых digit-string backend.
"""

# Exceptions
from src.core.math.exceptions import (
    DivisionByZeroError,
    MathError,
    NumberFormatError,
    RoundingNecessaryError,
)

# Rounding
from src.core.math.rounding import RoundingMode

# Backends
from src.core.math.backend import MAX_POWER, NumberBackend
from src.core.math.delegating_backends import BuiltinIntBackend, GmpBackend
from src.core.math.schoolbook_backend import SchoolbookBackend

# Backend selection
from src.core.math.backend_selection import (
    BACKEND_ENV_VAR,
    BACKEND_PRIORITY,
    BackendConfig,
    available_backends,
    create_backend,
    current_backend,
    detect_backend,
    get_default_backend,
    using_backend,
)

# Big numbers
from src.core.math.big_numbers import (
    BigDecimal,
    BigInteger,
    BigNumber,
    BigRational,
)

__all__ = [
    # Exceptions
    "DivisionByZeroError",
    "MathError",
    "NumberFormatError",
    "RoundingNecessaryError",
    # Rounding
    "RoundingMode",
    # Backends: Constants
    "MAX_POWER",
    # Backends: Types
    "NumberBackend",
    "BuiltinIntBackend",
    "GmpBackend",
    "SchoolbookBackend",
    # Backend selection: Constants
    "BACKEND_ENV_VAR",
    "BACKEND_PRIORITY",
    # Backend selection: Types
    "BackendConfig",
    # Backend selection: Functions
    "available_backends",
    "create_backend",
    "current_backend",
    "detect_backend",
    "get_default_backend",
    "using_backend",
    # Big numbers
    "BigDecimal",
    "BigInteger",
    "BigNumber",
    "BigRational",
]
