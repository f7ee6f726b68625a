"""
Backend Selection — выбор NumberBackend для процесса и контекста

Правила:
1. Default backend выбирается один раз (autodetection по приоритетному
   списку gmp → builtin → schoolbook) и далее считается неизменяемой
   конфигурацией процесса.
2. Явный backend передаётся через using_backend() — context manager,
   ограничивающий выбор текущим потоком/контекстом. Глобального setter нет.
3. current_backend() возвращает scoped backend или default.

Переменная окружения FORMULA_ENGINE_BACKEND ("auto" | "gmp" | "builtin" |
"schoolbook") читается только при построении default backend.
"""

import logging
import os
import threading
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Final, Iterator, Optional

from src.core.math.backend import NumberBackend
from src.core.math.delegating_backends import BuiltinIntBackend, GmpBackend
from src.core.math.schoolbook_backend import SchoolbookBackend

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

BACKEND_ENV_VAR: Final[str] = "FORMULA_ENGINE_BACKEND"

# Приоритет autodetection: быстрые native библиотеки первыми
BACKEND_PRIORITY: Final[tuple[type[NumberBackend], ...]] = (
    GmpBackend,
    BuiltinIntBackend,
    SchoolbookBackend,
)

_BACKENDS_BY_NAME: Final[dict[str, type[NumberBackend]]] = {
    backend_cls.name: backend_cls for backend_cls in BACKEND_PRIORITY
}


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class BackendConfig:
    """Конфигурация выбора backend.

    preferred: "auto" для autodetection или имя конкретного backend.
    """

    preferred: str = "auto"

    @classmethod
    def from_env(cls) -> "BackendConfig":
        """Конфигурация из FORMULA_ENGINE_BACKEND (default: auto)."""
        value = os.getenv(BACKEND_ENV_VAR, "auto").strip().lower()
        return cls(preferred=value or "auto")


# =============================================================================
# DETECTION
# =============================================================================


def available_backends() -> list[str]:
    """Имена backend, доступных в текущем окружении, по убыванию приоритета."""
    return [cls.name for cls in BACKEND_PRIORITY if cls.probe()]


def create_backend(name: str) -> NumberBackend:
    """
    Создание backend по имени.

    Raises:
        ValueError: неизвестное имя или backend недоступен
    """
    backend_cls = _BACKENDS_BY_NAME.get(name)
    if backend_cls is None:
        raise ValueError(
            f"Unknown number backend {name!r}, expected one of "
            f"{sorted(_BACKENDS_BY_NAME)}"
        )
    if not backend_cls.probe():
        raise ValueError(f"Number backend {name!r} is not available")
    return backend_cls()


def detect_backend(config: Optional[BackendConfig] = None) -> NumberBackend:
    """
    Выбор backend: явный из конфигурации или первый доступный по приоритету.

    Args:
        config: конфигурация (default: BackendConfig.from_env())

    Returns:
        Новый экземпляр backend
    """
    config = config or BackendConfig.from_env()

    if config.preferred != "auto":
        return create_backend(config.preferred)

    for backend_cls in BACKEND_PRIORITY:
        if backend_cls.probe():
            return backend_cls()

    # SchoolbookBackend.probe() всегда True
    raise RuntimeError("No number backend available")


# =============================================================================
# PROCESS DEFAULT (write-once)
# =============================================================================

_default_backend: Optional[NumberBackend] = None
_default_lock = threading.Lock()


def get_default_backend() -> NumberBackend:
    """
    Default backend процесса.

    Строится при первом вызове под lock и далее не меняется.
    """
    global _default_backend

    backend = _default_backend
    if backend is not None:
        return backend

    with _default_lock:
        if _default_backend is None:
            _default_backend = detect_backend()
            logger.info("Selected number backend: %s", _default_backend.name)
        return _default_backend


# =============================================================================
# SCOPED OVERRIDE
# =============================================================================

_scoped_backend: ContextVar[Optional[NumberBackend]] = ContextVar(
    "formula_engine_backend", default=None
)


def current_backend() -> NumberBackend:
    """Backend текущего контекста (scoped или default процесса)."""
    backend = _scoped_backend.get()
    if backend is not None:
        return backend
    return get_default_backend()


@contextmanager
def using_backend(backend: NumberBackend) -> Iterator[NumberBackend]:
    """
    Использовать backend в пределах блока with.

    Examples:
        >>> with using_backend(SchoolbookBackend()) as backend:
        ...     current_backend() is backend
        True
    """
    token = _scoped_backend.set(backend)
    try:
        yield backend
    finally:
        _scoped_backend.reset(token)
