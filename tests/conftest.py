"""
Pytest configuration and fixtures for formula-engine tests.
"""

from collections.abc import Generator

import pytest

from src.core.math.backend import NumberBackend
from src.core.math.backend_selection import (
    BACKEND_PRIORITY,
    available_backends,
    create_backend,
    using_backend,
)
from src.core.math.schoolbook_backend import SchoolbookBackend


def _backend_params() -> list:
    """Все backend; недоступные помечаются skip."""
    available = set(available_backends())
    return [
        pytest.param(
            backend_cls.name,
            id=backend_cls.name,
            marks=pytest.mark.skipif(
                backend_cls.name not in available,
                reason=f"{backend_cls.name} backend is not available",
            ),
        )
        for backend_cls in BACKEND_PRIORITY
    ]


@pytest.fixture(params=_backend_params())
def backend(request) -> Generator[NumberBackend, None, None]:
    """Каждый доступный backend, активный в пределах теста."""
    instance = create_backend(request.param)
    with using_backend(instance):
        yield instance


@pytest.fixture
def schoolbook() -> Generator[SchoolbookBackend, None, None]:
    """SchoolbookBackend без native fast-path, активный в пределах теста."""
    instance = SchoolbookBackend(max_digits_add_div=0, max_digits_mul=0)
    with using_backend(instance):
        yield instance
