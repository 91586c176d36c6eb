from collections.abc import Iterator

import pytest

from map2d import HashMap2D, Map2DSettings


@pytest.fixture(autouse=True)
def reset_factory() -> Iterator[None]:
    """Restore the default implementation and settings of ``create_instance`` after each test."""
    yield

    import map2d.factory as factory

    factory.reset_implementation()
    factory.configure(Map2DSettings())


@pytest.fixture
def map_2x2() -> HashMap2D[str, int, float]:
    map2d: HashMap2D[str, int, float] = HashMap2D()
    map2d.put('A', 1, 2.3)
    map2d.put('A', 2, 2.4)
    map2d.put('B', 1, 2.5)
    map2d.put('B', 2, 2.6)
    return map2d
