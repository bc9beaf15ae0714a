import pytest

from fixedint import entropy


@pytest.fixture(autouse=True)
def reproducible_entropy():
    """Every test starts from the same seeded source and leaves OS entropy behind."""
    entropy.set_seed(42)
    yield
    entropy.set_seed(None)
