import pytest

from tests.fakes import make_store

STORE_KINDS = ["transactional", "compensating", "json"]


@pytest.fixture(params=STORE_KINDS)
def store(request, tmp_path):
    """Every checkout-level test runs against each unit-of-work strategy."""
    return make_store(request.param, tmp_path)
