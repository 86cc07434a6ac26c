import pytest
from django.core.cache import cache


@pytest.fixture(autouse=True)
def use_stubs_for_tests(settings):
    settings.USE_HTTP_ADAPTERS = False


@pytest.fixture(autouse=True)
def reset_throttle_counters():
    # scoped throttles keep their history in the default cache
    cache.clear()
    yield
    cache.clear()
