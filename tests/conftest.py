import pytest

from erap.counties import CountyResolver


@pytest.fixture
def counties():
    return CountyResolver({
        "Ohio": {"Springfield": "Clark County"},
        "Oregon": {"Portland": "Multnomah County"},
    })
