from brownie import network
import pytest

from scripts.helpful_scripts import LOCAL_BLOCKCHAIN_DEVELOPMENT


@pytest.fixture(autouse=True)
def isolate(request):
    # perform a chain rewind after completing each test, to ensure proper isolation
    # https://eth-brownie.readthedocs.io/en/stable/tests-pytest-intro.html#isolation-fixtures
    # live networks cannot be rewound
    if network.show_active() in LOCAL_BLOCKCHAIN_DEVELOPMENT:
        request.getfixturevalue("fn_isolation")
