"""
MIT Licence: Copyright (c) 2025 Baya Systems <https://bayasystems.com>

Ladder Tests
======================

command line options for tests
"""

import pytest


def pytest_addoption(parser):
    parser.addoption('--quick', action = 'store_true', default = False,
        help = 'fewer iterations in the randomised model checks')


@pytest.fixture(scope = "session")
def quick(pytestconfig):
    return pytestconfig.getoption("quick")
