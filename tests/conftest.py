import pytest

from cmdgraph.executors.instant import InstantBackend


@pytest.fixture(scope="function")
def backend():
    return InstantBackend()


@pytest.fixture(scope="function")
def log():
    return []
