import pytest

from repo_factcheck.domain.value_objects import RepositoryIdentifier


@pytest.fixture
def repo() -> RepositoryIdentifier:
    return RepositoryIdentifier(owner="acme", name="widget")
