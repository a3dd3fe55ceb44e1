import pytest

from sonar_client import SonarClient
from support import BASE


@pytest.fixture
def client() -> SonarClient:
    return SonarClient(url=BASE, token="squ_test")
