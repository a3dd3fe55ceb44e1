"""Python client for the SonarQube Web API."""

__version__ = "0.1.0"

from sonar_client.client import SonarClient  # noqa: E402
from sonar_client.errors import (  # noqa: E402
    APIError,
    AuthenticationError,
    ForbiddenError,
    NetworkError,
    NotFoundError,
    SonarClientError,
)
from sonar_client.validation import ValidationError  # noqa: E402

__all__ = [
    "APIError",
    "AuthenticationError",
    "ForbiddenError",
    "NetworkError",
    "NotFoundError",
    "SonarClient",
    "SonarClientError",
    "ValidationError",
    "__version__",
]
