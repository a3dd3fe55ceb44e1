"""Features: optional server features enabled on this instance."""

from sonar_client.services.base import Service


class FeaturesService(Service):

    def list(self) -> list[str]:
        """Names of the supported features, e.g. ``["branch-support"]``."""
        return self._get("features/list")
