"""Server: version of the running SonarQube instance."""

from sonar_client.services.base import Service


class ServerService(Service):

    def version(self) -> str:
        return self._get("server/version", expect="text").strip()
