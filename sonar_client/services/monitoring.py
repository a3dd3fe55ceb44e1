"""Monitoring: Prometheus metrics of the server."""

from sonar_client.services.base import Service


class MonitoringService(Service):

    def metrics(self) -> str:
        """Metrics in the Prometheus text exposition format.

        Requires 'Administer System' or the system passcode.
        """
        return self._get("monitoring/metrics", expect="text")
