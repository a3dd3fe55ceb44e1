"""Analysis reports: state of the Compute Engine report queue."""

from sonar_client.services.base import Service


class AnalysisReportsService(Service):

    def is_queue_empty(self) -> bool:
        """True when no analysis report is waiting to be processed.

        The server answers with a bare ``true`` / ``false`` text body.
        """
        return self._get("analysis_reports/is_queue_empty", expect="text").strip() == "true"
