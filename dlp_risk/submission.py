# Copyright 2023 Google LLC. This software is provided as-is, without warranty
# or representation for any use or purpose. Your use of it is subject to your
# agreement with Google.
"""Submits risk analysis jobs to DLP and fetches their state."""

import logging

from google.cloud import dlp_v2

logger = logging.getLogger(__name__)


class RiskJobClient:
    """Creates and retrieves DLP risk analysis jobs."""

    def __init__(self, project_id: str,
                 dlp_client: dlp_v2.DlpServiceClient = None):
        """Initializes the class with the required data.

        Args:
            project_id: The project ID to run the API calls under.
            dlp_client: The DLP client to use. Optional. A new
                DlpServiceClient is created if None.
        """
        self.dlp_client = dlp_client or dlp_v2.DlpServiceClient()
        self.project_id = project_id

    @property
    def parent(self) -> str:
        """The project route in GCP."""
        return f"projects/{self.project_id}"

    def create_job(self, risk_job: dlp_v2.RiskAnalysisJobConfig) -> dlp_v2.DlpJob:
        """Submits the job once. API errors are not retried.

        Args:
            risk_job: The risk analysis job configuration.

        Returns:
            The created job, holding the name assigned by the service.
        """
        job = self.dlp_client.create_dlp_job(
            request={"parent": self.parent, "risk_job": risk_job},
            retry=None)
        logger.info("Created job %s in state %s.", job.name, job.state.name)
        return job

    def get_job(self, name: str) -> dlp_v2.DlpJob:
        """Fetches the latest state of a job by name."""
        return self.dlp_client.get_dlp_job(request={"name": name}, retry=None)
