import pytest
from google.api_core.exceptions import PermissionDenied
from google.cloud import dlp_v2

from dlp_risk.submission import RiskJobClient

from conftest import JOB_NAME


def test_create_job_sends_parent(dlp_client):
    risk_job = dlp_v2.RiskAnalysisJobConfig()

    job = RiskJobClient("calling-project", dlp_client=dlp_client).create_job(
        risk_job)

    assert job.name == JOB_NAME
    dlp_client.create_dlp_job.assert_called_once_with(
        request={"parent": "projects/calling-project", "risk_job": risk_job},
        retry=None)


def test_create_job_is_not_retried(dlp_client):
    """Service errors reach the caller unchanged after a single attempt."""

    error = PermissionDenied("caller lacks dlp.jobs.create")
    dlp_client.create_dlp_job.side_effect = error

    with pytest.raises(PermissionDenied) as excinfo:
        RiskJobClient("calling-project", dlp_client=dlp_client).create_job(
            dlp_v2.RiskAnalysisJobConfig())

    assert excinfo.value is error
    assert dlp_client.create_dlp_job.call_count == 1


def test_get_job_by_name(dlp_client):
    RiskJobClient("calling-project", dlp_client=dlp_client).get_job(JOB_NAME)

    dlp_client.get_dlp_job.assert_called_once_with(
        request={"name": JOB_NAME}, retry=None)


def test_calls_disable_client_retry(dlp_client):
    """Both DLP calls opt out of the client's default retry policy."""

    jobs = RiskJobClient("calling-project", dlp_client=dlp_client)
    jobs.create_job(dlp_v2.RiskAnalysisJobConfig())
    jobs.get_job(JOB_NAME)

    assert dlp_client.create_dlp_job.call_args.kwargs["retry"] is None
    assert dlp_client.get_dlp_job.call_args.kwargs["retry"] is None
