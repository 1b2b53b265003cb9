"""Shared fixtures for the risk analysis tests."""

from unittest import mock

import pytest
from google.cloud import dlp_v2
from google.cloud.pubsub_v1 import types

from dlp_risk.request import Notification, SourceTable

SUBSCRIPTION_PATH = "projects/calling-project/subscriptions/dlp-sub"
JOB_NAME = "projects/calling-project/dlpJobs/r-1234"


def received(ack_id, job_name=None):
    """Builds a pulled message, optionally carrying a job name."""
    attributes = {} if job_name is None else {"DlpJobName": job_name}
    return types.ReceivedMessage(
        ack_id=ack_id,
        message=types.PubsubMessage(attributes=attributes, message_id=ack_id))


def pull_response(*messages):
    return types.PullResponse(received_messages=list(messages))


@pytest.fixture
def table():
    return SourceTable("data-project", "census", "adults")


@pytest.fixture
def notification():
    return Notification("calling-project", "dlp-topic", "dlp-sub")


@pytest.fixture
def subscriber():
    client = mock.Mock()
    client.subscription_path.return_value = SUBSCRIPTION_PATH
    return client


@pytest.fixture
def dlp_client():
    client = mock.Mock()
    client.create_dlp_job.return_value = dlp_v2.DlpJob(
        name=JOB_NAME, state=dlp_v2.DlpJob.JobState.PENDING)
    return client


def acked_ids(subscriber):
    """Returns every ack id sent to the subscriber, in order."""
    ids = []
    for call in subscriber.acknowledge.call_args_list:
        ids.extend(call.kwargs["request"]["ack_ids"])
    return ids
