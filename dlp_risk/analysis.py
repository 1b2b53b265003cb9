# Copyright 2023 Google LLC. This software is provided as-is, without warranty
# or representation for any use or purpose. Your use of it is subject to your
# agreement with Google.
"""Runs a risk analysis job end to end and prints its results."""

import threading
from typing import Callable, List, Optional

from google.cloud import dlp_v2, pubsub_v1

from dlp_risk import report, request
from dlp_risk.notification import DEFAULT_TIMEOUT, CompletionWaiter
from dlp_risk.request import Notification, SourceTable
from dlp_risk.submission import RiskJobClient


def run_risk_job(
    calling_project: str,
    risk_job: dlp_v2.RiskAnalysisJobConfig,
    notification: Notification,
    render: Callable[[dlp_v2.DlpJob], List[str]],
    dlp_client: dlp_v2.DlpServiceClient = None,
    subscriber: pubsub_v1.SubscriberClient = None,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
    cancel_event: Optional[threading.Event] = None,
) -> dlp_v2.DlpJob:
    """Submits a job, waits for its notification and prints its results.

    Args:
        calling_project: The project ID to run the API calls under.
        risk_job: The job configuration to submit.
        notification: The topic and subscription the job publishes to.
        render: Converts the finished job into report lines.
        dlp_client: The DLP client to use. Optional.
        subscriber: The Pub/Sub subscriber client to use. Optional.
        timeout: Seconds to wait for the notification. None waits forever.
        cancel_event: Set from another thread to stop waiting. Optional.

    Returns:
        The job as fetched after its completion notification.
    """
    jobs = RiskJobClient(calling_project, dlp_client=dlp_client)
    waiter = CompletionWaiter(notification, subscriber=subscriber)

    job = jobs.create_job(risk_job)
    waiter.wait(job.name, timeout=timeout, cancel_event=cancel_event)

    job = jobs.get_job(job.name)
    report.print_report(job, render(job))
    return job


def k_anonymity(
    calling_project: str,
    table: SourceTable,
    notification: Notification,
    quasi_ids: List[str],
    **kwargs,
) -> dlp_v2.DlpJob:
    """Computes the k-anonymity of a column set in a BigQuery table.

    Args:
        calling_project: The project ID to run the API calls under.
        table: The BigQuery table to analyze.
        notification: The topic and subscription to use for completion.
        quasi_ids: Columns that form a composite key.
        **kwargs: Clients, timeout and cancel_event for run_risk_job.
    """
    risk_job = request.k_anonymity_config(table, quasi_ids, notification)
    return run_risk_job(calling_project, risk_job, notification,
                        report.k_anonymity_lines, **kwargs)


def k_map(
    calling_project: str,
    table: SourceTable,
    notification: Notification,
    quasi_ids: List[str],
    info_types: List[str],
    region_code: str,
    **kwargs,
) -> dlp_v2.DlpJob:
    """Computes the k-map risk estimation of a column set in a BigQuery table.

    Args:
        calling_project: The project ID to run the API calls under.
        table: The BigQuery table to analyze.
        notification: The topic and subscription to use for completion.
        quasi_ids: Columns that form a composite key.
        info_types: The infoTypes of the quasi-identifiers, in the same order.
        region_code: The ISO 3166-1 region code the data represents.
        **kwargs: Clients, timeout and cancel_event for run_risk_job.
    """
    risk_job = request.k_map_config(
        table, quasi_ids, info_types, region_code, notification)
    return run_risk_job(calling_project, risk_job, notification,
                        report.k_map_lines, **kwargs)


def l_diversity(
    calling_project: str,
    table: SourceTable,
    notification: Notification,
    quasi_ids: List[str],
    sensitive_attribute: str,
    **kwargs,
) -> dlp_v2.DlpJob:
    """Computes the l-diversity of a column set against a sensitive column."""
    risk_job = request.l_diversity_config(
        table, quasi_ids, sensitive_attribute, notification)
    return run_risk_job(calling_project, risk_job, notification,
                        report.l_diversity_lines, **kwargs)
