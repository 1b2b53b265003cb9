# Copyright 2023 Google LLC. This software is provided as-is, without warranty
# or representation for any use or purpose. Your use of it is subject to your
# agreement with Google.
"""Builds the DLP risk analysis job configurations."""

import dataclasses
from typing import List, Optional

from google.cloud import bigquery, dlp_v2

from dlp_risk.errors import InvalidArgumentError


@dataclasses.dataclass(frozen=True)
class SourceTable:
    """Represents the BigQuery table to be analyzed."""
    project_id: str
    dataset_id: str
    table_id: str

    @classmethod
    def from_string(cls, table: str,
                    default_project: Optional[str] = None) -> "SourceTable":
        """Parses a table reference such as 'project.dataset.table'.

        Args:
            table (str): The standard SQL table reference.
            default_project (str): The project to use when the reference
                omits it. Optional.

        Returns:
            The parsed source table.
        """
        try:
            reference = bigquery.TableReference.from_string(
                table, default_project=default_project)
        except ValueError as exc:
            raise InvalidArgumentError(
                f"Invalid BigQuery table reference: {table}") from exc
        return cls(reference.project, reference.dataset_id,
                   reference.table_id)

    def to_dlp(self) -> dlp_v2.BigQueryTable:
        """Returns the table in the format expected by DLP."""
        return dlp_v2.BigQueryTable(
            project_id=self.project_id,
            dataset_id=self.dataset_id,
            table_id=self.table_id,
        )


@dataclasses.dataclass(frozen=True)
class Notification:
    """Represents the Pub/Sub topic and subscription used for completion."""
    project_id: str
    topic_id: str
    subscription_id: str

    @property
    def topic_path(self) -> str:
        """The fully qualified topic name."""
        return f"projects/{self.project_id}/topics/{self.topic_id}"


def _field_ids(names: List[str]) -> List[dlp_v2.FieldId]:
    if not names:
        raise InvalidArgumentError(
            "At least one quasi-identifier must be provided.")
    return [dlp_v2.FieldId(name=name) for name in names]


def _risk_job(privacy_metric: dlp_v2.PrivacyMetric, table: SourceTable,
              notification: Notification) -> dlp_v2.RiskAnalysisJobConfig:
    """Wraps a privacy metric into a job that publishes on completion."""
    action = dlp_v2.Action(
        pub_sub=dlp_v2.Action.PublishToPubSub(
            topic=notification.topic_path))
    return dlp_v2.RiskAnalysisJobConfig(
        privacy_metric=privacy_metric,
        source_table=table.to_dlp(),
        actions=[action],
    )


def k_anonymity_config(
    table: SourceTable,
    quasi_ids: List[str],
    notification: Notification,
) -> dlp_v2.RiskAnalysisJobConfig:
    """Builds a k-anonymity job over a set of quasi-identifier columns.

    Args:
        table (SourceTable): The BigQuery table to analyze.
        quasi_ids (List[str]): Columns that form the composite key.
        notification (Notification): Where to publish once the job is done.

    Returns:
        The risk analysis job configuration.
    """
    metric = dlp_v2.PrivacyMetric(
        k_anonymity_config=dlp_v2.PrivacyMetric.KAnonymityConfig(
            quasi_ids=_field_ids(quasi_ids)))
    return _risk_job(metric, table, notification)


def k_map_config(
    table: SourceTable,
    quasi_ids: List[str],
    info_types: List[str],
    region_code: str,
    notification: Notification,
) -> dlp_v2.RiskAnalysisJobConfig:
    """Builds a k-map estimation job.

    Each quasi-identifier is tagged with the infoType at the same position,
    so both lists must have the same length.

    Args:
        table (SourceTable): The BigQuery table to analyze.
        quasi_ids (List[str]): Columns that form the composite key.
        info_types (List[str]): The infoTypes of the quasi-identifiers,
            e.g. ['AGE', 'GENDER'].
        region_code (str): The ISO 3166-1 region code the data is
            representative of, e.g. 'US'.
        notification (Notification): Where to publish once the job is done.

    Returns:
        The risk analysis job configuration.
    """
    if len(info_types) != len(quasi_ids):
        raise InvalidArgumentError(
            "Number of infoTypes and number of quasi-identifiers "
            f"must be equal ({len(info_types)} != {len(quasi_ids)}).")

    tagged_fields = [
        dlp_v2.PrivacyMetric.KMapEstimationConfig.TaggedField(
            field=field, info_type=dlp_v2.InfoType(name=info_type))
        for field, info_type in zip(_field_ids(quasi_ids), info_types)
    ]
    metric = dlp_v2.PrivacyMetric(
        k_map_estimation_config=dlp_v2.PrivacyMetric.KMapEstimationConfig(
            quasi_ids=tagged_fields, region_code=region_code))
    return _risk_job(metric, table, notification)


def l_diversity_config(
    table: SourceTable,
    quasi_ids: List[str],
    sensitive_attribute: str,
    notification: Notification,
) -> dlp_v2.RiskAnalysisJobConfig:
    """Builds an l-diversity job for a sensitive column."""
    if not sensitive_attribute:
        raise InvalidArgumentError("A sensitive attribute must be provided.")
    metric = dlp_v2.PrivacyMetric(
        l_diversity_config=dlp_v2.PrivacyMetric.LDiversityConfig(
            quasi_ids=_field_ids(quasi_ids),
            sensitive_attribute=dlp_v2.FieldId(name=sensitive_attribute)))
    return _risk_job(metric, table, notification)
