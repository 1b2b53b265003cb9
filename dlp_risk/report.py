# Copyright 2023 Google LLC. This software is provided as-is, without warranty
# or representation for any use or purpose. Your use of it is subject to your
# agreement with Google.
"""Formats the results of finished risk analysis jobs."""

from typing import Callable, Iterable, List

from google.cloud import dlp_v2
from google.type import dayofweek_pb2

UNKNOWN_STATE_MESSAGE = (
    "Unknown job state. Most likely, the job is either running or has not "
    "yet started.")


def _format_time(value) -> str:
    text = f"{value.hours:02d}:{value.minutes:02d}:{value.seconds:02d}"
    if value.nanos:
        text += f".{value.nanos:09d}"
    return text


# One formatter per member of the Value.type oneof.
_VALUE_FORMATTERS = {
    "integer_value": str,
    "float_value": str,
    "string_value": lambda value: value,
    "boolean_value": str,
    "timestamp_value": lambda value: value.ToJsonString(),
    "time_value": _format_time,
    "date_value": lambda value: (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"),
    "day_of_week_value": dayofweek_pb2.DayOfWeek.Name,
}


def format_value(value: dlp_v2.Value) -> str:
    """Converts a DLP value to a string based on the field that is set.

    Zero, False and empty strings are valid values and are rendered as such.
    A value with no field set is rendered as 'null'.
    """
    value_pb = dlp_v2.Value.pb(value)
    kind = value_pb.WhichOneof("type")
    if kind is None:
        return "null"
    if kind not in _VALUE_FORMATTERS:
        raise ValueError(f"Unsupported value type: {kind}")
    return _VALUE_FORMATTERS[kind](getattr(value_pb, kind))


def format_values(values: Iterable[dlp_v2.Value]) -> str:
    """Formats quasi-identifier values as '{a, b, c}'."""
    return "{" + ", ".join(format_value(value) for value in values) + "}"


def error_line(error: dlp_v2.Error) -> str:
    """Formats the status of an error, including its detail types."""
    line = f"  Error {error.details.code}: {error.details.message}"
    type_urls = [detail.type_url for detail in error.details.details]
    if type_urls:
        line += f" Details: [{', '.join(type_urls)}]"
    return line


def error_lines(job: dlp_v2.DlpJob) -> List[str]:
    """Returns one line per error of a failed job."""
    return [error_line(error) for error in job.errors]


def result_lines(
    job: dlp_v2.DlpJob,
    histogram: Callable[[dlp_v2.DlpJob], Iterable],
    bucket_header: Callable[[int, object], str],
    value_line: Callable[[object], str],
) -> List[str]:
    """Renders a job depending on its state.

    Args:
        job: The job, fetched after its completion notification.
        histogram: Extracts the histogram buckets from a finished job.
        bucket_header: Formats the header line of a bucket.
        value_line: Formats one value bucket.

    Returns:
        For a DONE job, a header line per bucket followed by a line per
        value bucket. For a FAILED job, a line per error. Otherwise a
        single informational line.
    """
    if job.state == dlp_v2.DlpJob.JobState.DONE:
        lines = []
        for index, bucket in enumerate(histogram(job)):
            lines.append(bucket_header(index, bucket))
            lines.extend(value_line(value) for value in bucket.bucket_values)
        return lines
    if job.state == dlp_v2.DlpJob.JobState.FAILED:
        return error_lines(job)
    return [UNKNOWN_STATE_MESSAGE]


def k_anonymity_lines(job: dlp_v2.DlpJob) -> List[str]:
    """Renders the equivalence class histogram of a k-anonymity job."""
    return result_lines(
        job,
        lambda done: (done.risk_details.k_anonymity_result
                      .equivalence_class_histogram_buckets),
        lambda index, bucket: (
            f"Bucket {index}: size range "
            f"[{bucket.equivalence_class_size_lower_bound}, "
            f"{bucket.equivalence_class_size_upper_bound}]"),
        lambda value: (
            f"  Quasi-ID values: {format_values(value.quasi_ids_values)} "
            f"Class size: {value.equivalence_class_size}"),
    )


def k_map_lines(job: dlp_v2.DlpJob) -> List[str]:
    """Renders the k-map estimation histogram of a k-map job."""
    return result_lines(
        job,
        lambda done: (done.risk_details.k_map_estimation_result
                      .k_map_estimation_histogram),
        lambda index, bucket: (
            f"Bucket {index}: anonymity range "
            f"[{bucket.min_anonymity}, {bucket.max_anonymity}] "
            f"Size: {bucket.bucket_size}"),
        lambda value: (
            f"  Values: {format_values(value.quasi_ids_values)} "
            f"Estimated k-map anonymity: {value.estimated_anonymity}"),
    )


def _l_diversity_value_line(value) -> str:
    top_values = ", ".join(
        f"{format_value(frequency.value)} ({frequency.count})"
        for frequency in value.top_sensitive_values)
    return (
        f"  Quasi-ID values: {format_values(value.quasi_ids_values)} "
        f"Class size: {value.equivalence_class_size} "
        f"Distinct sensitive values: {value.num_distinct_sensitive_values} "
        f"Top sensitive values: [{top_values}]")


def l_diversity_lines(job: dlp_v2.DlpJob) -> List[str]:
    """Renders the sensitive value frequency histogram of an l-diversity job."""
    return result_lines(
        job,
        lambda done: (done.risk_details.l_diversity_result
                      .sensitive_value_frequency_histogram_buckets),
        lambda index, bucket: (
            f"Bucket {index}: sensitive value frequency range "
            f"[{bucket.sensitive_value_frequency_lower_bound}, "
            f"{bucket.sensitive_value_frequency_upper_bound}]"),
        _l_diversity_value_line,
    )


def print_report(job: dlp_v2.DlpJob, lines: List[str]) -> None:
    """Prints the job status followed by its result lines."""
    print(f"Job {job.name} status: {job.state.name}")
    for line in lines:
        print(line)
