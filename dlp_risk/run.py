# Copyright 2023 Google LLC. This software is provided as-is, without warranty
# or representation for any use or purpose. Your use of it is subject to your
# agreement with Google.
"""Runs a DLP risk analysis job on a BigQuery table and prints the results."""

import argparse
import logging
from typing import List, Type

from dlp_risk import analysis
from dlp_risk.notification import DEFAULT_TIMEOUT
from dlp_risk.request import Notification, SourceTable


def comma_separated(value: str) -> List[str]:
    """Splits a comma separated argument into a list of names."""
    items = [item.strip() for item in value.split(",") if item.strip()]
    if not items:
        raise argparse.ArgumentTypeError(f"Expected a list of names: {value}")
    return items


def parse_arguments(argv: List[str] = None) -> Type[argparse.Namespace]:
    """Parses command line arguments."""
    parser = argparse.ArgumentParser()
    subparsers = parser.add_subparsers(dest="metric", required=True)

    k_anonymity_parser = subparsers.add_parser(
        "k_anonymity",
        help="Compute the k-anonymity of the quasi-identifiers."
    )
    k_anonymity_parser.add_argument(
        "--quasi_ids",
        required=True,
        type=comma_separated,
        help="Comma separated columns that form a composite key.",
    )

    k_map_parser = subparsers.add_parser(
        "k_map",
        help="Estimate the k-map risk of the quasi-identifiers.",
    )
    k_map_parser.add_argument(
        "--quasi_ids",
        required=True,
        type=comma_separated,
        help="Comma separated columns that form a composite key.",
    )
    k_map_parser.add_argument(
        "--info_types",
        required=True,
        type=comma_separated,
        help="Comma separated infoTypes of the quasi-identifiers, "
             "e.g. 'AGE,GENDER'.",
    )
    k_map_parser.add_argument(
        "--region_code",
        required=True,
        type=str,
        help="The ISO 3166-1 region code the data represents, e.g. 'US'.",
    )

    l_diversity_parser = subparsers.add_parser(
        "l_diversity",
        help="Compute the l-diversity of a sensitive column.",
    )
    l_diversity_parser.add_argument(
        "--quasi_ids",
        required=True,
        type=comma_separated,
        help="Comma separated columns that form a composite key.",
    )
    l_diversity_parser.add_argument(
        "--sensitive_attribute",
        required=True,
        type=str,
        help="The column whose values must be diverse.",
    )

    # Common arguments.
    parser.add_argument(
        "--project",
        type=str,
        required=True,
        help="The Google Cloud project to run the API calls under.",
    )
    parser.add_argument(
        "--source_table",
        type=str,
        required=True,
        help="The BigQuery table to be analyzed, e.g. 'project.dataset.table'."
             " The project defaults to --project.",
    )
    parser.add_argument(
        "--topic",
        type=str,
        required=True,
        help="The Pub/Sub topic to notify once the job completes.",
    )
    parser.add_argument(
        "--subscription",
        type=str,
        required=True,
        help="The Pub/Sub subscription to listen on for the notification.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Seconds to wait for the job to finish.",
    )

    return parser.parse_args(argv)


def run(args: Type[argparse.Namespace]):
    """Runs the selected risk analysis.

    Args:
        metric (str): The risk metric to compute, e.g. k_anonymity.
        project (str): The project to run the API calls under.
        source_table (str): The BigQuery table to be analyzed.
        topic (str): The Pub/Sub topic to notify on completion.
        subscription (str): The Pub/Sub subscription to listen on.
        timeout (float): Seconds to wait for the job to finish.
        quasi_ids (List[str]): The quasi-identifier columns.
        info_types (List[str]): The quasi-identifier infoTypes. k_map only.
        region_code (str): The region the data represents. k_map only.
        sensitive_attribute (str): The sensitive column. l_diversity only.
    """
    table = SourceTable.from_string(args.source_table,
                                    default_project=args.project)
    notification = Notification(args.project, args.topic, args.subscription)
    common_args = {
        "calling_project": args.project,
        "table": table,
        "notification": notification,
        "quasi_ids": args.quasi_ids,
        "timeout": args.timeout,
    }

    if args.metric == "k_anonymity":
        return analysis.k_anonymity(**common_args)
    if args.metric == "k_map":
        return analysis.k_map(info_types=args.info_types,
                              region_code=args.region_code, **common_args)
    if args.metric == "l_diversity":
        return analysis.l_diversity(
            sensitive_attribute=args.sensitive_attribute, **common_args)
    raise ValueError("Unsupported metric: " + args.metric)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    arguments = parse_arguments()
    run(arguments)
