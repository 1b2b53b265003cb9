from unittest import mock

import pytest

from dlp_risk import run
from dlp_risk.request import Notification, SourceTable

COMMON = ["--project", "calling-project", "--source_table", "census.adults",
          "--topic", "dlp-topic", "--subscription", "dlp-sub"]


def test_comma_separated():
    assert run.comma_separated(" age, zip ,gender") == ["age", "zip", "gender"]


def test_k_map_arguments(monkeypatch):
    k_map = mock.Mock()
    monkeypatch.setattr(run.analysis, "k_map", k_map)
    args = run.parse_arguments(COMMON + [
        "k_map", "--quasi_ids", "age,gender", "--info_types", "AGE,GENDER",
        "--region_code", "US"])

    run.run(args)

    k_map.assert_called_once_with(
        calling_project="calling-project",
        table=SourceTable("calling-project", "census", "adults"),
        notification=Notification("calling-project", "dlp-topic", "dlp-sub"),
        quasi_ids=["age", "gender"],
        info_types=["AGE", "GENDER"],
        region_code="US",
        timeout=run.DEFAULT_TIMEOUT,
    )


def test_k_anonymity_arguments(monkeypatch):
    k_anonymity = mock.Mock()
    monkeypatch.setattr(run.analysis, "k_anonymity", k_anonymity)
    args = run.parse_arguments(COMMON + [
        "--timeout", "30", "k_anonymity", "--quasi_ids", "age"])

    run.run(args)

    assert k_anonymity.call_args.kwargs["quasi_ids"] == ["age"]
    assert k_anonymity.call_args.kwargs["timeout"] == 30.0


def test_l_diversity_arguments(monkeypatch):
    l_diversity = mock.Mock()
    monkeypatch.setattr(run.analysis, "l_diversity", l_diversity)
    args = run.parse_arguments(COMMON + [
        "l_diversity", "--quasi_ids", "age", "--sensitive_attribute", "dx"])

    run.run(args)

    assert l_diversity.call_args.kwargs["sensitive_attribute"] == "dx"


def test_metric_is_required():
    with pytest.raises(SystemExit):
        run.parse_arguments(COMMON)
