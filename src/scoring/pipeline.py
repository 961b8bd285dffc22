"""
Orchestrates the fetch → score → classify → submit assessment run.

This module is the single entry point for an assessment.  Each run is
independent: records are fetched fresh, scored, reduced to three alert
lists, and (optionally) submitted once.  Nothing is cached between runs.

Usage (from project root):
    python -m src.scoring.pipeline              # process and submit
    python -m src.scoring.pipeline --dry-run    # process only, print lists
    python -m src.scoring.pipeline --patients   # fetch only
    python -m src.scoring.pipeline --submit FILE  # post a hand-built submission

Or programmatically:
    from config.api_config import load_api_settings
    from src.scoring.pipeline import process_and_submit
    response = process_and_submit(load_api_settings())
"""

from __future__ import annotations

import argparse
import json
from typing import Callable

from config.api_config import ApiSettings, load_api_settings

from src.api_client.batch import fetch_all_patients
from src.api_client.executor import execute_submission
from src.api_client.parser import summarize_assessment_response, validate_submission
from src.api_client.reporting import DEFAULT_REPORTER

from .alerts import (
    build_alert_lists,
    build_score_table,
    score_patients,
    summarize_scores,
)


def process_records(
    settings: ApiSettings,
    fetch_patients: Callable[..., list[dict]] = fetch_all_patients,
    reporter=DEFAULT_REPORTER,
) -> dict[str, list]:
    """
    Fetch every patient and build the three alert lists.

    Args:
        settings: Connection and retry settings.
        fetch_patients: Fetcher called as ``fetch_patients(settings,
                        reporter=reporter)``.
        reporter: Progress reporter.

    Returns:
        Dict with ``high_risk_patients``, ``fever_patients`` and
        ``data_quality_issues``, each sorted ascending.  All three are empty
        when the source has no records.

    Raises:
        requests.RequestException: Fatal fetch failure, unchanged.
    """
    reporter.info("Processing patients...")

    patients = fetch_patients(settings, reporter=reporter)
    scores = score_patients(patients)
    alert_lists = build_alert_lists(scores)

    summary = summarize_scores(build_score_table(scores))
    reporter.info(f"  Found {len(alert_lists['high_risk_patients'])} high-risk patients")
    reporter.info(f"  Found {len(alert_lists['fever_patients'])} fever patients")
    reporter.info(f"  Found {len(alert_lists['data_quality_issues'])} data quality issues")
    reporter.info(f"  Mean total risk score: {summary['mean_total_score']:.2f}")

    return alert_lists


def submit_assessment(
    settings: ApiSettings,
    alert_lists: dict[str, list],
    post_submission: Callable[[ApiSettings, dict], dict] = execute_submission,
    reporter=DEFAULT_REPORTER,
) -> dict:
    """
    Submit alert lists once and return the server response unmodified.

    Submissions are graded per attempt, so a failure is reported and
    re-raised, never retried.

    Args:
        settings: Connection settings.
        alert_lists: Output of :func:`process_records`.
        post_submission: Single-request submission transport.
        reporter: Progress reporter.

    Returns:
        The decoded response body, verbatim.

    Raises:
        Exception: Whatever the transport raised, unchanged.
    """
    reporter.info("Submitting assessment...")
    reporter.info(f"  High-risk:    {len(alert_lists['high_risk_patients'])}")
    reporter.info(f"  Fever:        {len(alert_lists['fever_patients'])}")
    reporter.info(f"  Data quality: {len(alert_lists['data_quality_issues'])}")

    try:
        response = post_submission(settings, alert_lists)
    except Exception as exc:
        reporter.error(f"Failed to submit assessment: {exc}")
        http_response = getattr(exc, "response", None)
        if http_response is not None:
            reporter.error(f"Response status: {http_response.status_code}")
            reporter.error(f"Response data: {http_response.text}")
        raise

    results = response.get("results") if isinstance(response, dict) else None
    score = (results or {}).get("score")
    reporter.info(f"Assessment submitted successfully. Score: {score}")
    return response


def process_and_submit(
    settings: ApiSettings,
    fetch_patients: Callable[..., list[dict]] = fetch_all_patients,
    post_submission: Callable[[ApiSettings, dict], dict] = execute_submission,
    reporter=DEFAULT_REPORTER,
) -> dict:
    """Run :func:`process_records` then :func:`submit_assessment`."""
    alert_lists = process_records(settings, fetch_patients=fetch_patients, reporter=reporter)
    return submit_assessment(
        settings, alert_lists, post_submission=post_submission, reporter=reporter
    )


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def load_submission_file(path: str) -> dict:
    """
    Read a hand-built submission from a JSON file.

    Raises:
        ValueError: If the file cannot be read, is not valid JSON, or does
                    not hold a JSON object.
    """
    try:
        with open(path, encoding="utf-8") as f:
            submission = json.load(f)
    except OSError as exc:
        raise ValueError(f"Cannot read submission file '{path}': {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"Submission file '{path}' is not valid JSON: {exc}") from exc

    if not isinstance(submission, dict):
        raise ValueError(f"Submission file '{path}' must contain a JSON object.")
    return submission


def _report_server_response(response: dict, reporter) -> None:
    sep = "=" * 60
    reporter.info(f"\n{sep}")
    reporter.info("SERVER RESPONSE")
    for line in summarize_assessment_response(response):
        reporter.info(f"  {line}")
    reporter.info(sep)


def main(argv: list[str] | None = None, reporter=DEFAULT_REPORTER) -> int:
    """
    Command-line runner.

    Returns:
        Process exit status: 0 on success, 1 on configuration or payload
        validation errors.  Transport errors propagate.
    """
    parser = argparse.ArgumentParser(
        prog="patient-risk-assessment",
        description="Fetch patients, compute risk alerts, and submit them.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--dry-run",
        action="store_true",
        help="build the alert lists and print them without submitting",
    )
    mode.add_argument(
        "--patients",
        action="store_true",
        help="fetch the patient records only",
    )
    mode.add_argument(
        "--submit",
        metavar="FILE",
        help="validate and post the alert lists stored in a JSON file",
    )
    args = parser.parse_args(argv)

    try:
        settings = load_api_settings()
    except ValueError as exc:
        reporter.error(str(exc))
        return 1

    if args.patients:
        patients = fetch_all_patients(settings, reporter=reporter)
        reporter.info(f"Got {len(patients)} patients")
        if patients:
            reporter.info(json.dumps(patients[0], indent=2))
        return 0

    if args.submit:
        try:
            alert_lists = load_submission_file(args.submit)
        except ValueError as exc:
            reporter.error(str(exc))
            return 1
    else:
        alert_lists = process_records(
            settings, fetch_patients=fetch_all_patients, reporter=reporter
        )
        if args.dry_run:
            reporter.info(json.dumps(alert_lists, indent=2))
            return 0

    problems = validate_submission(alert_lists)
    if problems:
        reporter.error("Submission rejected before posting: " + "; ".join(problems))
        return 1

    response = submit_assessment(
        settings, alert_lists, post_submission=execute_submission, reporter=reporter
    )
    _report_server_response(response, reporter)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
