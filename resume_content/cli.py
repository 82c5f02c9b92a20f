#!/usr/bin/env python3
"""
Command line entry point for the resume content pipeline.

Usage:
    resume-content process [--content-dir DIR] [--output-dir DIR] [--language en]
    resume-content validate [--language pt]
    resume-content search TERM [--language en]
    resume-content metrics [--language en]
"""

import argparse
import json
import sys
from typing import List, Optional

from resume_content.config.settings import Settings, get_settings
from resume_content.models.results import DatasetResult
from resume_content.services.data_service import DataService
from resume_content.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", help="JSON settings file (environment variables apply otherwise)")
    common.add_argument("--content-dir", help="Directory holding resume-<lang>.md and projects Markdown")
    common.add_argument(
        "--language",
        action="append",
        dest="languages",
        help="Language to process; repeat for several (default: every configured language)"
    )
    common.add_argument("--log-level", help="Override the configured log level")

    parser = argparse.ArgumentParser(prog="resume-content", description="Bilingual resume content pipeline")
    subparsers = parser.add_subparsers(dest="command", required=True)

    process = subparsers.add_parser("process", parents=[common], help="Convert Markdown content into JSON")
    process.add_argument("--output-dir", help="Where resume-<lang>.json and projects-<lang>.json are written")

    subparsers.add_parser("validate", parents=[common], help="Report validation errors and consistency warnings")

    search = subparsers.add_parser("search", parents=[common], help="Search experience, skills and projects")
    search.add_argument("term", help="Search term")

    subparsers.add_parser("metrics", parents=[common], help="Print dashboard metrics as JSON")
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    settings = get_settings(args.config)
    overrides = {}
    if args.content_dir:
        overrides["content_dir"] = args.content_dir
    if getattr(args, "output_dir", None):
        overrides["output_dir"] = args.output_dir
    if args.log_level:
        overrides["log_level"] = args.log_level
    if overrides:
        settings = Settings(**{**settings.model_dump(), **overrides})
    return settings


def print_dataset_report(dataset: DatasetResult) -> None:
    print(f"\n🌐 Language: {dataset.language}")
    for label, result in (("Resume", dataset.resume), ("Projects", dataset.projects)):
        if result.success:
            print(f"   ✅ {label} valid")
        else:
            print(f"   ❌ {label}: {len(result.errors)} error(s)")
            for error in result.errors:
                print(f"      - {error}")
    for warning in dataset.consistency_warnings:
        print(f"   ⚠️  {warning}")


def run_process(service: DataService, languages: List[str]) -> int:
    failures = 0
    for language in languages:
        dataset = service.load_dataset(language)
        print_dataset_report(dataset)
        written = service.export_json(language)
        for path in written.values():
            print(f"   💾 {path}")
        if not dataset.success:
            failures += 1

    print("\n" + "=" * 70)
    print("✅ Processing complete!" if not failures else f"❌ {failures} language(s) failed")
    return 1 if failures else 0


def run_validate(service: DataService, languages: List[str]) -> int:
    failures = 0
    for language in languages:
        dataset = service.load_dataset(language)
        print_dataset_report(dataset)
        if not dataset.success:
            failures += 1
    return 1 if failures else 0


def run_search(service: DataService, languages: List[str], term: str) -> int:
    total = 0
    for language in languages:
        results = service.search(term, language)
        total += results.total_results
        print(f"\n🔍 '{term}' ({language}): {results.total_results} result(s)")
        for hit in results.experience:
            print(f"   [{hit.score:5.1f}] 💼 {hit.item.position} at {hit.item.company}")
        for hit in results.skills:
            print(f"   [{hit.score:5.1f}] 🛠️  {hit.item.name} ({hit.item.category})")
        for hit in results.projects:
            print(f"   [{hit.score:5.1f}] 📁 {hit.item.title}")
    return 0 if total else 1


def run_metrics(service: DataService, languages: List[str]) -> int:
    failures = 0
    for language in languages:
        summary = service.metrics(language)
        if summary is None:
            print(f"❌ Metrics unavailable for '{language}'")
            failures += 1
            continue
        print(json.dumps({language: summary.to_json_dict()}, indent=2, ensure_ascii=False))
    return 1 if failures else 0


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args)
        setup_logging(level=settings.log_level, log_file=settings.log_file)
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    service = DataService(settings)
    languages = args.languages or settings.languages

    if args.command == "process":
        return run_process(service, languages)
    if args.command == "validate":
        return run_validate(service, languages)
    if args.command == "search":
        return run_search(service, languages, args.term)
    return run_metrics(service, languages)


if __name__ == "__main__":
    sys.exit(main())
