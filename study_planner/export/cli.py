#!/usr/bin/env python3
"""
CLI interface for study plan export.

Provides command-line interface for exporting a saved AI study plan to Excel.
"""

import argparse
import logging
import sys
from pathlib import Path

from study_planner.export.data_models import ExportStatus
from study_planner.export.filenames import parse_created_at
from study_planner.export.plan_exporter import PlanExporter

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_TABLE = 2
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Export the Markdown table in an AI study plan to an Excel workbook",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Export a saved plan (writes exports/plan.xlsx)
  study-plan-export plan.md

  # Custom filename and output directory
  study-plan-export plan.md --filename My_Study_Plan --output-dir downloads/

  # Name the file after the plan's creation date
  study-plan-export plan.md --created-at 2024-12-19

  # Read the plan from stdin
  cat plan.md | study-plan-export - --filename My_Study_Plan
        """
    )

    parser.add_argument(
        "plan_file",
        nargs="?",
        default="-",
        help="Path to plan text file ('-' or omitted reads stdin)"
    )

    parser.add_argument(
        "--filename",
        help="Base filename without extension (default: plan file name, or StudyPlan for stdin)"
    )

    parser.add_argument(
        "--created-at",
        help="Plan creation date (ISO 8601); names the file StudyPlan_<date> when --filename is omitted"
    )

    parser.add_argument(
        "--output-dir",
        help="Output directory (default: EXPORT_OUTPUT_DIR or exports/)"
    )

    parser.add_argument(
        "--sheet-name",
        help="Worksheet title (default: Study Plan)"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    read_stdin = args.plan_file == "-"
    plan_path = Path(args.plan_file)

    if not read_stdin and not plan_path.exists():
        print(f"❌ Error: Plan file not found: {plan_path}")
        sys.exit(EXIT_ERROR)

    created_at = None
    if args.created_at:
        try:
            created_at = parse_created_at(args.created_at)
        except ValueError:
            print(f"❌ Error: Invalid --created-at date: {args.created_at}")
            sys.exit(EXIT_ERROR)

    try:
        exporter = PlanExporter(
            output_dir=args.output_dir,
            sheet_name=args.sheet_name
        )

        if read_stdin:
            result = exporter.export_text_to_file(sys.stdin.read(), args.filename, created_at)
        else:
            result = exporter.export_file(plan_path, args.filename, created_at)

    except KeyboardInterrupt:
        print("\n\n⚠️  Export cancelled by user")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as e:
        print(f"\n❌ Error: {e}")
        sys.exit(EXIT_ERROR)

    if result.status is ExportStatus.EMPTY:
        print(f"⚠️  {result.user_message}")
        sys.exit(EXIT_NO_TABLE)

    if result.status is ExportStatus.FAILURE:
        print(f"❌ {result.user_message}: {result.error_details}")
        sys.exit(EXIT_ERROR)

    print(f"✅ {result.user_message}")
    print(f"Wrote: {result.path}")
    sys.exit(EXIT_OK)


if __name__ == "__main__":
    main()
