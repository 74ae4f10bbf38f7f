#!/usr/bin/env python3
"""
Script to generate a Go project from a YAML or JSON specification file.
Usage: python scripts/generate_project.py SPEC_FILE [--output-root DIR] [--template-service URL] [--no-compile]
"""
import sys
import argparse
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from gofactory.core.config import Settings
from gofactory.core.errors import ValidationError
from gofactory.core.loader import load_project_spec
from gofactory.core.logging import configure_logging
from gofactory.core.pipeline import GenerationPipeline


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a Go project from a specification file")
    parser.add_argument("spec_file", help="Path to the project specification (.yaml, .yml or .json)")
    parser.add_argument("--output-root", help="Directory relative output paths are resolved against")
    parser.add_argument("--template-service", help="Base URL of a remote template service")
    parser.add_argument("--no-compile", action="store_true", help="Skip the go build step")
    args = parser.parse_args()

    overrides = {}
    if args.output_root:
        overrides["output_root"] = args.output_root
    if args.template_service:
        overrides["template_service_url"] = args.template_service
    if args.no_compile:
        overrides["compile_code"] = False
    settings = Settings(**overrides)
    configure_logging(settings.log_level)

    spec = load_project_spec(args.spec_file)
    try:
        result = GenerationPipeline(settings).run(spec)
    except ValidationError as e:
        print(f"Invalid specification: {e}")
        return 1

    if not result.success:
        print(f"Generation failed: {result.error_message}")
        return 1

    report = result.build_report
    print(f"Generated {len(result.accumulator.files)} files under {report.output_root}")
    for path in report.files_written:
        print(f"  {path}")
    for warning in result.warnings:
        print(f"WARNING: {warning}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
