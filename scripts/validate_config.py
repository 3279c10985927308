#!/usr/bin/env python3

"""
validate_config.py

Validate a qualification config file (YAML or JSON) against:
1) Structural JSON Schema
2) Cross-field governance rules

USAGE:
    python scripts/validate_config.py data/meddpicc/config.yml

EXIT CODES:
    0 - Validation successful
    1 - Validation failed
"""

import sys
from pathlib import Path

# scripts/ is one level below repo root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from utils.config_loader import load_raw_config, parse_qualification_config
from utils.exceptions import QualificationConfigError
from utils.logging_config import setup_logging
from utils.schema_validator import load_schema, validate_config_structure


def _print_errors(errors) -> None:
    for error in errors:
        print(f"  - {error}")


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 1:
        print("Usage: python validate_config.py <config-file>")
        return 1

    setup_logging(log_level="WARNING", file_output=False)
    config_path = Path(argv[0]).resolve()

    # ------------------------------------------------------------
    # Basic path validation
    # ------------------------------------------------------------
    if not config_path.is_file():
        print(f"❌ Config file not found: {config_path}")
        return 1

    try:
        data = load_raw_config(config_path)
        schema = load_schema()
    except QualificationConfigError as e:
        print("❌ Could not parse config file:")
        _print_errors(e.errors)
        return 1
    except (OSError, ValueError) as e:
        print("❌ Unexpected validation error:")
        print(str(e))
        return 1

    # ------------------------------------------------------------
    # 1. Structural schema validation
    # ------------------------------------------------------------
    errors = validate_config_structure(data, schema)
    if errors:
        print("❌ Schema validation failed:")
        _print_errors(errors)
        return 1

    # ------------------------------------------------------------
    # 2. Cross-field governance validation
    # ------------------------------------------------------------
    try:
        config = parse_qualification_config(data, schema)
    except QualificationConfigError as e:
        print("❌ Cross-field governance validation failed:")
        _print_errors(e.errors)
        return 1

    print(
        f"✅ {config_path.name}: configuration is valid and governance-compliant "
        f"({len(config.pillars)} pillars, {config.total_questions} questions, "
        f"max score {config.scoring.max_score})"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
