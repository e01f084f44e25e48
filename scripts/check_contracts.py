from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, List, Tuple

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import jsonschema  # noqa: E402
import yaml  # noqa: E402

from filestat.resources import (  # noqa: E402
    config_example_path,
    config_schema_path,
    trace_event_schema_path,
    trace_sample_path,
)


def _load_schema(path: Path) -> dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))


def check_schemas() -> List[Tuple[str, str]]:
    """
    Returns a list of (schema_name, error_message) for invalid schemas.
    """
    errors: List[Tuple[str, str]] = []
    for p in (config_schema_path(), trace_event_schema_path()):
        try:
            jsonschema.Draft202012Validator.check_schema(_load_schema(p))
        except Exception as e:  # noqa: BLE001
            errors.append((p.name, repr(e)))
    return errors


def validate_config_example() -> List[str]:
    validator = jsonschema.Draft202012Validator(_load_schema(config_schema_path()))
    instance = yaml.safe_load(config_example_path().read_text(encoding="utf-8"))
    return [e.message for e in sorted(validator.iter_errors(instance), key=str)]


def validate_trace_sample() -> List[str]:
    validator = jsonschema.Draft202012Validator(_load_schema(trace_event_schema_path()))
    errors: List[str] = []
    with trace_sample_path().open("r", encoding="utf-8") as f:
        for i, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                obj = json.loads(line)
            except Exception as e:  # noqa: BLE001
                errors.append("line {}: invalid json: {}".format(i, repr(e)))
                continue
            for err in sorted(validator.iter_errors(obj), key=str):
                errors.append("line {}: {}".format(i, err.message))
    return errors


def main() -> int:
    schema_errors = check_schemas()
    if schema_errors:
        print("Schema validation failed:")
        for name, err in schema_errors:
            print("- {}: {}".format(name, err))
        return 1

    failures = [
        (config_example_path().name, validate_config_example()),
        (trace_sample_path().name, validate_trace_sample()),
    ]

    ok = True
    for name, errs in failures:
        if errs:
            ok = False
            print("Example {} failed validation:".format(name))
            for e in errs:
                print("  - {}".format(e))

    if not ok:
        return 1

    print("Contracts OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
