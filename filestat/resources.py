from __future__ import annotations

from pathlib import Path


def _package_dir(package_name: str) -> Path:
    """
    Return the on-disk directory for an imported package.

    Note:
    This assumes the package is installed in a filesystem-backed environment
    (typical for pip/wheel installs and editable installs).
    """
    module = __import__(package_name, fromlist=["__file__"])
    p = getattr(module, "__file__", None)
    if not isinstance(p, str) or not p:
        raise RuntimeError(f"Cannot resolve package directory for: {package_name}")
    return Path(p).resolve().parent


def contracts_dir() -> Path:
    """
    Directory that contains shipped JSON Schemas.
    """
    return _package_dir("filestat") / "contracts"


def config_schema_path() -> Path:
    return contracts_dir() / "config.schema.json"


def config_example_path() -> Path:
    return contracts_dir() / "config.example.yml"


def trace_event_schema_path() -> Path:
    return contracts_dir() / "trace_event.schema.json"


def trace_sample_path() -> Path:
    return contracts_dir() / "trace.sample.jsonl"
