from .errors import ConfigError, FilestatError, ValidationError
from .options import DEFAULT_OUTPUT_FORMAT, Options, TimeKind, UnitMode
from .reporter import FileReport, RunResult, StatReporter

__all__ = [
  "ConfigError",
  "FilestatError",
  "ValidationError",
  "DEFAULT_OUTPUT_FORMAT",
  "Options",
  "TimeKind",
  "UnitMode",
  "FileReport",
  "RunResult",
  "StatReporter",
]
