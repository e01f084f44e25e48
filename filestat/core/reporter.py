from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional, TextIO

from tools.fs.stat import run as fs_stat

from .formatting import format_timestamp
from .options import Options, TimeKind
from ..trace.trace_emitter import TraceEmitter

logger = logging.getLogger(__name__)

FIELD_DELIMITER = " ; "

StatTool = Callable[[dict[str, Any]], dict[str, Any]]


def describe_stat_error(exc: Exception) -> str:
    # strerror is the bare OS text ("No such file or directory"); str(exc) also
    # repeats the errno and filename. ValueError (embedded NUL) has no strerror.
    return getattr(exc, "strerror", None) or str(exc)


@dataclass(frozen=True)
class FileReport:
    """
    Outcome for one input path.

    `error` is set on a file-level failure. A `None` entry in `fields` marks a
    requested timestamp kind that could not be produced.
    """

    path: str
    error: Optional[str] = None
    fields: tuple[Optional[str], ...] = ()

    @property
    def errored(self) -> bool:
        return self.error is not None or any(f is None for f in self.fields)

    def render(self) -> str:
        if self.error is not None:
            return f"{self.path} {self.error}"
        return FIELD_DELIMITER.join([self.path] + [f if f is not None else "" for f in self.fields])


@dataclass(frozen=True)
class RunResult:
    any_errored: bool = False
    files: tuple[FileReport, ...] = field(default_factory=tuple)

    @classmethod
    def from_reports(cls, reports: Iterable[FileReport]) -> "RunResult":
        files = tuple(reports)
        return cls(any_errored=any(r.errored for r in files), files=files)


class StatReporter:
    """
    Prints the requested timestamps for each path, one line per path.

    Failures never abort the run: a path without metadata prints its OS error
    text, an unavailable timestamp kind leaves an empty field. Either marks the
    returned RunResult as errored.
    """

    def __init__(
        self,
        stat_tool: StatTool = fs_stat,
        out: TextIO | None = None,
        trace: TraceEmitter | None = None,
    ):
        self._stat = stat_tool
        self._out = out
        self._trace = trace

    def report(self, options: Options) -> RunResult:
        kinds = options.selected_kinds()
        self._emit(
            "run_started",
            data={
                "files": len(options.files),
                "unit_mode": options.unit_mode.value,
                "kinds": [k.value for k in kinds],
            },
        )

        reports: list[FileReport] = []
        for path in options.files:
            file_report = self._report_file(path, kinds, options)
            self._write(file_report.render())
            reports.append(file_report)
        result = RunResult.from_reports(reports)

        self._emit("run_finished", data={"any_errored": result.any_errored, "files": len(result.files)})
        return result

    def _report_file(self, path: str, kinds: list[TimeKind], options: Options) -> FileReport:
        logger.debug("stat %s", path)
        try:
            meta = self._stat({"path": path})
        except (OSError, ValueError) as e:
            msg = describe_stat_error(e)
            logger.debug("metadata unavailable for %s: %s", path, msg)
            self._emit("file_failed", path=path, message=msg)
            return FileReport(path=path, error=msg)

        fields: list[Optional[str]] = []
        for kind in kinds:
            fields.append(self._format_field(path, kind, meta.get(kind.value), options))

        self._emit("file_reported", path=path, data={"fields": fields})
        return FileReport(path=path, fields=tuple(fields))

    def _format_field(self, path: str, kind: TimeKind, ts: Any, options: Options) -> Optional[str]:
        if ts is None:
            logger.debug("%s time not available for %s", kind.value, path)
            self._emit("field_unavailable", path=path, data={"kind": kind.value})
            return None
        # In BOTH mode a failed human rendering empties the whole field; no
        # epoch-only value is printed.
        try:
            return format_timestamp(float(ts), options.unit_mode, options.output_format)
        except (OverflowError, OSError, ValueError) as e:
            logger.debug("cannot render %s time %r for %s: %s", kind.value, ts, path, e)
            self._emit("field_unavailable", path=path, data={"kind": kind.value, "error": repr(e)})
            return None

    def _write(self, line: str) -> None:
        out = self._out if self._out is not None else sys.stdout
        out.write(line + "\n")
        out.flush()

    def _emit(self, event_type: str, **kwargs: Any) -> None:
        if self._trace is not None:
            self._trace.emit(event_type, **kwargs)
