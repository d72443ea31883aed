"""Create-or-append file writing for rendered generator outputs."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from .errors import OutputError
from .registry import OutputInstruction
from .renderer import TemplateRenderer

APPEND_SEPARATOR = "\n"


class WriteMode(str, Enum):
    CREATED = "created"
    APPENDED = "appended"


@dataclass(frozen=True)
class WriteResult:
    path: Path
    mode: WriteMode

    def describe(self) -> str:
        if self.mode is WriteMode.APPENDED:
            return f"Appended to {self.path}"
        return f"Created {self.path}"


def write_output(path: str | Path, content: str, *, append: bool = False) -> WriteResult:
    """Write *content* to *path*.

    In append mode an existing file gets a newline and then *content*; a
    missing file is created exactly as in create mode.  Create mode makes
    parent directories and overwrites whatever is there.

    Raises:
        OutputError: The file could not be written.
    """
    out = Path(path)
    try:
        data = content.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise OutputError(f"Cannot write {out}: content is not valid UTF-8 ({exc.reason})") from exc

    try:
        if append and out.exists():
            with out.open("ab") as fh:
                fh.write(APPEND_SEPARATOR.encode("utf-8") + data)
            return WriteResult(out, WriteMode.APPENDED)

        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(data)
    except (OSError, ValueError) as exc:
        raise OutputError(f"Cannot write {out}: {exc}") from exc
    return WriteResult(out, WriteMode.CREATED)


def execute(
    outputs: list[OutputInstruction],
    renderer: TemplateRenderer,
    context: dict[str, Any],
    base_dir: str | Path = ".",
    on_write: Callable[[WriteResult], None] | None = None,
) -> list[WriteResult]:
    """Render and write each planned output in order.

    Target paths are rendered against *context* and anchored at *base_dir*
    when relative.  *on_write* is called after each successful write.  The
    first failure propagates and the remaining outputs are not written.
    """
    base = Path(base_dir)
    results: list[WriteResult] = []
    for output in outputs:
        target = base / renderer.render_string(output.target_path, context)
        content = renderer.render(output.template_id, context)
        result = write_output(target, content, append=output.append)
        results.append(result)
        if on_write is not None:
            on_write(result)
    return results
