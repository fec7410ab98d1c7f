"""Text and JSON rendering of comparison results."""

from __future__ import annotations

import json

from pydantic import BaseModel

from dirhash.compare import DirectoryComparison, FileComparison


class Palette(BaseModel):
    """ANSI escape sequences used by the renderers.

    Passed explicitly into every render call; ``Palette.plain()`` renders
    without color.
    """

    same: str = "\033[32m"
    differ: str = "\033[31m"
    heading: str = "\033[36m"
    reset: str = "\033[0m"

    @classmethod
    def plain(cls) -> Palette:
        return cls(same="", differ="", heading="", reset="")

    def paint(self, color: str, text: str) -> str:
        if not color:
            return text
        return f"{color}{text}{self.reset}"


def render_file_comparison(result: FileComparison, palette: Palette) -> str:
    """Render a two-file comparison."""
    if result.identical:
        return "\n".join([
            palette.paint(palette.same, "Files are identical."),
            "",
            f"SHA-256: {result.first_digest}",
        ])

    return "\n".join([
        palette.paint(palette.differ, "Files differ."),
        "",
        f"File: {result.first}",
        palette.paint(palette.differ, f"  SHA-256: {result.first_digest}"),
        "",
        f"File: {result.second}",
        palette.paint(palette.differ, f"  SHA-256: {result.second_digest}"),
    ])


def _section(lines: list[str], title: str, paths: list[str], palette: Palette) -> None:
    if not paths:
        return
    lines.append("")
    lines.append(palette.paint(palette.heading, f"-> {title} ({len(paths)}):"))
    lines.extend(paths)


def render_directory_comparison(result: DirectoryComparison, palette: Palette) -> str:
    """Render file counts followed by the modified and one-sided paths."""
    lines = [
        f"{result.first} -> {result.first_count} files",
        f"{result.second} -> {result.second_count} files",
        "",
    ]

    if result.identical:
        lines.append(palette.paint(palette.same, "Paths are identical."))
        return "\n".join(lines)

    lines.append(palette.paint(palette.differ, "Paths differ."))
    _section(lines, "Files with different content", result.diff.modified, palette)
    _section(lines, f"Files only in '{result.first}'", result.diff.only_in_first, palette)
    _section(lines, f"Files only in '{result.second}'", result.diff.only_in_second, palette)
    return "\n".join(lines)


def render(result: FileComparison | DirectoryComparison, palette: Palette) -> str:
    if isinstance(result, DirectoryComparison):
        return render_directory_comparison(result, palette)
    return render_file_comparison(result, palette)


def to_json(result: FileComparison | DirectoryComparison) -> str:
    """Return a structured JSON report including the ``identical`` flag."""
    data = result.model_dump()
    data["kind"] = "directory" if isinstance(result, DirectoryComparison) else "file"
    data["identical"] = result.identical
    return json.dumps(data, indent=2)
