from __future__ import annotations

from typing import List, Sequence

from .model import DocumentBlock, PageBreak, TextRun


def blocks_to_text(blocks: Sequence[DocumentBlock]) -> str:
    lines: List[str] = []
    for block in blocks:
        if isinstance(block, PageBreak):
            # form feed between pages
            lines.append("\f")
            continue
        parts: List[str] = []
        for run in block.runs:
            if isinstance(run, TextRun):
                parts.append(run.text)
            else:
                parts.append(f"[image {run.width:.0f}x{run.height:.0f}]")
        lines.append("".join(parts))
    return "\n".join(lines)


def write_txt(blocks: Sequence[DocumentBlock], out_path: str) -> str:
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(blocks_to_text(blocks))
    return out_path
