"""Turn the sectioned analysis text into a flat list of display blocks."""

from __future__ import annotations

from ..models import AnalysisBlock, BlockKind


def parse_blocks(text: str) -> list[AnalysisBlock]:
    """
    Only a handful of line markers are recognised: '## ', '### ', a line wrapped
    in '**', and '* ' bullets. Everything else is a paragraph, kept verbatim.
    """
    blocks: list[AnalysisBlock] = []
    for raw in (text or "").split("\n"):
        line = raw.strip()
        if not line:
            continue
        if line.startswith("### "):
            blocks.append(AnalysisBlock(BlockKind.HEADING_3, line[4:]))
        elif line.startswith("## "):
            blocks.append(AnalysisBlock(BlockKind.HEADING_2, line[3:]))
        elif len(line) >= 4 and line.startswith("**") and line.endswith("**"):
            blocks.append(AnalysisBlock(BlockKind.BOLD, line[2:-2]))
        elif line.startswith("* "):
            blocks.append(AnalysisBlock(BlockKind.BULLET, line[2:]))
        else:
            blocks.append(AnalysisBlock(BlockKind.PARAGRAPH, line))
    return blocks
