"""Business name brainstorming prompt."""

from __future__ import annotations

NAME_COUNT = 10


def naming_instruction(*, concept: str) -> str:
    return f"""
    Brainstorm {NAME_COUNT} creative, memorable and brandable business names for
    the following concept: "{concept.strip()}".
    Names should be short, easy to pronounce, and suitable for a young
    entrepreneur's startup.

    Return ONLY a JSON array of strings, for example:
    ["Name One", "Name Two"]
    """.strip()
