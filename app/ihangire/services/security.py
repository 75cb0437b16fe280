"""
Purpose: Guardrails for text sent to the AI backend.
Early, predictable failures: empty prompts and oversized requests never
leave the process.
"""

from ..errors import InvalidInput

MAX_INPUT_CHARS = 8000


class DefaultSecurity:
    def sanitize_for_prompt(self, text: str) -> str:
        return (text or "").replace("\x00", "").strip()

    def validate_user_input(self, text: str) -> str:
        """Return the sanitized text, or raise InvalidInput."""
        clean = self.sanitize_for_prompt(text)
        if not clean:
            raise InvalidInput("Empty prompt.", "Please enter a non-empty message.")
        if len(clean) > MAX_INPUT_CHARS:
            raise InvalidInput(
                f"Prompt too long: {len(clean)} chars",
                "Your message is too long. Please shorten it.",
            )
        return clean
