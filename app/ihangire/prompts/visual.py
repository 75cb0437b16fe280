"""Prompt for the logo concept image."""


def logo_prompt(*, concept: str) -> str:
    return (
        "A vibrant, modern logo concept for a startup. The logo should be for a "
        f'business concept: "{concept.strip()}". Minimalist, clean, memorable.'
    )
