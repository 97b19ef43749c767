"""Markdown normalization for instructional rulesets."""

import re

DEFAULT_HEADING = "# AI Model Instructional Ruleset"


def normalize_markdown(text: str) -> str:
    """Normalize free text into a heading-led Markdown document.

    Existing headings (# through ######) are left untouched. A default
    top-level heading is added when the text does not already start with
    one, "* " bullets become "- " bullets, and runs of three or more
    newlines are collapsed to a single blank line.
    """
    markdown = text

    # Add a heading if the document doesn't open with one
    if not markdown.startswith("#"):
        markdown = f"{DEFAULT_HEADING}\n\n{markdown}"

    markdown = re.sub(r"^\* ", "- ", markdown, flags=re.MULTILINE)

    # Clean up whitespace
    markdown = re.sub(r"\n{3,}", "\n\n", markdown)
    return markdown


def headings(text: str) -> list[tuple[int, str]]:
    """List (level, title) for each Markdown heading in text."""
    return [
        (len(match.group(1)), match.group(2).strip())
        for match in re.finditer(r"^(#{1,6})\s+(.+)$", text, re.MULTILINE)
    ]
