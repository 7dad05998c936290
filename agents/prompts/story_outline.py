# =============================================================================
# agents/prompts/story_outline.py - Story Outline Prompt
# =============================================================================
# Fixed instructional template for the story helper. The three user inputs
# are embedded verbatim.
#
# Usage:
#   prompt = build_story_outline_prompt(
#       genre="Sci-fi",
#       characters="Mara, a courier pilot",
#       idea="Memories are smuggled like contraband",
#   )
# =============================================================================

from __future__ import annotations

import re

STORY_OUTLINE_TEMPLATE = """
You are an expert comic writer assistant.

Given:
- Genre: {genre}
- Main characters: {characters}
- Core idea: {idea}

Generate:
1. A short one-paragraph synopsis of the comic.
2. A numbered 10-panel outline. For each panel, include:
   - Panel number
   - What is happening visually
   - One or two lines of possible dialogue.

Format clearly using headings like:
"SYNOPSIS:" and "PANELS:"
"""

_PLACEHOLDER = re.compile(r"\{(genre|characters|idea)\}")


def build_story_outline_prompt(genre: str, characters: str, idea: str) -> str:
    """Render the story outline template."""
    values = {"genre": genre, "characters": characters, "idea": idea}
    # Single pass: placeholders inside user text are left as typed
    return _PLACEHOLDER.sub(lambda m: values[m.group(1)], STORY_OUTLINE_TEMPLATE)
