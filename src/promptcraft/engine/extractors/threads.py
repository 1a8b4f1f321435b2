"""Conversation-to-prompt extractor."""

import logging
import re
from typing import Any

from ...prompts.schema import DocumentKind
from ...prompts.fields import FieldState
from .base import Extractor

logger = logging.getLogger(__name__)

PREAMBLE = "I want you to respond to me as if we were having this conversation:"
CLOSING = "Continue the conversation in the same style and tone."

SPEAKER_PATTERN = re.compile(r"^([\w\s]+):\s*(.*)$")


def parse_turns(conversation: str) -> list[str]:
    """Split a pasted transcript into attributed turns.

    A `Name: text` line starts a new turn. Other lines continue the most
    recent turn once a speaker has been seen, and stand alone before that.
    Blank lines are dropped and every line is trimmed.
    """
    turns: list[str] = []
    current_speaker = ""

    for line in conversation.split("\n"):
        line = line.strip()
        if not line:
            continue

        match = SPEAKER_PATTERN.match(line)
        if match:
            current_speaker = match.group(1).strip()
            turns.append(f"{current_speaker}: {match.group(2)}")
        elif current_speaker:
            turns[-1] += f"\n{line}"
        else:
            turns.append(line)

    return turns


def compose_prompt(turns: list[str]) -> str:
    """Wrap turns in the fixed role-play instructions."""
    body = "\n\n".join(turns)
    return f"{PREAMBLE}\n\n{body}\n\n{CLOSING}"


class ThreadsExtractor(Extractor):
    """Turns a chat transcript into a continue-the-conversation prompt."""

    kind = DocumentKind.THREADS

    def extract(self, text: str, state: FieldState) -> dict[str, Any]:
        turns = parse_turns(text)
        logger.debug(f"[EXTRACT] Threads: {len(turns)} turns")
        return {
            "conversation": text,
            "generated_prompt": compose_prompt(turns),
        }
