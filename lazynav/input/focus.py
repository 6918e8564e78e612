"""Which element currently receives typed keys."""

from __future__ import annotations

from dataclasses import dataclass

LISTING_FOCUS = "listing"
PROMPT_FOCUS = "prompt"


@dataclass
class FocusState:
    """Focus owner plus the go-to prompt's text buffer.

    While the prompt has focus, navigation keys are plain text.
    """

    owner: str = LISTING_FOCUS
    buffer: str = ""

    @property
    def in_text_field(self) -> bool:
        return self.owner == PROMPT_FOCUS

    def open_prompt(self, initial: str = "") -> None:
        self.owner = PROMPT_FOCUS
        self.buffer = initial

    def close_prompt(self) -> str:
        text = self.buffer
        self.owner = LISTING_FOCUS
        self.buffer = ""
        return text

    def type_text(self, text: str) -> None:
        self.buffer += text

    def backspace(self) -> None:
        self.buffer = self.buffer[:-1]


__all__ = ["FocusState", "LISTING_FOCUS", "PROMPT_FOCUS"]
