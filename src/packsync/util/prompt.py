"""Yes/no confirmation with an injectable input source."""

from __future__ import annotations

import re
from typing import Callable, Optional

_AFFIRMATIVE = re.compile(r"^\s*y", re.IGNORECASE)


def is_affirmative(answer: Optional[str]) -> bool:
    """
    Return True if answer starts with "y" (case-insensitive).

    "y", "Y", "yes", "Yes please" -> True
    "", "n", "no", "ok", None -> False
    """
    if not answer:
        return False
    return bool(_AFFIRMATIVE.match(answer))


class ConfirmationPrompt:
    """
    Ask a yes/no question on a line-oriented input.

    `input_func` receives the prompt text and returns the typed line.
    EOF on the input counts as "no".
    """

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        *,
        assume_yes: bool = False,
    ) -> None:
        self._input = input_func
        self._assume_yes = assume_yes

    def ask(self, message: str) -> bool:
        if self._assume_yes:
            return True
        try:
            answer = self._input(f"{message} (y/N): ")
        except EOFError:
            return False
        return is_affirmative(answer)
