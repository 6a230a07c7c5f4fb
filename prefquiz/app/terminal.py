from __future__ import annotations

"""Terminal I/O callbacks handed to the SessionManager."""

import getpass
from typing import Any, Callable, Dict, Optional


def _read_int(ask: Callable[[str], str], inform: Callable[[str], None], prompt: str, lo: int, hi: int) -> int:
    while True:
        raw = ask(prompt).strip()
        try:
            value: Optional[int] = int(raw)
        except ValueError:
            value = None
        if value is not None and lo <= value <= hi:
            return value
        inform(f"Invalid selection. Enter a number from {lo} to {hi}.")


def build_ui(
    *,
    input_fn: Callable[[str], str] | None = None,
    secret_fn: Callable[[str], str] | None = None,
    output_fn: Callable[[str], None] | None = None,
) -> Dict[str, Any]:
    def ask(prompt: str) -> str:
        return (input_fn or input)(prompt)

    def ask_secret(prompt: str) -> str:
        if secret_fn is not None:
            return secret_fn(prompt)
        return getpass.getpass(prompt)

    def inform(msg: str) -> None:
        (output_fn or print)(msg)

    def ask_choice(prompt: str, lo: int, hi: int) -> int:
        return _read_int(ask, inform, prompt, lo, hi)

    return {
        "ask": ask,
        "ask_secret": ask_secret,
        "ask_choice": ask_choice,
        "inform": inform,
    }
