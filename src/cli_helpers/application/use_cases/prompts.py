"""Interactive prompts: confirmation, validated text input, menus, passwords.

Purpose
-------
Ask the user for input until the answer is acceptable. Rejections are shown
as red lines through the normal output route; there is no retry limit and no
timeout.

Contents
--------
* :class:`Prompter` - the prompt operations bound to a reader and an emitter.
* :func:`shape_question` - prompt text normalisation used by text input.

System Role
-----------
Secondary use case sharing the :class:`~cli_helpers.application.use_cases.emit.Emitter`
with the output functions; the façade exposes its methods as ``confirm``,
``text_input``, ``menu``, ``pwprompt`` and ``prompt``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, Union

from cli_helpers.application.ports import ConsolePort, LineReaderPort
from cli_helpers.domain import CallOptions

from .emit import Emitter

logger = logging.getLogger(__name__)

Validator = Callable[[str], Any]
Validators = Union[Mapping[str, Validator], Sequence[tuple[str, Validator]]]

PASSWORD_LENGTH_ERROR = "password length can't be zero."

_CONFIRM_ANSWERS = {"y": True, "yes": True, "n": False, "no": False}
_TERMINATOR_RE = re.compile(r"([^a-zA-Z0-9)\]}])\s*$")
_PASSWORD_RE = re.compile(r"passw(or)?d", re.IGNORECASE)
_LIBRARY_CLASS = "cli_helpers"


def shape_question(question: str, default: str | None = None) -> str:
    """Normalise prompt text so it ends with a terminator and one space.

    Examples
    --------
    >>> shape_question("Enter a number:")
    'Enter a number: '
    >>> shape_question("Enter a number:", default="1")
    'Enter a number (default=1) : '
    >>> shape_question("Your name")
    'Your name: '
    """

    question = question.rstrip("\r\n")
    match = _TERMINATOR_RE.search(question)
    if match:
        terminator = match.group(1)
        question = question[: match.start()]
    else:
        terminator = ":"
    if default is not None:
        question += f" (default={default}) "
    question += f"{terminator} "
    return question.rstrip() + " "


def _validator_pairs(validate: Validators | None) -> list[tuple[str, Validator]]:
    if not validate:
        return []
    if isinstance(validate, Mapping):
        return list(validate.items())
    return list(validate)


def _non_empty(text: str) -> bool:
    return len(text) > 0


class Prompter:
    """Prompt operations sharing one line reader, console and emitter."""

    def __init__(self, *, emitter: Emitter, reader: LineReaderPort, console: ConsolePort) -> None:
        self._emitter = emitter
        self._reader = reader
        self._console = console

    def confirm(self, question: str) -> bool:
        """Ask a yes/no question until the answer is ``y``, ``yes``, ``n`` or ``no``."""

        question = re.sub(r"\s*$", " [yN] ", question, count=1)
        answer: str | None = None
        while answer is None or answer not in _CONFIRM_ANSWERS:
            if answer is not None:
                self._emitter.report_error("ERROR: must be one of 'y','n','yes','no'")
            answer = self._reader.read_line(question).strip().lower()
        return _CONFIRM_ANSWERS[answer]

    def text_input(
        self,
        question: str,
        *,
        default: str | None = None,
        validate: Validators | None = None,
        noecho: bool = False,
        erase: bool = False,
    ) -> str:
        """Read text that passes every validator.

        Parameters
        ----------
        default:
            Returned as-is, without validation, when the user enters nothing.
        validate:
            Error message to predicate mapping (or a sequence of pairs). The
            predicates run in insertion order; the first one returning a falsy
            value (or raising) rejects the input and its message is shown.
        noecho:
            Read without echoing what is typed.
        erase:
            Remove the prompt line from the terminal after the answer.
        """

        prompt_text = shape_question(question, default)
        validators = _validator_pairs(validate)
        error: str | None = None
        while True:
            if error is not None:
                self._emitter.report_error(f"ERROR: {error}")
            error = None

            text = self._read(prompt_text, noecho=noecho, erase=erase)
            if default is not None and not text:
                return default
            for label, predicate in validators:
                if self._passes(predicate, text):
                    self._emitter.debug(CallOptions(indent=1, caller_class=_LIBRARY_CLASS), [f" + Validated: {label}"])
                    continue
                error = label
                break
            if error is None:
                return text

    def menu(self, question: str, choices: Mapping[Any, Any] | Iterable[Any]) -> Any:
        """Show a numbered list and return the key (mapping) or element (sequence) picked."""

        if isinstance(choices, Mapping):
            descriptions = dict(choices)
        else:
            descriptions = {item: item for item in choices}
        if not descriptions:
            raise ValueError("menu() requires at least one choice")
        keys = sorted(descriptions, key=str)
        count = len(keys)

        self._console.emit([question, ""])
        choice: str | None = None
        while True:
            if choice is not None:
                self._emitter.report_error("ERROR: invalid selection")
            rows = [f"    {index}. {descriptions[key]}" for index, key in enumerate(keys, start=1)]
            self._console.emit([*rows, ""])
            choice = self._reader.read_line(f"Selection (1-{count}): ").strip()
            if choice.isdigit() and 1 <= int(choice) <= count:
                return keys[int(choice) - 1]

    def pwprompt(self, prompt: str = "Password: ", *, validate: Validators | None = None, erase: bool = False) -> str:
        """Read a non-empty secret without echo."""

        validators = [(PASSWORD_LENGTH_ERROR, _non_empty), *_validator_pairs(validate)]
        return self.text_input(prompt or "Password: ", validate=validators, noecho=True, erase=erase)

    def prompt(
        self,
        question: str,
        *,
        yn: bool = False,
        menu: Mapping[Any, Any] | Iterable[Any] | None = None,
        default: str | None = None,
        validate: Validators | None = None,
        noecho: bool = False,
        erase: bool = False,
    ) -> Any:
        """Dispatch to :meth:`confirm`, :meth:`menu` or :meth:`text_input`.

        Questions mentioning a password switch echo off and require a
        non-empty answer.
        """

        if yn:
            return self.confirm(question)
        if menu is not None:
            return self.menu(question, menu)
        validators = _validator_pairs(validate)
        if _PASSWORD_RE.search(question):
            noecho = True
            validators = [*validators, (PASSWORD_LENGTH_ERROR, _non_empty)]
        return self.text_input(question, default=default, validate=validators, noecho=noecho, erase=erase)

    def _read(self, prompt_text: str, *, noecho: bool, erase: bool) -> str:
        if noecho:
            text = self._reader.read_secret(prompt_text)
        else:
            text = self._reader.read_line(prompt_text)
        if erase:
            self._console.erase_previous_line()
        return text

    @staticmethod
    def _passes(predicate: Validator, text: str) -> bool:
        try:
            return bool(predicate(text))
        except Exception:
            logger.debug("Validator raised; treating input as invalid", exc_info=True)
            return False


__all__ = ["PASSWORD_LENGTH_ERROR", "Prompter", "Validators", "shape_question"]
