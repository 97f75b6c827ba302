"""
Command completion for termshell.

The shell always completes the command name itself (position 0); argument
positions are delegated to the matched command's own provider.
"""

import shlex
from collections.abc import Iterable

from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document

from termshell.shell.registry import CommandRegistry
from termshell.shell.terminal import AutocompleteHandler


def resolve_completions(
    registry: CommandRegistry, index: int, tokens: list[str]
) -> list[str]:
    """
    Resolve completion candidates for a token position.

    Stateless and cheap enough to run on every keystroke. Candidates are
    not prefix-filtered; the caller matches them against the partial token.

    Args:
        registry: Registered commands.
        index: Position being completed, 0 for the command name.
        tokens: Tokens typed so far; tokens[0] is the command name.

    Returns:
        Candidate strings for the position.
    """
    if index == 0:
        return registry.names()

    if not tokens:
        return []

    entry = registry.get(tokens[0])
    if entry is None or entry.autocomplete is None:
        return []

    return list(entry.autocomplete(index - 1, list(tokens[1:])))


def _split_partial(text: str) -> list[str]:
    """Tokenize text that may end inside an open quote."""
    try:
        return shlex.split(text, posix=True)
    except ValueError:
        return text.split()


class AutocompleteAdapter(Completer):
    """
    prompt_toolkit completer fed by (index, tokens) handlers.

    The text before the cursor is tokenized; a trailing space moves
    completion on to the next position with an empty partial token.
    Candidates from every handler are filtered by the partial token.
    """

    def __init__(self) -> None:
        self._handlers: list[AutocompleteHandler] = []

    def add_handler(self, handler: AutocompleteHandler) -> None:
        self._handlers.append(handler)

    def candidates(self, text: str) -> tuple[str, list[str]]:
        """
        Collect candidates for the token under the cursor.

        Returns:
            Tuple of (partial token, matching candidates in first-seen order).
        """
        tokens = _split_partial(text)

        if not text.strip():
            index, partial = 0, ""
        elif text[-1].isspace():
            index, partial = len(tokens), ""
        else:
            index, partial = len(tokens) - 1, tokens[-1]

        matches: list[str] = []
        for handler in self._handlers:
            for candidate in handler(index, tokens):
                if candidate.startswith(partial) and candidate not in matches:
                    matches.append(candidate)
        return partial, matches

    def get_completions(
        self, document: Document, complete_event: CompleteEvent
    ) -> Iterable[Completion]:
        """Generate completions for the current input."""
        partial, matches = self.candidates(document.text_before_cursor)
        for candidate in matches:
            yield Completion(candidate, start_position=-len(partial))
