"""
jsonscrub_core.tracker
~~~~~~~~~~~~~~~~~~~~~~
Structural classification of tokens without building a parse tree.

The tracker keeps a stack of open containers and one counter of tokens seen
since the last delimiter.  The counter restarts at every ``{ [ } ]`` so the
token right after a delimiter always lands on an odd count; inside an
object that gives the key/value/key/value alternation, and it resumes
correctly after a nested container closes.  Memory is O(nesting depth).
"""

from __future__ import annotations

from enum import StrEnum

from jsonscrub_core.tokens import ContainerClose, ContainerKind, ContainerOpen, Token


class Role(StrEnum):
    KEY = "key"
    VALUE = "value"
    DELIMITER = "delimiter"


class StructuralTracker:
    """Assigns a :class:`Role` to each token of one transcoding call.

    An unmatched closing delimiter is ignored rather than reported: the
    tokenizer already guarantees balanced brackets, so the branch is only
    reachable with hand-built token sequences.
    """

    def __init__(self) -> None:
        self._stack: list[ContainerKind] = []
        self._count = 0

    @property
    def depth(self) -> int:
        return len(self._stack)

    def classify(self, token: Token) -> Role:
        if isinstance(token, ContainerOpen):
            self._stack.append(token.kind)
            self._count = 0
            role = Role.DELIMITER
        elif isinstance(token, ContainerClose):
            if self._stack:
                self._stack.pop()
            self._count = 0
            role = Role.DELIMITER
        elif self._stack and self._stack[-1] is ContainerKind.OBJECT and self._count % 2:
            role = Role.KEY
        else:
            role = Role.VALUE
        self._count += 1
        return role
