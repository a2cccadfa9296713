"""
Batch-scoped decisions for fields whose conversion needs a human choice.

Two source fields have no single correct translation:

- ``support_material_style`` maps onto OrcaSlicer's separate support type
  and support style, and the table proposal may not match what the user
  wants.
- ``compatible_*_condition`` expressions reference PrusaSlicer printer and
  print names that may not exist in OrcaSlicer, so the user decides whether
  to keep them.

The first occurrence of each kind in a batch asks the decision provider;
the answer is stored in an ``AmbiguityCache`` and reused for every later
occurrence in the same batch.  A new batch starts with a new cache.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Protocol

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class AmbiguityKind(str, Enum):
    SUPPORT_STYLE = "support_style"
    COMPATIBILITY_CONDITION = "compatibility_condition"


class Ambiguity(BaseModel):
    """Description of a choice handed to a decision provider."""

    kind: AmbiguityKind
    key: str
    value: str | None
    proposal: Any = None


DecisionProvider = Callable[[Ambiguity], Any]


def accept_proposed(ambiguity: Ambiguity) -> Any:
    """Headless provider: take the table proposal and keep every condition."""
    if ambiguity.kind == AmbiguityKind.COMPATIBILITY_CONDITION:
        return True
    return ambiguity.proposal


def discard_conditions(ambiguity: Ambiguity) -> Any:
    """Headless provider: take the table proposal but drop compatibility conditions."""
    if ambiguity.kind == AmbiguityKind.COMPATIBILITY_CONDITION:
        return False
    return ambiguity.proposal


class PromptBackend(Protocol):
    def confirm(self, message: str, default: bool) -> bool: ...
    def ask(self, message: str, choices: list[str], default: str) -> str: ...


class RichPromptBackend:
    """Terminal prompts rendered with rich."""

    def __init__(self) -> None:
        from rich.console import Console

        self.console = Console(stderr=True)

    def confirm(self, message: str, default: bool) -> bool:
        from rich.prompt import Confirm

        return Confirm.ask(message, default=default, console=self.console)

    def ask(self, message: str, choices: list[str], default: str) -> str:
        from rich.prompt import Prompt

        return Prompt.ask(message, choices=choices, default=default, console=self.console)


class InteractiveDecisionProvider:
    """Ask the operator on the terminal."""

    def __init__(
        self,
        support_styles: dict[str, tuple[str, str]],
        backend: PromptBackend | None = None,
    ) -> None:
        self.support_styles = support_styles
        self.backend: PromptBackend = backend or RichPromptBackend()

    def __call__(self, ambiguity: Ambiguity) -> Any:
        if ambiguity.kind == AmbiguityKind.COMPATIBILITY_CONDITION:
            return self.backend.confirm(
                f"Profile has {ambiguity.key}:\n{ambiguity.value}\n\nKeep this value?",
                default=True,
            )

        proposed = ambiguity.proposal
        # Unmapped source value: nothing to confirm, pick from the table
        if proposed is not None and self.backend.confirm(
            f"Support style detected: {ambiguity.value}\n"
            f"Type: {proposed[0]}\nStyle: {proposed[1]}\n\nUse this for the whole batch?",
            default=True,
        ):
            return proposed
        choice = self.backend.ask(
            "Support style to use instead",
            choices=list(self.support_styles),
            default=ambiguity.value if ambiguity.value in self.support_styles else next(iter(self.support_styles)),
        )
        return self.support_styles[choice]


class AmbiguityCache:
    """
    First-occurrence-wins memo of decisions, one per ``AmbiguityKind``.

    Usage:
        cache = AmbiguityCache(accept_proposed)
        decision = cache.resolve(Ambiguity(kind=..., key=..., value=..., proposal=...))
    """

    def __init__(self, provider: DecisionProvider | None = None) -> None:
        self.provider: DecisionProvider = provider or accept_proposed
        self._decisions: dict[AmbiguityKind, Any] = {}

    def has(self, kind: AmbiguityKind) -> bool:
        return kind in self._decisions

    def get(self, kind: AmbiguityKind) -> Any:
        return self._decisions.get(kind)

    def resolve(self, ambiguity: Ambiguity) -> Any:
        """
        Return the cached decision for this kind, asking the provider once.

        A ``None`` decision is returned but not stored, so the next
        occurrence of the same kind asks again.
        """
        if ambiguity.kind in self._decisions:
            return self._decisions[ambiguity.kind]
        decision = self.provider(ambiguity)
        logger.debug(
            "Decision for %s (%s=%r): %r",
            ambiguity.kind.value, ambiguity.key, ambiguity.value, decision,
        )
        if decision is not None:
            self._decisions[ambiguity.kind] = decision
        return decision

    def clear(self) -> None:
        self._decisions.clear()
