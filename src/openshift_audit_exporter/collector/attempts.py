# src/openshift_audit_exporter/collector/attempts.py
# Accumulating login-attempt counts keyed by subject and provider.

"""
LoginAttempts counts how many login attempts each subject made through each
provider. An instance is owned by a single task until it is merged into the
cycle's final aggregate; counts only ever increase.
"""

from typing import Iterable, Iterator


class LoginAttempts:
    """Two-level map of subject -> provider -> count."""

    def __init__(self) -> None:
        self._attempts: dict[str, dict[str, int]] = {}

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> "LoginAttempts":
        attempts = cls()
        for subject, provider in pairs:
            attempts.add_attempt(subject, provider)
        return attempts

    def add_attempt(self, subject: str, provider: str) -> None:
        """Count one attempt for the pair."""
        self._add(subject, provider, 1)

    def merge(self, other: "LoginAttempts") -> "LoginAttempts":
        """
        Add every count of `other` into this aggregate.

        Overlapping pairs are summed, so the result does not depend on the
        order in which partial aggregates are merged. Returns self.
        """
        for subject, providers in other._attempts.items():
            for provider, count in providers.items():
                self._add(subject, provider, count)
        return self

    def _add(self, subject: str, provider: str, count: int) -> None:
        providers = self._attempts.setdefault(subject, {})
        providers[provider] = providers.get(provider, 0) + count

    def count(self, subject: str, provider: str) -> int:
        """Current count for the pair, 0 if it was never seen."""
        return self._attempts.get(subject, {}).get(provider, 0)

    def subjects(self) -> list[str]:
        """Distinct subjects, sorted."""
        return sorted(self._attempts)

    def providers(self) -> list[str]:
        """Distinct providers across all subjects, sorted."""
        return sorted({p for providers in self._attempts.values() for p in providers})

    def items(self) -> Iterator[tuple[str, str, int]]:
        """Yield (subject, provider, count) for every observed pair, sorted."""
        for subject in self.subjects():
            providers = self._attempts[subject]
            for provider in sorted(providers):
                yield subject, provider, providers[provider]

    @property
    def total(self) -> int:
        return sum(count for _, _, count in self.items())

    def to_dict(self) -> dict[str, dict[str, int]]:
        return {subject: dict(providers) for subject, providers in self._attempts.items()}

    def __len__(self) -> int:
        return sum(len(providers) for providers in self._attempts.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LoginAttempts):
            return NotImplemented
        return self._attempts == other._attempts

    def __repr__(self) -> str:
        return f"LoginAttempts({self.to_dict()!r})"
