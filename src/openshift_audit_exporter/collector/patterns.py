# src/openshift_audit_exporter/collector/patterns.py
# Login patterns and the line-oriented extractor.

"""
Login patterns recognised in oauth-openshift logs.

Every pattern has exactly two capture groups: group 1 is the subject (user)
and group 2 is the provider. The built-in templates capture the user through
a lookahead because the provider comes first in the log text.

Remember to add new templates to DEFAULT_PATTERNS so the scrape picks them up.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable

from openshift_audit_exporter.collector.attempts import LoginAttempts
from openshift_audit_exporter.exceptions import PatternConstructionError
from openshift_audit_exporter.models import Mechanism, OutcomeClass

# Login with provider "htpasswd" succeeded for "alice"
LOGIN_SUCCESS_BASIC = (
    r'Login with provider "(?=[^"]*" succeeded for "([^"]*)")([^"]*)" succeeded for "'
)
LOGIN_FAIL_BASIC = (
    r'Login with provider "(?=[^"]*" failed for "([^"]*)")([^"]*)" failed for "'
)

# ...] github authentication succeeded: &{User:{Name:"bob", UID:""} ...}
LOGIN_SUCCESS_EXTERNAL = (
    r'\] (?=\S+ authentication succeeded:.*?\{Name:"([^"]*)",)(\S+) authentication succeeded:'
)
LOGIN_FAIL_EXTERNAL = (
    r'\] (?=\S+ authentication failed:.*?\{Name:"([^"]*)",)(\S+) authentication failed:'
)


@dataclass(frozen=True)
class LoginPattern:
    """An immutable, pre-compiled login pattern tagged with its outcome."""

    name: str
    template: str
    outcome: OutcomeClass
    mechanism: Mechanism
    regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            compiled = re.compile(self.template)
        except re.error as e:
            raise PatternConstructionError(
                f"Pattern '{self.name}' does not compile: {e}"
            ) from e
        if compiled.groups != 2:
            raise PatternConstructionError(
                f"Pattern '{self.name}' must have exactly 2 capture groups "
                f"(subject, provider), found {compiled.groups}"
            )
        object.__setattr__(self, "regex", compiled)


DEFAULT_PATTERNS: tuple[LoginPattern, ...] = (
    LoginPattern("success_basic", LOGIN_SUCCESS_BASIC, OutcomeClass.SUCCEEDED, Mechanism.BASIC),
    LoginPattern("success_external", LOGIN_SUCCESS_EXTERNAL, OutcomeClass.SUCCEEDED, Mechanism.EXTERNAL),
    LoginPattern("fail_basic", LOGIN_FAIL_BASIC, OutcomeClass.FAILED, Mechanism.BASIC),
    LoginPattern("fail_external", LOGIN_FAIL_EXTERNAL, OutcomeClass.FAILED, Mechanism.EXTERNAL),
)


def extract(pattern: LoginPattern, lines: Iterable[str]) -> list[tuple[str, str]]:
    """Return (subject, provider) for every non-overlapping match, in line order."""
    pairs: list[tuple[str, str]] = []
    for line in lines:
        for match in pattern.regex.finditer(line):
            pairs.append((match.group(1), match.group(2)))
    return pairs


def extract_attempts(pattern: LoginPattern, lines: Iterable[str]) -> LoginAttempts:
    """Build a partial aggregate from the matches of one pattern."""
    return LoginAttempts.from_pairs(extract(pattern, lines))


def patterns_by_outcome(
    patterns: Iterable[LoginPattern],
) -> dict[OutcomeClass, tuple[LoginPattern, ...]]:
    """Group patterns by outcome class, keeping their order."""
    grouped: dict[OutcomeClass, list[LoginPattern]] = {outcome: [] for outcome in OutcomeClass}
    for pattern in patterns:
        grouped[pattern.outcome].append(pattern)
    return {outcome: tuple(items) for outcome, items in grouped.items()}
