"""
URL access rules.

Every request path is checked against :data:`ACCESS_RULES`, an ordered
tuple of ``(patterns, access)`` entries.  The first entry with a
matching pattern decides the outcome, so narrow exemptions must be
listed before the broad catch-all.

Patterns use Ant-style wildcards: ``*`` matches within a single path
segment and ``**`` matches any number of segments.  A trailing ``/**``
also matches the bare prefix, e.g. ``/admin/**`` matches ``/admin``.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

from .models import ROLE_ADMIN, ROLE_USER

PUBLIC = 'public'
AUTHENTICATED = 'authenticated'

# Decisions returned by :func:`evaluate`
ALLOW = 'allow'
LOGIN_REQUIRED = 'login_required'
DENY = 'deny'


@lru_cache(maxsize=None)
def _compile(pattern: str) -> re.Pattern:
    if pattern.endswith('/**'):
        prefix = _compile_body(pattern[:-3])
        return re.compile(f'^{prefix}(?:/.*)?$')
    return re.compile(f'^{_compile_body(pattern)}$')


def _compile_body(pattern: str) -> str:
    out = []
    i = 0
    while i < len(pattern):
        if pattern.startswith('**', i):
            out.append('.*')
            i += 2
        elif pattern[i] == '*':
            out.append('[^/]*')
            i += 1
        else:
            out.append(re.escape(pattern[i]))
            i += 1
    return ''.join(out)


def path_matches(pattern: str, path: str) -> bool:
    return bool(_compile(pattern).match(path))


@dataclass(frozen=True)
class AccessRule:
    """One row of the rule table.

    ``access`` is :data:`PUBLIC`, :data:`AUTHENTICATED` or a role label.
    """
    patterns: tuple[str, ...]
    access: str

    def matches(self, path: str) -> bool:
        return any(path_matches(p, path) for p in self.patterns)


ACCESS_RULES: tuple[AccessRule, ...] = (
    AccessRule(('/login', '/logout', '/error', '/healthz', '/webjars/**', '/css/**', '/static/**'), PUBLIC),
    AccessRule(('/deletePatient/**', '/admin/**'), ROLE_ADMIN),
    AccessRule(('/user/**',), ROLE_USER),
    AccessRule(('/**',), AUTHENTICATED),
)


def match_rule(path: str, rules=ACCESS_RULES) -> AccessRule | None:
    for rule in rules:
        if rule.matches(path):
            return rule
    return None


def evaluate(path: str, user, rules=ACCESS_RULES) -> str:
    """Return the access decision for ``user`` requesting ``path``.

    A path matching no rule is treated as requiring authentication.
    """
    rule = match_rule(path, rules)
    access = rule.access if rule else AUTHENTICATED
    if access == PUBLIC:
        return ALLOW
    if not (user and getattr(user, 'is_authenticated', False)):
        return LOGIN_REQUIRED
    if access == AUTHENTICATED:
        return ALLOW
    has_role = getattr(user, 'has_role', None)
    if has_role is not None and has_role(access):
        return ALLOW
    return DENY
