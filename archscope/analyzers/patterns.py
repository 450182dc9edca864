"""
Text heuristics used by the extractors.

Each heuristic is a small named predicate over file text so it can be tested
on its own. None of them raise on unexpected input; a non-match is simply False.
"""
import re
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

from ..types import AuthTier, ExecutionContext, HttpMethod


@dataclass(frozen=True)
class TextPredicate:
    """A named test over file text."""
    name: str
    test: Callable[[str], bool]

    def __call__(self, text: str) -> bool:
        return self.test(text)


def contains_any(name: str, needles: Sequence[str]) -> TextPredicate:
    """Predicate matching if the lowercased text contains any needle."""
    lowered = tuple(n.lower() for n in needles)
    return TextPredicate(name, lambda text: any(n in text.lower() for n in lowered))


def matches_regex(name: str, pattern: str, flags: int = re.MULTILINE) -> TextPredicate:
    compiled = re.compile(pattern, flags)
    return TextPredicate(name, lambda text: compiled.search(text) is not None)


# ============================================
# HTTP method exports
# ============================================

HTTP_METHODS: Tuple[HttpMethod, ...] = (
    HttpMethod.GET,
    HttpMethod.POST,
    HttpMethod.PUT,
    HttpMethod.DELETE,
    HttpMethod.PATCH,
)


def exports_function(method: HttpMethod) -> TextPredicate:
    """`export function GET(` or `export async function GET(`."""
    return matches_regex(
        f"exports_function_{method.value}",
        rf"export\s+(?:async\s+)?function\s+{method.value}\s*\(",
    )


def exports_const(method: HttpMethod) -> TextPredicate:
    """`export const GET =`."""
    return matches_regex(
        f"exports_const_{method.value}",
        rf"export\s+const\s+{method.value}\s*=",
    )


METHOD_PREDICATES = {
    method: (exports_function(method), exports_const(method))
    for method in HTTP_METHODS
}


def detect_methods(content: str) -> List[HttpMethod]:
    """HTTP methods exported by a route handler, in canonical order."""
    return [
        method for method, predicates in METHOD_PREDICATES.items()
        if any(predicate(content) for predicate in predicates)
    ]


# ============================================
# Access-control tier
# ============================================

ADMIN_CUES = contains_any("admin_cues", (
    "requireAdmin",
    "isAdmin",
    "role === 'admin'",
    'role === "admin"',
))

PROTECTED_CUES = contains_any("protected_cues", (
    "getAuthenticatedUser",
    "auth.protect",
    "requireAuth",
    "getServerSession",
    "currentUser",
    "unauthorized",
))

# Highest tier first
AUTH_TIER_RULES: Tuple[Tuple[TextPredicate, AuthTier], ...] = (
    (ADMIN_CUES, AuthTier.ADMIN),
    (PROTECTED_CUES, AuthTier.PROTECTED),
)


def infer_auth_tier(content: str) -> AuthTier:
    """Guess who may call a route from textual cues. Never verified."""
    for predicate, tier in AUTH_TIER_RULES:
        if predicate(content):
            return tier
    return AuthTier.PUBLIC


# ============================================
# Components
# ============================================

CLIENT_DIRECTIVE = matches_regex("client_directive", r"""^["']use client["'];?\s*$""")


def infer_execution_context(content: str) -> ExecutionContext:
    if CLIENT_DIRECTIVE(content):
        return ExecutionContext.INTERACTIVE
    return ExecutionContext.NON_INTERACTIVE


# ============================================
# Imports
# ============================================

_BINDING = r"(?:\{[^}]*\}|\*\s+as\s+[\w$]+|[\w$]+(?:\s*,\s*(?:\{[^}]*\}|\*\s+as\s+[\w$]+))?)"

IMPORT_PATTERN = re.compile(
    rf"""import\s+(?:type\s+)?(?:{_BINDING}\s+from\s+)?["']([^"']+)["']"""
)


def extract_import_targets(content: str) -> List[str]:
    """Module specifiers of all static import statements, in source order."""
    return [match.group(1) for match in IMPORT_PATTERN.finditer(content)]


def is_local_import(target: str, alias_prefix: str) -> bool:
    """Relative (`./`, `../`) or alias-rooted import."""
    return target.startswith('.') or (bool(alias_prefix) and target.startswith(alias_prefix))


def extract_local_imports(content: str, alias_prefix: str) -> List[str]:
    return [t for t in extract_import_targets(content) if is_local_import(t, alias_prefix)]


def component_dependency_names(content: str, alias_prefix: str) -> List[str]:
    """Names of imported modules that look like components, deduplicated.

    An import counts when it is local and its last path segment starts with an
    uppercase letter.
    """
    names: List[str] = []
    for target in extract_local_imports(content, alias_prefix):
        last_segment = target.rstrip('/').split('/')[-1]
        if last_segment[:1].isupper() and last_segment not in names:
            names.append(last_segment)
    return names
