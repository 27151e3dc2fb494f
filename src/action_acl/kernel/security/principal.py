"""Kernel security – Principal, RolelessPrincipal and the RoleBearer protocol."""
from __future__ import annotations

import dataclasses
from typing import Any, Iterable, Protocol, runtime_checkable


@runtime_checkable
class RoleBearer(Protocol):
    """What the evaluator reads from an authenticated identity.

    ``supports_roles`` is a capability flag: a principal type may opt out of
    role semantics entirely.  ``get_roles`` may be backed by an expensive
    lookup and is called at most once per evaluation.
    """

    @property
    def id(self) -> str: ...

    @property
    def supports_roles(self) -> bool: ...

    def get_roles(self) -> Iterable[str]: ...


def supports_roles(principal: Any) -> bool:
    """Return ``True`` when *principal* both declares role support and can list roles."""
    return bool(getattr(principal, "supports_roles", False)) and callable(
        getattr(principal, "get_roles", None)
    )


@dataclasses.dataclass(frozen=True)
class Principal:
    """Authenticated identity with a flat set of role names.

    ``roles`` accepts any iterable of names, or one name as a plain string.
    """
    subject: str
    roles: frozenset[str] = frozenset()
    claims: dict[str, Any] = dataclasses.field(default_factory=dict, hash=False, compare=False)

    supports_roles = True

    def __post_init__(self) -> None:
        roles = (self.roles,) if isinstance(self.roles, str) else tuple(self.roles)
        for role in roles:
            if not isinstance(role, str) or not role.strip():
                raise ValueError(f"Principal {self.subject!r}: role names must be non-blank strings, got {role!r}")
        object.__setattr__(self, "roles", frozenset(roles))

    @property
    def id(self) -> str:
        return self.subject

    def get_roles(self) -> frozenset[str]:
        return self.roles

    def has_role(self, role: str) -> bool:
        return role in self.roles


@dataclasses.dataclass(frozen=True)
class RolelessPrincipal:
    """Authenticated identity whose backing store has no notion of roles.

    Role requirements on a policy are ignored for such a principal; only a
    custom validator can grant access.
    """
    subject: str
    claims: dict[str, Any] = dataclasses.field(default_factory=dict, hash=False, compare=False)

    supports_roles = False

    @property
    def id(self) -> str:
        return self.subject


__all__ = ["Principal", "RoleBearer", "RolelessPrincipal", "supports_roles"]
