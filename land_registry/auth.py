"""Caller authorization capability."""

from dataclasses import dataclass, field

from land_registry.exceptions import UnauthorizedError


@dataclass(frozen=True)
class AuthContext:
    """Identities the invoking party has proven control of.

    A context is passed explicitly into every mutating registry operation;
    operations call ``require_auth`` for the identity they act as.
    """

    signers: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def signed_by(cls, *identities: str) -> "AuthContext":
        """Context proving control of the given identities."""
        return cls(signers=frozenset(identities))

    @classmethod
    def anonymous(cls) -> "AuthContext":
        """Context that proves nothing."""
        return cls()

    def can_act_as(self, identity: str) -> bool:
        return identity in self.signers

    def require_auth(self, identity: str) -> None:
        """Raise ``UnauthorizedError`` unless the caller controls ``identity``."""
        if identity not in self.signers:
            raise UnauthorizedError(f"Caller cannot prove control of {identity}")
