"""Seller and buyer registration and verification."""

from __future__ import annotations

import logging
from dataclasses import replace

from land_registry.auth import AuthContext
from land_registry.exceptions import (
    AlreadyRegisteredError,
    BuyerNotVerifiedError,
    InvalidArgumentError,
    NotRegisteredError,
    ParticipantNotFoundError,
    SellerNotVerifiedError,
)
from land_registry.models.registry import (
    BuyerProfile,
    CounterName,
    DataKey,
    Participant,
    Role,
    SellerProfile,
)
from land_registry.registry.base import RegistryComponent
from land_registry.store import StoreKey

logger = logging.getLogger(__name__)

PROFILE_TYPES = {
    Role.SELLER: SellerProfile,
    Role.BUYER: BuyerProfile,
}

ROLE_COUNTERS = {
    Role.SELLER: CounterName.SELLERS,
    Role.BUYER: CounterName.BUYERS,
}

ROLE_LISTS = {
    Role.SELLER: StoreKey.of(DataKey.SELLER_LIST),
    Role.BUYER: StoreKey.of(DataKey.BUYER_LIST),
}

NOT_VERIFIED_ERRORS = {
    Role.SELLER: SellerNotVerifiedError,
    Role.BUYER: BuyerNotVerifiedError,
}


def participant_key(identity: str) -> StoreKey:
    return StoreKey.of(DataKey.PARTICIPANT, identity)


class IdentityRegistry(RegistryComponent):
    """Register participants and track their verification status.

    Sellers and buyers live in a single keyspace keyed by identity, so an
    identity registered in one role can never register in the other.
    """

    def register(
        self,
        auth: AuthContext,
        caller: str,
        role: Role,
        profile: SellerProfile | BuyerProfile,
    ) -> Participant:
        """Register ``caller`` in ``role``.

        Raises
        ------
        UnauthorizedError
            If the caller does not control ``caller``.
        AlreadyRegisteredError
            If the identity already holds a seller or buyer record.
        """
        self._check_profile(role, profile)
        auth.require_auth(caller)

        with self.store.transaction():
            if self.store.has(participant_key(caller)):
                raise AlreadyRegisteredError(f"Identity {caller} already registered")

            now = self.clock.now()
            participant = Participant(
                identity=caller,
                role=role,
                profile=profile,
                created_at=now,
                updated_at=now,
            )
            self.store.set(participant_key(caller), participant)
            self.store.append(ROLE_LISTS[role], caller)
            self.store.next_id(ROLE_COUNTERS[role])

        logger.info("Registered %s %s", role.value.lower(), caller)
        return participant

    def register_seller(self, auth: AuthContext, caller: str, profile: SellerProfile) -> Participant:
        return self.register(auth, caller, Role.SELLER, profile)

    def register_buyer(self, auth: AuthContext, caller: str, profile: BuyerProfile) -> Participant:
        return self.register(auth, caller, Role.BUYER, profile)

    def update(
        self,
        auth: AuthContext,
        caller: str,
        role: Role,
        profile: SellerProfile | BuyerProfile,
    ) -> Participant:
        """Overwrite the mutable profile fields of ``caller``.

        The document handle recorded at registration and the verification
        flags are kept.
        """
        self._check_profile(role, profile)
        auth.require_auth(caller)

        with self.store.transaction():
            participant = self.require(caller, role, NotRegisteredError)
            participant.profile = replace(profile, document=participant.profile.document)
            participant.updated_at = self.clock.now()
            self.store.set(participant_key(caller), participant)

        logger.info("Updated %s %s", role.value.lower(), caller)
        return participant

    def update_seller(self, auth: AuthContext, caller: str, profile: SellerProfile) -> Participant:
        return self.update(auth, caller, Role.SELLER, profile)

    def update_buyer(self, auth: AuthContext, caller: str, profile: BuyerProfile) -> Participant:
        return self.update(auth, caller, Role.BUYER, profile)

    def verify(self, auth: AuthContext, inspector: str, identity: str, role: Role) -> Participant:
        """Mark a participant verified (and not rejected)."""
        return self._set_status(auth, inspector, identity, role, verified=True)

    def reject(self, auth: AuthContext, inspector: str, identity: str, role: Role) -> Participant:
        """Mark a participant rejected (and not verified)."""
        return self._set_status(auth, inspector, identity, role, verified=False)

    def verify_seller(self, auth: AuthContext, inspector: str, seller_id: str) -> Participant:
        return self.verify(auth, inspector, seller_id, Role.SELLER)

    def reject_seller(self, auth: AuthContext, inspector: str, seller_id: str) -> Participant:
        return self.reject(auth, inspector, seller_id, Role.SELLER)

    def verify_buyer(self, auth: AuthContext, inspector: str, buyer_id: str) -> Participant:
        return self.verify(auth, inspector, buyer_id, Role.BUYER)

    def reject_buyer(self, auth: AuthContext, inspector: str, buyer_id: str) -> Participant:
        return self.reject(auth, inspector, buyer_id, Role.BUYER)

    # Query methods
    def get(self, identity: str) -> Participant | None:
        """Participant registered under ``identity`` in either role."""
        return self.store.get(participant_key(identity))

    def require(
        self,
        identity: str,
        role: Role,
        error: type[Exception] = ParticipantNotFoundError,
    ) -> Participant:
        """Return the participant if it holds ``role``, else raise ``error``."""
        participant = self.get(identity)
        if participant is None or participant.role != role:
            raise error(f"{role.value.title()} {identity} not found")
        return participant

    def require_verified(self, identity: str, role: Role) -> Participant:
        """Return a registered, verified participant for an acting identity."""
        participant = self.require(identity, role, NotRegisteredError)
        if not participant.verified:
            raise NOT_VERIFIED_ERRORS[role](f"{role.value.title()} {identity} not verified")
        return participant

    def members(self, role: Role) -> list[str]:
        """Identities registered in ``role``, in registration order."""
        return self.store.get(ROLE_LISTS[role], [])

    def count(self, role: Role) -> int:
        return self.store.counter(ROLE_COUNTERS[role])

    def _set_status(
        self,
        auth: AuthContext,
        inspector: str,
        identity: str,
        role: Role,
        verified: bool,
    ) -> Participant:
        self.require_inspector(auth, inspector)

        with self.store.transaction():
            participant = self.require(identity, role)
            participant.verified = verified
            participant.rejected = not verified
            participant.updated_at = self.clock.now()
            self.store.set(participant_key(identity), participant)

        logger.info(
            "%s %s %s",
            "Verified" if verified else "Rejected",
            role.value.lower(),
            identity,
        )
        return participant

    @staticmethod
    def _check_profile(role: Role, profile: SellerProfile | BuyerProfile) -> None:
        expected = PROFILE_TYPES[role]
        if not isinstance(profile, expected):
            raise InvalidArgumentError(
                f"{role.value.title()} requires {expected.__name__}, got {type(profile).__name__}"
            )
