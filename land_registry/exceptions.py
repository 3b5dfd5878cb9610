"""Custom exception hierarchy for land-registry."""


class LandRegistryError(Exception):
    """Base exception for all land-registry errors."""


class UnauthorizedError(LandRegistryError):
    """Raised when the caller cannot act for the given identity."""


class AlreadyExistsError(LandRegistryError):
    """Raised when a record that must be unique already exists."""


class AlreadyInitializedError(AlreadyExistsError):
    """Raised when the registry already has an inspector."""


class AlreadyRegisteredError(AlreadyExistsError):
    """Raised when an identity already holds a seller or buyer record."""


class EntityNotFoundError(LandRegistryError):
    """Raised when a referenced entity does not exist."""


class NotRegisteredError(EntityNotFoundError):
    """Raised when the acting identity has no record for the required role."""


class ParticipantNotFoundError(EntityNotFoundError):
    """Raised when a target seller or buyer does not exist."""


class LandNotFoundError(EntityNotFoundError):
    """Raised when a land id is unknown."""


class RequestNotFoundError(EntityNotFoundError):
    """Raised when a purchase request id is unknown."""


class FractionNotFoundError(EntityNotFoundError):
    """Raised when no fraction record exists at (land id, fraction id)."""


class InvalidEntityStateError(LandRegistryError):
    """Raised when an entity is in an invalid state for the operation."""


class NotInitializedError(InvalidEntityStateError):
    """Raised when a mutation is attempted before an inspector is set."""


class SellerNotVerifiedError(InvalidEntityStateError):
    """Raised when an unverified seller lists land or approves a request."""


class BuyerNotVerifiedError(InvalidEntityStateError):
    """Raised when an unverified buyer creates a purchase request."""


class LandKindMismatchError(InvalidEntityStateError):
    """Raised when the whole/fractional entry point does not match the land."""


class RequestNotApprovedError(InvalidEntityStateError):
    """Raised when paying for a request the seller has not approved."""


class AlreadyPaidError(InvalidEntityStateError):
    """Raised when paying for a request twice."""


class AllFractionsSoldError(InvalidEntityStateError):
    """Raised when a fractional land has no slot left."""


class DuplicateFractionOwnerError(InvalidEntityStateError):
    """Raised when a buyer already holds (or has claimed) a fraction of the land."""


class FractionalLandNotTransferableError(InvalidEntityStateError):
    """Raised when transferring ownership of a fractional land."""


class InvalidArgumentError(LandRegistryError):
    """Raised when an argument is outside its allowed range."""


class InvalidFractionCountError(InvalidArgumentError):
    """Raised when a fraction count is outside 1..max_fractions."""


class ConfigurationError(LandRegistryError):
    """Raised when configuration is invalid or missing."""


class SinkError(LandRegistryError):
    """Raised when a sink operation fails."""
