class DomainError(Exception):
    """Base class for booking domain errors."""


class InvalidRangeError(DomainError):
    pass


class InvalidCapacityError(DomainError):
    pass


class CapacityError(DomainError):
    pass


class ReservationNotFoundError(DomainError):
    pass
