"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException):
    """Loan inputs are non-positive, non-finite or otherwise unusable"""

    pass


class UnknownStageError(DomainException):
    """Tracker record references a stage outside the known pipeline"""

    def __init__(self, stage: object):
        self.stage = stage
        super().__init__(f"Unknown application stage: {stage!r}")


class ProviderFeedError(DomainException):
    """Loan provider feed returned an error or is unavailable"""

    pass
