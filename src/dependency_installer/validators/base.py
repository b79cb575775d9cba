"""Base interface for descriptor validators."""

from abc import ABC, abstractmethod

from dependency_installer.errors import ValidationError
from dependency_installer.models import Descriptor


class BaseValidator(ABC):
    """Abstract base class for descriptor validators.

    Validators report problems rather than raising, so that every complaint
    about a descriptor can be shown at once.
    """

    @abstractmethod
    def validate(self, descriptor: Descriptor) -> list[str]:
        """Check a descriptor for structural completeness.

        Args:
            descriptor: The descriptor to check.

        Returns:
            List of complaint messages (empty if valid).
        """
        ...

    def ensure_valid(self, descriptor: Descriptor) -> None:
        """Validate a descriptor and raise if anything is wrong.

        Raises:
            ValidationError: If the validator reported any complaint.
        """
        complaints = self.validate(descriptor)
        if complaints:
            raise ValidationError(complaints)
