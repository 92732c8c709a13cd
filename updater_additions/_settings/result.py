"""SubmissionResult dataclass for settings submissions."""

from dataclasses import dataclass, field
from typing import List, Optional

from .._additions.models import AdditionRecord


@dataclass
class SubmissionResult:
    """
    Result of submitting an addition through the settings form.

    Attributes:
        success: Whether the addition was persisted
        record: The stored record (successful submissions only)
        error_message: Rejection reason if the submission failed
        error_type: Name of the rejection exception, e.g. "DuplicateAdditionError"
        redirect_option_pages: Option pages the host should redirect back to
    """

    success: bool
    record: Optional[AdditionRecord] = None
    error_message: Optional[str] = None
    error_type: Optional[str] = None
    redirect_option_pages: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate result state."""
        if self.success and self.error_message:
            raise ValueError("Successful result should not have error_message")
        if not self.success and not self.error_message:
            raise ValueError("Failed result must have error_message")

    @property
    def is_duplicate(self) -> bool:
        return self.error_type == "DuplicateAdditionError"

    @classmethod
    def success_result(
        cls,
        record: AdditionRecord,
        redirect_option_pages: Optional[List[str]] = None,
    ) -> "SubmissionResult":
        """Create a successful submission result."""
        return cls(
            success=True,
            record=record,
            redirect_option_pages=redirect_option_pages or [],
        )

    @classmethod
    def failure_result(
        cls,
        error: Exception,
        redirect_option_pages: Optional[List[str]] = None,
    ) -> "SubmissionResult":
        """Create a failed submission result from the rejection exception."""
        return cls(
            success=False,
            error_message=str(error),
            error_type=type(error).__name__,
            redirect_option_pages=redirect_option_pages or [],
        )
