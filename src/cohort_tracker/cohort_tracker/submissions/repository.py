from __future__ import annotations

from typing import Protocol, Sequence

from .model import IndividualSubmission, SubmissionRow


class SubmissionRepository(Protocol):
    def list_for_student(self, email: str) -> Sequence[IndividualSubmission]:
        raise NotImplementedError

    def add(self, email: str, submission: IndividualSubmission) -> bool:
        """Returns False when the student does not exist."""

        raise NotImplementedError

    def list_all(self) -> Sequence[SubmissionRow]:
        raise NotImplementedError
