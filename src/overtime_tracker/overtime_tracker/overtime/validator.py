from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from ..common.validators import require_max_length, require_present
from ..core.constants import MAX_DESCRIPTION_LENGTH
from ..core.exceptions import InvalidTimeRangeError, MissingFieldError, UnknownTechnicianError
from .model import PendingFields, RecordDraft


@dataclass(frozen=True)
class RecordValidator:
    """Fail-fast validation of a candidate record.

    Rules run in a fixed order and the first failing rule's error is raised:
    required fields, roster membership (when enforced), required description
    (when configured), description length, and finally ``start < end``.
    """

    roster: Sequence[str] = field(default_factory=tuple)
    enforce_roster: bool = False
    require_description: bool = False
    max_description_length: int = MAX_DESCRIPTION_LENGTH

    def validate(self, pending: PendingFields) -> RecordDraft:
        technician = require_present(pending.technician_name, "Technician")
        start = require_present(pending.start_time, "Start time")
        end = require_present(pending.end_time, "End time")

        if self.enforce_roster and technician not in self.roster:
            raise UnknownTechnicianError(f"Unknown technician: {technician}")

        description = pending.work_description or ""
        if self.require_description and not description.strip():
            raise MissingFieldError("Work description is required")
        require_max_length(description, "Work description", self.max_description_length)

        if start >= end:
            raise InvalidTimeRangeError("Start time must be before end time")

        return RecordDraft(
            technician_name=technician,
            start_time=start,
            end_time=end,
            work_description=description,
        )

