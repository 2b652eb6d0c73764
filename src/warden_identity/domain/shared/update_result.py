from dataclasses import dataclass


@dataclass(frozen=True)
class UpdateResult:
    """Raw outcome of a set-fields update, as reported by storage."""

    matched_count: int
    modified_count: int

    @property
    def acknowledged(self) -> bool:
        return self.matched_count > 0
