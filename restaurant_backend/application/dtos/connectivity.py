"""Result of a single backend connectivity check."""

from dataclasses import dataclass

from restaurant_backend.domain.enums import CheckStatus


@dataclass(frozen=True)
class CheckResult:
    name: str
    status: CheckStatus
    message: str
    count: int | None = None

    @property
    def ok(self) -> bool:
        return self.status is not CheckStatus.ERROR
