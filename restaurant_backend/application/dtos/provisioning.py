"""DTOs for schema provisioning (per-object outcomes and the run report)."""

from __future__ import annotations

from dataclasses import dataclass, field

from restaurant_backend.domain.enums import ProvisioningOutcome, SchemaObjectKind


@dataclass(frozen=True)
class ObjectResult:
    """Outcome of ensuring one schema object (Created | AlreadyExists | Failed)."""

    kind: SchemaObjectKind
    object_id: str
    outcome: ProvisioningOutcome
    parent_id: str | None = None
    reason: str | None = None

    @property
    def qualified_id(self) -> str:
        return f"{self.parent_id}.{self.object_id}" if self.parent_id else self.object_id

    @property
    def ok(self) -> bool:
        return self.outcome is not ProvisioningOutcome.FAILED


@dataclass
class ProvisioningReport:
    """Append-only report of a provisioning run.

    aborted is set when the database could not be ensured; cancelled when
    the run stopped on a cancellation signal between top-level objects.
    """

    database_id: str
    results: list[ObjectResult] = field(default_factory=list)
    aborted: bool = False
    cancelled: bool = False

    def add(self, result: ObjectResult) -> ObjectResult:
        self.results.append(result)
        return result

    @property
    def success(self) -> bool:
        return not self.aborted and not self.cancelled and all(r.ok for r in self.results)

    def failed(self) -> list[ObjectResult]:
        return [r for r in self.results if not r.ok]

    def of_kind(self, kind: SchemaObjectKind) -> list[ObjectResult]:
        return [r for r in self.results if r.kind is kind]

    def count(
        self, kind: SchemaObjectKind, outcome: ProvisioningOutcome | None = None
    ) -> int:
        return sum(
            1
            for r in self.results
            if r.kind is kind and (outcome is None or r.outcome is outcome)
        )

    def collection_succeeded(self, collection_id: str) -> bool:
        """True when the collection and every attribute/index attempted under it succeeded."""
        attempted = [
            r
            for r in self.results
            if (r.kind is SchemaObjectKind.COLLECTION and r.object_id == collection_id)
            or r.parent_id == collection_id
        ]
        return bool(attempted) and all(r.ok for r in attempted)

    def summary(self) -> dict[str, dict[str, int]]:
        """Counts per kind and outcome, e.g. {'collection': {'created': 5, ...}}."""
        out: dict[str, dict[str, int]] = {}
        for kind in SchemaObjectKind:
            out[kind.value] = {
                outcome.value: self.count(kind, outcome) for outcome in ProvisioningOutcome
            }
        return out
