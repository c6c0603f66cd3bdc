"""DTOs for sample-data seeding."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SeedResult:
    """Result of a sample-data run. error is set when success is False."""

    success: bool
    category_ids: list[str] = field(default_factory=list)
    menu_item_ids: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def categories_created(self) -> int:
        return len(self.category_ids)

    @property
    def menu_items_created(self) -> int:
        return len(self.menu_item_ids)
