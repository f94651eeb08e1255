from dataclasses import dataclass, replace
from datetime import datetime


# fmt: off
@dataclass(frozen=True)
class URLRecord:
    target: str             # Original long URL (after scheme normalization)
    shortcode: str          # Unique 8-character short identifier
    created_at: datetime    # Creation time (UTC), never changes afterwards
    click_count: int = 0    # Raw redirect counter, only ever incremented
    id: int = 0             # Unused sequence placeholder, kept for the persisted layout
# fmt: on

    def clicked(self) -> 'URLRecord':
        """Return a copy of this record with the click counter incremented by one."""
        return replace(self, click_count=self.click_count + 1)


@dataclass(frozen=True)
class ShortenResult:
    shortcode: str
    target: str
    created: bool  # False when an existing record for the same URL was reused
