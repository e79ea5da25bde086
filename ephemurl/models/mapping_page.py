from dataclasses import dataclass, field

from ephemurl.models.mapping_model import MappingModel


# fmt: off
@dataclass(frozen=True)
class MappingPage:
    items: tuple[MappingModel, ...] = field(default_factory=tuple)  # Live mappings on this page, newest first
    total_pages: int = 1                                            # Always >= 1, even for an empty listing
    page: int = 1                                                   # 1-based page number that was requested
    page_size: int = 10                                             # Maximum number of items per page
    total: int = 0                                                  # Live mappings across all pages
# fmt: on
