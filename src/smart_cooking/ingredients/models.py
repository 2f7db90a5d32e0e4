import dataclasses
from typing import Any, Dict, List, Optional


@dataclasses.dataclass
class MasterIngredient:
    id: str
    name: str
    category: str
    usage_count: int
    first_used_in: str
    last_used_in: str
    created_at: str
    updated_at: str

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "MasterIngredient":
        """Build from a DynamoDB item as written by master_ingredient_item."""
        return cls(
            id=item["ingredient_id"],
            name=item["name"],
            category=item["category"],
            usage_count=int(item["usage_count"]),
            first_used_in=item["first_used_in"],
            last_used_in=item["last_used_in"],
            created_at=item["created_at"],
            updated_at=item["updated_at"],
        )


@dataclasses.dataclass
class SimilarIngredient:
    id: str
    name: str
    score: float


@dataclasses.dataclass
class SaveResult:
    id: str
    is_new: bool


@dataclasses.dataclass
class ExtractedIngredient:
    original: str
    name: str
    quantity: Optional[str] = None
    unit: Optional[str] = None


@dataclasses.dataclass
class ExtractionResult:
    extracted: List[ExtractedIngredient] = dataclasses.field(default_factory=list)
    saved_to_master: int = 0
    already_exists: int = 0
    failed: int = 0
