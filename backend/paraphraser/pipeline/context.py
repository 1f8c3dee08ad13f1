from dataclasses import dataclass, field
from typing import Optional, List

from paraphraser.config import DEFAULT_TONE


@dataclass
class ParaphraseContext:
    # Raw input (authoritative)
    text: str
    tone: str = DEFAULT_TONE

    # Stage outputs, in pipeline order
    variations: List[str] = field(default_factory=list)
    selected_index: Optional[int] = None
    selected: Optional[str] = None
    refined: Optional[str] = None
    toned: Optional[str] = None
    result: Optional[str] = None

    completed_stages: List[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.result is not None and not self.errors
