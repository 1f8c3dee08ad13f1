from dataclasses import dataclass
from typing import List


@dataclass
class StageResult:
    is_valid: bool
    errors: List[str]

    @classmethod
    def success(cls):
        return cls(is_valid=True, errors=[])

    @classmethod
    def failure(cls, errors: List[str]):
        return cls(is_valid=False, errors=errors)
