"""
Value types passed between the conversion parser, resolver and formatter.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ConversionKind(str, Enum):
    UNIT = "unit"
    CURRENCY = "currency"


class FailureKind(str, Enum):
    PARSE = "parse_failure"
    UNSUPPORTED = "unsupported_conversion"


@dataclass(frozen=True)
class ConversionRequest:
    """A value plus the two raw unit tokens typed by the user"""
    value: float
    from_unit: str
    to_unit: str


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of a successful conversion"""
    value: float
    from_unit: str
    to_unit: str
    result: float
    kind: ConversionKind = ConversionKind.UNIT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "from": self.from_unit,
            "to": self.to_unit,
            "result": self.result,
            "type": self.kind.value,
        }


@dataclass(frozen=True)
class ConversionFailure:
    """Why a conversion did not produce a result"""
    kind: FailureKind
    message: str
    from_unit: Optional[str] = None
    to_unit: Optional[str] = None

    def __bool__(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.kind.value,
            "message": self.message,
            "from": self.from_unit,
            "to": self.to_unit,
        }
