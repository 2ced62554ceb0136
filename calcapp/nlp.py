"""
Natural-language calculation helper.

Examples:
    - "what is 5 plus 3"
    - "calculate 10 percent of 50"
    - "convert 5 meters to feet"
    - "square root of 16"

With a completion backend configured the text is sent to it and the reply is
expected to be a JSON object. Without one, or when the backend fails, a local
word-substitution parser does its best; it makes no promises on ambiguous
input.
"""
import json
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .errors import ExpressionError, LLMBackendError
from .expression import evaluate_expression
from .llm import LLMProvider, Message

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a calculator that turns natural language into arithmetic expressions or unit conversions.
Expressions may only use numbers, + - * / ^ and parentheses.
For calculations, respond with a JSON object:
{"type": "calculation", "expression": "<expression to evaluate>"}

For conversions, respond with:
{"type": "conversion", "expression": "<number to convert>", "conversionUnits": {"from": "<source unit>", "to": "<target unit>"}}

Only respond with the JSON object, nothing else."""

_NUMBER = r"\d+(?:\.\d+)?"

CONVERSION_RE = re.compile(rf"(-?{_NUMBER})\s*([a-z°]+)\s+to\s+([a-z°]+)")
MATH_TOKEN_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+|[-+*/^()]")

# Applied in order; phrases that contain other phrases go first.
WORD_SUBSTITUTIONS = [
    (re.compile(rf"\bsquare root of\s*({_NUMBER})"), r"(\1)^0.5"),
    (re.compile(rf"({_NUMBER})\s*(?:percent|%)\s*of\b"), r"\1/100*"),
    (re.compile(r"\bto the power of\b"), "^"),
    (re.compile(r"\bsquared\b"), "^2"),
    (re.compile(r"\bcubed\b"), "^3"),
    (re.compile(r"\bdivided by\b"), "/"),
    (re.compile(r"\bmultiplied by\b"), "*"),
    (re.compile(r"\bplus\b"), "+"),
    (re.compile(r"\bminus\b"), "-"),
    (re.compile(r"\btimes\b"), "*"),
]


class NLPResultType(str, Enum):
    CALCULATION = "calculation"
    CONVERSION = "conversion"


@dataclass
class NLPResult:
    """What the helper understood, and the computed value for calculations"""
    type: NLPResultType
    expression: str
    result: Optional[float] = None
    error: Optional[str] = None
    conversion_units: Optional[Dict[str, str]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.type.value,
            "expression": self.expression,
            "result": self.result,
        }
        if self.error is not None:
            data["error"] = self.error
        if self.conversion_units is not None:
            data["conversionUnits"] = dict(self.conversion_units)
        return data


def substitute_words(text: str) -> str:
    processed = text.lower()
    for pattern, replacement in WORD_SUBSTITUTIONS:
        processed = pattern.sub(replacement, processed)
    return processed


def handle_basic_calculation(text: str) -> NLPResult:
    """Local fallback: regex conversion detection, then word substitution"""
    lower = text.lower()

    if "convert" in lower or " to " in lower:
        match = CONVERSION_RE.search(lower)
        if match:
            return NLPResult(
                type=NLPResultType.CONVERSION,
                expression=match.group(1),
                conversion_units={"from": match.group(2), "to": match.group(3)},
            )

    expression = "".join(MATH_TOKEN_RE.findall(substitute_words(text)))
    if not expression:
        return NLPResult(
            type=NLPResultType.CALCULATION,
            expression=text,
            error="Could not parse the input. Please try a simpler expression.",
        )

    try:
        return NLPResult(
            type=NLPResultType.CALCULATION,
            expression=expression,
            result=evaluate_expression(expression),
        )
    except ExpressionError as e:
        logger.debug(f"Local parse of {text!r} produced {expression!r}: {e}")
        return NLPResult(
            type=NLPResultType.CALCULATION,
            expression=text,
            error='Failed to parse the input. Try a simpler format like "5 + 3" or "convert 5 meters to feet".',
        )


def _strip_code_fence(content: str) -> str:
    content = content.strip()
    if content.startswith("```"):
        content = content.strip("`")
        if content.lower().startswith("json"):
            content = content[4:]
    return content.strip()


def parse_backend_reply(content: str) -> NLPResult:
    """Turn the backend's JSON reply into a result, evaluating calculations locally"""
    try:
        data = json.loads(_strip_code_fence(content))
    except json.JSONDecodeError as e:
        raise LLMBackendError(f"Reply is not JSON: {content!r}") from e
    if not isinstance(data, dict):
        raise LLMBackendError("Invalid response format")

    kind = data.get("type")
    expression = str(data.get("expression", "")).strip()
    if kind == NLPResultType.CALCULATION.value:
        return NLPResult(
            type=NLPResultType.CALCULATION,
            expression=expression,
            result=evaluate_expression(expression),
        )
    if kind == NLPResultType.CONVERSION.value:
        units = data.get("conversionUnits") or {}
        if not isinstance(units, dict) or not units.get("from") or not units.get("to"):
            raise LLMBackendError("Conversion reply is missing its units")
        return NLPResult(
            type=NLPResultType.CONVERSION,
            expression=expression,
            conversion_units={"from": str(units["from"]), "to": str(units["to"])},
        )
    raise LLMBackendError("Invalid response format")


async def process_natural_language_calculation(text: str,
                                               provider: Optional[LLMProvider] = None) -> NLPResult:
    """Interpret ``text`` as a calculation or a conversion request.

    Conversion results leave ``result`` as None; the caller hands the units to
    the conversion engine.
    """
    if provider is None:
        return handle_basic_calculation(text)

    try:
        response = await provider.complete([
            Message(role="system", content=SYSTEM_PROMPT),
            Message(role="user", content=text),
        ])
        return parse_backend_reply(response.content)
    except (LLMBackendError, ExpressionError) as e:
        logger.warning(f"Error with {provider.name} backend, falling back to basic calculation: {e}")
        return handle_basic_calculation(text)
