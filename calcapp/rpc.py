"""
HTTP RPC for the calculator core (FastAPI app).
"""
import logging
from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel

from .config import Settings, settings as default_settings
from .conversion import (
    ConversionFailure,
    CurrencyConverter,
    FailureKind,
    format_conversion_result,
    parse_conversion,
    perform_conversion,
)
from .errors import BackendError, ExpressionError
from .expression import evaluate_expression
from .formatting import format_number
from .history import CalculationHistory, HistoryEntry
from .llm import LLMProvider, create_provider
from .nlp import process_natural_language_calculation

logger = logging.getLogger(__name__)


class ConvertRequest(BaseModel):
    text: str
    previous_value: Optional[str] = None


class CalculateRequest(BaseModel):
    expression: str


class NLPRequest(BaseModel):
    text: str


def create_app(config: Optional[Settings] = None,
               provider: Optional[LLMProvider] = None,
               currency: Optional[CurrencyConverter] = None) -> FastAPI:
    config = config or default_settings
    app = FastAPI(title="calcapp RPC")
    app.state.history = CalculationHistory(max_entries=config.system.max_history)
    app.state.provider = provider if provider is not None else create_provider(config.ai)
    app.state.currency = currency or CurrencyConverter(config.currency)

    @app.get("/health")
    async def health() -> dict[str, Any]:
        return {"status": "ok"}

    @app.post("/convert")
    async def convert(req: ConvertRequest, request: Request):
        parsed = parse_conversion(req.text, req.previous_value)
        if parsed is None:
            failure = ConversionFailure(FailureKind.PARSE, f"Could not parse conversion: {req.text!r}")
            raise HTTPException(status_code=422, detail=failure.to_dict())
        try:
            outcome = await perform_conversion(parsed, request.app.state.currency)
        except BackendError as e:
            raise HTTPException(status_code=502, detail=str(e))
        if isinstance(outcome, ConversionFailure):
            raise HTTPException(status_code=422, detail=outcome.to_dict())

        formatted = format_conversion_result(outcome)
        request.app.state.history.add_to_history(HistoryEntry(expression=req.text.strip(), result=formatted))
        return {"result": outcome.to_dict(), "formatted": formatted}

    @app.post("/calculate")
    async def calculate(req: CalculateRequest, request: Request):
        try:
            value = evaluate_expression(req.expression)
        except ExpressionError as e:
            raise HTTPException(status_code=400, detail=str(e))
        display = format_number(value)
        request.app.state.history.add_to_history(HistoryEntry(expression=req.expression.strip(), result=display))
        return {"expression": req.expression, "result": value, "display": display}

    @app.post("/nlp")
    async def nlp(req: NLPRequest, request: Request):
        result = await process_natural_language_calculation(req.text, request.app.state.provider)
        return result.to_dict()

    @app.get("/history")
    async def history(request: Request):
        return {"history": request.app.state.history.to_list()}

    @app.delete("/history")
    async def clear_history(request: Request):
        request.app.state.history.clear_history()
        return {"ok": True}

    return app
