"""Execute endpoint for script execution."""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from smartlang.runtime.context import ExecutionConfig
from smartlang.runtime.interpreter import Interpreter, bind_accounts
from smartlang.runtime.ledger import Ledger

router = APIRouter()


class ExecuteOptions(BaseModel):
    """Execution knobs, mirroring ExecutionConfig."""
    max_steps: Optional[int] = Field(default=ExecutionConfig.max_steps, ge=1)
    legacy_semantics: bool = False
    trace: bool = False


class ExecuteRequest(BaseModel):
    """Request body for script execution."""
    script: str
    contract: str
    balances: Dict[str, int] = Field(default_factory=dict)
    options: Optional[ExecuteOptions] = None


class ExecuteResponse(BaseModel):
    """Response body for script execution."""
    success: bool
    contract: str
    results: List[Any] = Field(default_factory=list)
    output: List[str] = Field(default_factory=list)
    balances: Dict[str, int] = Field(default_factory=dict)
    steps: int = 0
    execution_time_ms: float
    error: Optional[str] = None
    error_kind: Optional[str] = None


@router.post("/execute", response_model=ExecuteResponse)
async def execute_script(request: ExecuteRequest):
    """Execute a script as `contract` against the supplied balances."""
    if any(amount < 0 for amount in request.balances.values()):
        raise HTTPException(status_code=422, detail="Balances cannot be negative")

    options = request.options or ExecuteOptions()
    config = ExecutionConfig(
        max_steps=options.max_steps,
        legacy_semantics=options.legacy_semantics,
        trace=options.trace,
    )

    ledger = Ledger.from_mapping(request.balances)
    interpreter = Interpreter(config)
    result = interpreter.interpret(request.script, request.contract, ledger, bind_accounts(ledger))

    return ExecuteResponse(
        success=result.success,
        contract=result.contract,
        results=result.results,
        output=result.output,
        balances=result.balances,
        steps=result.steps,
        execution_time_ms=result.execution_time_ms,
        error="; ".join(result.errors) if result.errors else None,
        error_kind=result.error_kind,
    )
