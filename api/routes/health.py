"""Health check endpoint."""

from fastapi import APIRouter

from smartlang import __version__
from smartlang.errors import SmartLangError
from smartlang.runtime.interpreter import Interpreter
from smartlang.runtime.ledger import Ledger
from smartlang.runtime.values import AccountId

router = APIRouter()

# Exercises the parser, a closure call and a transfer in one run.
READINESS_SCRIPT = "(define f (lambda (n) (* n 2))) ($transfer (f 3) sink) ($balance $me)"


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": __version__,
        "service": "smartlang-api"
    }


def check_runtime() -> bool:
    """Run a fixed script against a scratch ledger and check its outcome."""
    ledger = Ledger.from_mapping({"health": 10})
    try:
        values = Interpreter().run(READINESS_SCRIPT, "health", ledger, {"sink": AccountId("sink")})
    except SmartLangError:
        return False
    return values[-1] == 4 and ledger.to_dict() == {"health": 4, "sink": 6}


@router.get("/health/ready")
async def readiness_check():
    """Readiness check endpoint."""
    runtime_ok = check_runtime()
    return {
        "ready": runtime_ok,
        "checks": {
            "runtime": runtime_ok,
        }
    }
