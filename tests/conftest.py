"""Test fixtures for the SmartLang test suite."""
import pytest
import sys
from pathlib import Path
from typing import Dict

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from smartlang.runtime.context import ExecutionConfig, ExecutionContext
from smartlang.runtime.interpreter import Interpreter, bind_accounts
from smartlang.runtime.ledger import Ledger
from smartlang.runtime.values import AccountId


@pytest.fixture
def sample_balances() -> Dict[str, int]:
    """Initial balances for a contract and two users."""
    return {
        "contract": 100,
        "alice": 50,
        "bob": 0,
    }


@pytest.fixture
def ledger(sample_balances) -> Ledger:
    """In-memory ledger seeded with sample balances."""
    return Ledger.from_mapping(sample_balances)


@pytest.fixture
def contract() -> AccountId:
    """Account the scripts execute as."""
    return AccountId("contract")


@pytest.fixture
def interpreter() -> Interpreter:
    """Interpreter with default configuration."""
    return Interpreter()


@pytest.fixture
def legacy_interpreter() -> Interpreter:
    """Interpreter reproducing the original call and multiply semantics."""
    return Interpreter(ExecutionConfig(legacy_semantics=True))


@pytest.fixture
def run(interpreter, contract, ledger):
    """Run a script as `contract` with every ledger account bound by name."""
    def _run(script: str):
        return interpreter.run(script, contract, ledger, bind_accounts(ledger))
    return _run


@pytest.fixture
def context(contract, ledger) -> ExecutionContext:
    """Fresh execution context for direct evaluator tests."""
    return ExecutionContext(me=contract, ledger=ledger)


@pytest.fixture
def sample_script() -> str:
    """Contract paying alice and reporting the remaining balance."""
    return """
    ; pay a fixed fee to alice
    (define fee 10)
    (define pay (lambda (amount to) ($transfer amount to)))
    (provide pay)
    (pay fee alice)
    (println ($balance $me))
    ($balance $me)
    """


@pytest.fixture
def deep_script() -> str:
    """Balanced script nested far deeper than Python's recursion limit."""
    return "(+ 1 " * 3000 + "1" + ")" * 3000
