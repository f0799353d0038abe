"""
SmartLang Node Evaluator

Walks a parsed node against a scope of the current run. Atoms:
- NumberNode: its value
- VariableNode: scope lookup
- OperatorNode `$me`: the executing contract's account

Lists dispatch on their head through SpecialForm; any other head is a call to
a user-defined closure.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional
import logging

from smartlang.errors import (
    ArityMismatch,
    CapabilityDenied,
    DivisionByZero,
    InsufficientBalance,
    InvalidOperand,
    MalformedLambda,
    UnboundVariable,
    UnknownForm,
)
from smartlang.runtime.context import ExecutionContext
from smartlang.runtime.values import AccountId, Closure, Value, format_value, is_integer
from smartlang.syntax.nodes import ListNode, Node, NumberNode, OperatorNode, VariableNode

logger = logging.getLogger(__name__)

ME = "$me"


class SpecialForm(Enum):
    BALANCE = "$balance"
    TRANSFER = "$transfer"
    PROVIDE = "provide"
    DEFINE = "define"
    LAMBDA = "lambda"
    PRINTLN = "println"
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    CALL = "<call>"

    @classmethod
    def resolve(cls, head: str) -> "SpecialForm":
        """Special form named by head, or CALL for anything else."""
        try:
            return cls(head)
        except ValueError:
            return cls.CALL


class NodeEvaluator:
    """
    Evaluates SmartLang nodes.

    Holds no per-run state: the ExecutionContext carries the contract id, the
    ledger, the scope arena and the step counter.
    """

    def evaluate(self, node: Node, scope_id: int, ctx: ExecutionContext) -> Value:
        ctx.tick()

        if isinstance(node, NumberNode):
            return node.value
        elif isinstance(node, VariableNode):
            return ctx.environment.lookup(scope_id, node.name)
        elif isinstance(node, OperatorNode):
            if node.symbol == ME:
                return ctx.me
            raise InvalidOperand(f"Unexpected symbol '{node.symbol}' outside of a form")

        if not node.children:
            raise UnknownForm("Empty form ()")

        form = SpecialForm.resolve(node.text)
        if form is SpecialForm.BALANCE:
            return self._eval_balance(node, ctx)
        elif form is SpecialForm.TRANSFER:
            return self._eval_transfer(node, scope_id, ctx)
        elif form is SpecialForm.PROVIDE:
            return self._eval_provide(node, scope_id, ctx)
        elif form is SpecialForm.DEFINE:
            return self._eval_define(node, scope_id, ctx)
        elif form is SpecialForm.LAMBDA:
            return self._eval_lambda(node, scope_id, ctx)
        elif form is SpecialForm.PRINTLN:
            return self._eval_println(node, scope_id, ctx)
        elif form is SpecialForm.ADD:
            return sum(self._integers(node, scope_id, ctx, minimum=2))
        elif form is SpecialForm.SUB:
            a, b = self._integers(node, scope_id, ctx, exactly=2)
            return b - a
        elif form is SpecialForm.MUL:
            return self._eval_mul(node, scope_id, ctx)
        elif form is SpecialForm.DIV:
            return self._eval_div(node, scope_id, ctx)
        else:
            return self._eval_call(node, scope_id, ctx)

    # Ledger forms

    def _eval_balance(self, node: ListNode, ctx: ExecutionContext) -> int:
        """($balance $me): balance of the executing contract."""
        operands = node.operands
        if len(operands) != 1 or not (isinstance(operands[0], OperatorNode)
                                      and operands[0].symbol == ME):
            raise InvalidOperand("$balance only accepts $me as its operand")
        return ctx.ledger.get_balance(ctx.me)

    def _eval_transfer(self, node: ListNode, scope_id: int, ctx: ExecutionContext) -> None:
        """
        ($transfer amount destination): move amount from $me to destination.

        If the ledger refuses the credit, the debit is restored before the
        error propagates.
        """
        operands = node.operands
        if len(operands) != 2:
            raise InvalidOperand(f"$transfer expects amount and destination, got {len(operands)} operand(s)")

        amount = self.evaluate(operands[0], scope_id, ctx)
        destination = self.evaluate(operands[1], scope_id, ctx)

        if not is_integer(amount) or amount < 0:
            raise InvalidOperand(f"$transfer amount must be a non-negative integer, got {format_value(amount)}")
        if not isinstance(destination, AccountId):
            raise InvalidOperand(f"$transfer destination must be an account, got {format_value(destination)}")

        ledger = ctx.ledger
        balance = ledger.get_balance(ctx.me)
        if balance < amount:
            raise InsufficientBalance(ctx.me, balance, amount)

        ledger.set_balance(ctx.me, balance - amount)
        try:
            ledger.set_balance(destination, ledger.get_balance(destination) + amount)
        except Exception:
            ledger.set_balance(ctx.me, balance)
            raise
        logger.debug("Transferred %d from %s to %s", amount, ctx.me, destination)
        return None

    # Binding forms

    def _eval_provide(self, node: ListNode, scope_id: int, ctx: ExecutionContext) -> None:
        """(provide name ...): whitelist callable names in the current scope."""
        for operand in node.operands:
            if not isinstance(operand, VariableNode):
                raise InvalidOperand(f"provide expects identifiers, got '{operand.unparse()}'")
            ctx.environment.add_permitted(scope_id, operand.name)
        logger.debug("Scope %d provides %s", scope_id,
                     sorted(ctx.environment.permitted(scope_id)))
        return None

    def _eval_define(self, node: ListNode, scope_id: int, ctx: ExecutionContext) -> None:
        """(define name expr)"""
        operands = node.operands
        if len(operands) != 2:
            raise InvalidOperand(f"define expects a name and an expression, got {len(operands)} operand(s)")
        target, expr = operands
        if not isinstance(target, VariableNode):
            raise InvalidOperand(f"define target must be an identifier, got '{target.unparse()}'")
        ctx.environment.define(scope_id, target.name, self.evaluate(expr, scope_id, ctx))
        return None

    def _eval_lambda(self, node: ListNode, scope_id: int, ctx: ExecutionContext) -> Closure:
        """
        (lambda (p1 p2 ...) body)

        The closure captures a new child scope of the current scope, not the
        current scope itself.
        """
        operands = node.operands
        if len(operands) != 2:
            raise MalformedLambda("lambda expects a parameter list and a single body")
        params_node, body = operands
        if not isinstance(params_node, ListNode):
            raise MalformedLambda("lambda parameters must be a list")

        params: List[str] = []
        for param in params_node.children:
            if not isinstance(param, VariableNode):
                raise MalformedLambda(f"Lambda should only contain params, got '{param.unparse()}'")
            if param.name in params:
                raise MalformedLambda(f"Duplicate lambda parameter '{param.name}'")
            params.append(param.name)

        return Closure(tuple(params), body, ctx.environment.new_scope(scope_id))

    def _eval_println(self, node: ListNode, scope_id: int, ctx: ExecutionContext) -> None:
        operands = node.operands
        if len(operands) != 1:
            raise InvalidOperand(f"println expects one operand, got {len(operands)}")
        ctx.emit(format_value(self.evaluate(operands[0], scope_id, ctx)))
        return None

    # Arithmetic

    def _integers(self, node: ListNode, scope_id: int, ctx: ExecutionContext,
                  exactly: Optional[int] = None, minimum: Optional[int] = None) -> List[int]:
        """Evaluate the operands of an arithmetic form, all of which must be integers."""
        operands = node.operands
        if exactly is not None and len(operands) != exactly:
            raise InvalidOperand(f"'{node.text}' expects {exactly} operands, got {len(operands)}")
        if minimum is not None and len(operands) < minimum:
            raise InvalidOperand(f"'{node.text}' expects at least {minimum} operands, got {len(operands)}")

        values = []
        for operand in operands:
            value = self.evaluate(operand, scope_id, ctx)
            if not is_integer(value):
                raise InvalidOperand(f"'{node.text}' expects integers, got {format_value(value)}")
            values.append(value)
        return values

    def _eval_mul(self, node: ListNode, scope_id: int, ctx: ExecutionContext) -> int:
        values = self._integers(node, scope_id, ctx, minimum=2)
        if ctx.config.legacy_semantics:
            return sum(values)
        product = 1
        for value in values:
            product *= value
        return product

    def _eval_div(self, node: ListNode, scope_id: int, ctx: ExecutionContext) -> int:
        """(/ a b) is b divided by a, floored."""
        a, b = self._integers(node, scope_id, ctx, exactly=2)
        if a == 0:
            raise DivisionByZero(f"Division of {b} by zero")
        return b // a

    # Calls

    def _eval_call(self, node: ListNode, scope_id: int, ctx: ExecutionContext) -> Value:
        """(name arg ...): call a closure bound to name."""
        head = node.head
        if isinstance(head, (ListNode, NumberNode)):
            raise UnknownForm(f"Form head must be a name, got '{head.unparse()}'")

        name = head.text
        env = ctx.environment
        try:
            func = env.lookup(scope_id, name)
        except UnboundVariable:
            raise UnknownForm(f"Unknown form: {name}") from None
        if not isinstance(func, Closure):
            raise UnknownForm(f"{name} is not a function")

        permitted = env.permitted(env.root_id)
        if permitted and name not in permitted:
            raise CapabilityDenied(name)

        args = node.operands
        if len(args) != len(func.params):
            raise ArityMismatch(name, len(func.params), len(args))

        if ctx.config.legacy_semantics:
            call_scope = func.scope_id
            values = [self._syntactic_argument(arg, ctx) for arg in args]
        else:
            values = [self.evaluate(arg, scope_id, ctx) for arg in args]
            call_scope = env.new_scope(func.scope_id)

        for param, value in zip(func.params, values):
            env.define(call_scope, param, value)

        logger.debug("Calling %s(%s) in scope %d", name,
                     ", ".join(format_value(v) for v in values), call_scope)
        return self.evaluate(func.body, call_scope, ctx)

    def _syntactic_argument(self, node: Node, ctx: ExecutionContext) -> Value:
        """Legacy binding: the argument's literal form, never evaluated."""
        if isinstance(node, NumberNode):
            return node.value
        if isinstance(node, VariableNode):
            return AccountId(node.name)
        if isinstance(node, OperatorNode) and node.symbol == ME:
            return ctx.me
        raise InvalidOperand(f"Legacy calls only accept literal arguments, got '{node.unparse()}'")
