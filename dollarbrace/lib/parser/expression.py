"""
Expression resolver.

Evaluates small Python expressions such as "${py:3+3}" or
"${py:${retries} * 2}". Only literals and operators are accepted: names,
attribute access, calls, subscripts and comprehensions are rejected, so a
property value can never reach into the interpreter.

Failure policy:
- addressed through its prefix, a failing expression raises
  ExpressionEvaluationError
- used without a prefix (`use_without_prefix=True`), a failing expression is
  reported as PropertyNotFoundError so that later resolvers in a chain may
  still answer
"""

import ast
import operator
from typing import Any, Callable, Optional, Self
from dollarbrace.config.settings import appsettings
from dollarbrace.lib.errors import ExpressionEvaluationError, PropertyNotFoundError
from dollarbrace.lib.log import LOG
from dollarbrace.lib.parser.base import PropertyFilter

MAX_EXPONENT: int = 1000
MAX_SEQUENCE_LENGTH: int = 100_000

BINARY_OPERATORS: dict[type[ast.operator], Callable[[Any, Any], Any]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}

UNARY_OPERATORS: dict[type[ast.unaryop], Callable[[Any], Any]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
    ast.Not: operator.not_,
}

COMPARE_OPERATORS: dict[type[ast.cmpop], Callable[[Any, Any], Any]] = {
    ast.Eq: operator.eq,
    ast.NotEq: operator.ne,
    ast.Lt: operator.lt,
    ast.LtE: operator.le,
    ast.Gt: operator.gt,
    ast.GtE: operator.ge,
    ast.In: lambda left, right: left in right,
    ast.NotIn: lambda left, right: left not in right,
}


def repetition_check(left: Any, right: Any) -> None:
    """Reject a sequence repetition longer than MAX_SEQUENCE_LENGTH."""
    for sequence, count in ((left, right), (right, left)):
        if isinstance(sequence, (str, list, tuple)) and isinstance(count, int):
            if len(sequence) * count > MAX_SEQUENCE_LENGTH:
                raise ValueError(
                    f"Repetition longer than {MAX_SEQUENCE_LENGTH} items"
                )


def node_evaluate(node: ast.AST) -> Any:
    """Evaluate one node of a restricted expression tree.

    Raises:
        ValueError: If the node is not an allowed construct
    """
    if isinstance(node, ast.Expression):
        return node_evaluate(node.body)
    if isinstance(node, ast.Constant):
        return node.value
    if isinstance(node, ast.Tuple):
        return tuple(node_evaluate(element) for element in node.elts)
    if isinstance(node, ast.List):
        return [node_evaluate(element) for element in node.elts]
    if isinstance(node, ast.UnaryOp) and type(node.op) in UNARY_OPERATORS:
        return UNARY_OPERATORS[type(node.op)](node_evaluate(node.operand))
    if isinstance(node, ast.BinOp) and type(node.op) in BINARY_OPERATORS:
        left: Any = node_evaluate(node.left)
        right: Any = node_evaluate(node.right)
        if isinstance(node.op, ast.Pow) and abs(right) > MAX_EXPONENT:
            raise ValueError(f"Exponent {right} exceeds {MAX_EXPONENT}")
        if isinstance(node.op, ast.Mult):
            repetition_check(left, right)
        return BINARY_OPERATORS[type(node.op)](left, right)
    if isinstance(node, ast.BoolOp):
        result: Any = None
        for value in node.values:
            result = node_evaluate(value)
            # and: stop at the first falsy value; or: at the first truthy one
            if bool(result) != isinstance(node.op, ast.And):
                return result
        return result
    if isinstance(node, ast.Compare):
        current: Any = node_evaluate(node.left)
        for op, comparator in zip(node.ops, node.comparators):
            if type(op) not in COMPARE_OPERATORS:
                raise ValueError(f"Unsupported comparison: {type(op).__name__}")
            following: Any = node_evaluate(comparator)
            if not COMPARE_OPERATORS[type(op)](current, following):
                return False
            current = following
        return True
    if isinstance(node, ast.IfExp):
        if node_evaluate(node.test):
            return node_evaluate(node.body)
        return node_evaluate(node.orelse)
    raise ValueError(f"Unsupported expression element: {type(node).__name__}")


def expression_evaluate(expression: str) -> str:
    """Evaluate a restricted Python expression and return its string form.

    Raises:
        SyntaxError: If the expression does not parse
        ValueError: If the expression uses a construct that is not allowed
        ArithmeticError, TypeError: If evaluation fails
    """
    tree: ast.Expression = ast.parse(expression, mode="eval")
    return str(node_evaluate(tree))


class ExpressionResolver:
    """Resolver evaluating restricted Python expressions.

    Attributes:
        use_without_prefix: Also try every name that lacks the prefix,
            reporting failures as "not found"
        prefix: None when used without prefix, so chains try it on any name
    """

    def __init__(
        self: Self,
        use_without_prefix: bool = False,
        prefix: Optional[str] = None,
    ) -> None:
        self.expression_prefix: str = prefix or appsettings.expressionPrefix
        self.use_without_prefix: bool = use_without_prefix
        self.prefix: Optional[str] = None if use_without_prefix else self.expression_prefix

    def resolve(self: Self, name: str, property_filter: PropertyFilter) -> str:
        explicit: bool = name.startswith(self.expression_prefix)
        if explicit:
            expression: str = name[len(self.expression_prefix) :]
        elif self.use_without_prefix:
            expression = name
        else:
            raise PropertyNotFoundError(name)

        expression = property_filter.substitute(expression).strip()
        try:
            return expression_evaluate(expression)
        except (SyntaxError, ValueError, ArithmeticError, TypeError) as e:
            LOG(f"Evaluation of '{expression}' failed: {e}")
            if explicit:
                raise ExpressionEvaluationError(expression, str(e)) from e
            raise PropertyNotFoundError(name) from e
