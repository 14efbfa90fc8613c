"""
Port: Parser
Odpowiedzialność: budowa AST (z zachowaniem priorytetów) ze strumienia tokenów.
"""
from typing import Protocol, runtime_checkable

from contracts import ExprAST


@runtime_checkable
class Parser(Protocol):
    def parse(self) -> ExprAST:
        """
        Parses a whole expression and requires end of input after it.
        Returns the root of an immutable ExprAST (NumberNode | BinOpNode).
        Raises UnexpectedTokenError on the first grammar mismatch
        (missing operand, unmatched parenthesis, trailing tokens).
        Raises MalformedLiteralError if an INTEGER token is not a number.
        No partial tree is ever returned.
        """
        ...
