import math
from dataclasses import dataclass
from arpeggio import PTNodeVisitor, Terminal

from .nodes import (
    ASTNode,
    Expression,
    Variable,
    Constant,
    Add,
    Subtract,
    Multiply,
    Divide,
    Call,
    Statement,
    Assignment,
    VoidCall,
    Loop,
    ErrorStatement,
)


# Names that parse to constants rather than variable references.
RESERVED_CONSTANTS = {
    "pi": math.pi,
    "π": math.pi,
    "e": math.e,
}


@dataclass(frozen=True)
class Position:
    """Represents a position in source code.

    Attributes:
        origin: Where the source came from (a file path or "<string>").
        line: Line number (1-indexed).
        column: Column number (1-indexed).
    """
    origin: str
    line: int
    column: int

    def __str__(self):
        return f"{self.origin}:{self.line}:{self.column}"


def line_col(text: str, position: int) -> tuple[int, int]:
    """Calculate the 1-indexed (line, column) of a character offset in text."""
    if position < 0:
        position = 0
    if position > len(text):
        position = len(text)
    text_before = text[:position]
    line_number = text_before.count('\n') + 1
    last_newline = text_before.rfind('\n')
    return (line_number, position - last_newline)


class ASTBuilderVisitor(PTNodeVisitor):
    """
    Visits the parse tree generated by the PEG grammar in grammar.py and builds the AST defined in nodes.py.
    """

    _BINARY_OPS = {
        '+': Add,
        '-': Subtract,
        '*': Multiply,
        '/': Divide,
    }

    def __init__(self, parser, origin="<string>"):
        """Initialize the visitor with the parser and the source origin.

        Args:
            parser: The Arpeggio parser instance (needed to access input for position conversion)
            origin: Origin identifier used in positions (file path or "<string>")
        """
        super().__init__()
        self.parser = parser
        self.origin = origin

    def visit_parse_tree(self, parse_tree):
        """Visit a parse tree and return the list of statements.

        Args:
            parse_tree: The root node of an Arpeggio parse tree

        Returns:
            The list of Statement nodes of the program
        """
        return self._visit_node(parse_tree)

    def _visit_node(self, node):
        """Recursively visit a parse tree node and return AST.

        Terminal nodes are passed to their visit method when one exists and
        are otherwise returned as their matched text. NonTerminal nodes are
        visited children first; without a visit method their children are
        returned as a list, which the parent flattens into its own children.

        Args:
            node: An Arpeggio parse tree node

        Returns:
            The AST node, text, or list of children for this parse tree node
        """
        if node.rule_name == 'EOF':
            return None

        visit_method = getattr(self, f"visit_{node.rule_name}", None)

        if isinstance(node, Terminal):
            if visit_method:
                return visit_method(node, [])
            return node.value

        children = []
        for child in node:
            child_ast = self._visit_node(child)
            if child_ast is None:
                continue
            if isinstance(child_ast, list):
                children.extend(child_ast)
            else:
                children.append(child_ast)

        if visit_method:
            return visit_method(node, children)
        return children

    def _get_node_position(self, node):
        """Extract position information from an Arpeggio parse tree node.

        Args:
            node: Arpeggio parse tree node

        Returns:
            Position object for the node
        """
        input_str = self.parser.input if hasattr(self.parser, 'input') else ""
        line, column = line_col(input_str, getattr(node, 'position', 0))
        return Position(origin=self.origin, line=line, column=column)

    @staticmethod
    def _expressions(children):
        return [child for child in children if isinstance(child, Expression)]

    def _fold(self, node, children):
        # expr/term: operands are Expression nodes, operators are the matched text
        result = None
        operator = None
        for child in children:
            if isinstance(child, Expression):
                if result is None:
                    result = child
                else:
                    op_class = self._BINARY_OPS[operator]
                    result = op_class(left=result, right=child, position=self._get_node_position(node))
            else:
                operator = child
        if result is None:
            raise ValueError(f"{node.rule_name} should have at least one Expression child")
        return result

    # --- Tokens ---

    def visit_TOK_NUMBER(self, node, children):
        return Constant(value=float(node.value), position=self._get_node_position(node))

    # --- Expressions ---

    def visit_variable(self, node, children):
        # variable rule: (TOK_VARIABLE,)
        name = children[-1]
        if name in RESERVED_CONSTANTS:
            return Constant(value=RESERVED_CONSTANTS[name], position=self._get_node_position(node))
        return Variable(name=name, position=self._get_node_position(node))

    def visit_expr(self, node, children) -> Expression:
        # expr rule: OneOrMore(term, sep=[TOK_ADD, TOK_SUBTRACT])
        return self._fold(node, children)

    def visit_term(self, node, children) -> Expression:
        # term rule: OneOrMore(factor, sep=[TOK_MULTIPLY, TOK_DIVIDE])
        return self._fold(node, children)

    def visit_factor(self, node, children) -> Expression:
        exprs = self._expressions(children)
        if len(exprs) != 1:
            raise ValueError("factor should have exactly one Expression child")
        return exprs[0]

    def visit_paren_expr(self, node, children) -> Expression:
        # paren_expr rule: (TOK_PAREN, expr, TOK_ENDPAREN)
        return self.visit_factor(node, children)

    def visit_arguments(self, node, children):
        # Returned as a tuple so the parent does not flatten it.
        return tuple(self._expressions(children))

    def visit_func_call(self, node, children) -> Call:
        # func_call rule: (TOK_FUNCTION, TOK_PAREN, arguments, TOK_ENDPAREN)
        name = children[0]
        args = next((child for child in children if isinstance(child, tuple)), None)
        if not args:
            raise ValueError("func_call should have at least one argument")
        return Call(name=name, args=args, position=self._get_node_position(node))

    # --- Statements ---

    def visit_assignment(self, node, children) -> Statement:
        # assignment rule: (variable, TOK_ASSIGN, expr)
        exprs = self._expressions(children)
        if len(exprs) != 2:
            raise ValueError("assignment should have a target and an Expression")
        target, value = exprs
        if not isinstance(target, Variable):
            return ErrorStatement(
                message=f"{target} is not a variable",
                phase="assignment error",
                position=self._get_node_position(node),
            )
        return Assignment(name=target.name, expr=value, position=self._get_node_position(node))

    def visit_void_call(self, node, children) -> Statement:
        return VoidCall(call=children[0], position=self._get_node_position(node))

    def visit_step_clause(self, node, children) -> Expression:
        # step_clause rule: (KWD_BY, expr)
        return self._expressions(children)[0]

    def visit_block(self, node, children):
        # Returned as a tuple so the parent does not flatten it.
        return tuple(child for child in children if isinstance(child, Statement))

    def visit_loop(self, node, children) -> Statement:
        # loop rule: for <variable> over [ <expr> , <expr> ")"|"]" Optional(by <expr>) <block>
        exprs = self._expressions(children)
        if len(exprs) not in (3, 4):
            raise ValueError(f"loop has unexpected structure: {len(exprs)} expressions")
        target, start, end = exprs[:3]
        step = exprs[3] if len(exprs) == 4 else None
        body = next((child for child in children if isinstance(child, tuple)), ())
        if not isinstance(target, Variable):
            return ErrorStatement(
                message=f"{target} is not a variable",
                phase="loop error",
                position=self._get_node_position(node),
            )
        return Loop(
            name=target.name,
            start=start,
            end=end,
            step=step,
            inclusive="]" in children,
            body=body,
            position=self._get_node_position(node),
        )

    def visit_sisplot_language(self, node, children) -> list[Statement]:
        # sisplot_language rule: (OneOrMore(statement), EOF)
        return [child for child in children if isinstance(child, ASTNode)]


# vim: set ts=4 sw=4 expandtab:
