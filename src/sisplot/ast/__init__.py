import logging
import os

from arpeggio import NoMatch
from sisplot import getSisplotParser
from sisplot.errors import ParseError

# Import all AST nodes from nodes
from .nodes import (
    ASTNode,
    Expression,
    Variable,
    Constant,
    BinaryOp,
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

# Import ASTBuilderVisitor and Position
from .builder import ASTBuilderVisitor, Position, RESERVED_CONSTANTS, line_col

# Import serialization functions
from .serialization import (
    ast_to_dict,
    ast_to_json,
    ast_from_dict,
    ast_from_json,
    ast_to_yaml,
    ast_from_yaml,
)

logger = logging.getLogger(__name__)


# --- AST convenience functions ---

def parse_ast(parser, code, origin="<string>") -> list[Statement]:
    """Parse code and return AST nodes using ASTBuilderVisitor.

    This is the main public API for converting sisplot code to an AST.

    Args:
        parser: An Arpeggio parser instance (from getSisplotParser())
        code: The sisplot code string to parse
        origin: Origin identifier for source location tracking (default: "<string>")

    Returns:
        The list of Statement nodes of the program

    Raises:
        ParseError: If the code does not match the grammar. No partial AST
            is returned.
    """
    try:
        parse_tree = parser.parse(code)
    except NoMatch as e:
        # Arpeggio's NoMatch.position is the character offset of the failure
        char_pos = e.position if isinstance(e.position, int) else 0
        line, column = line_col(code, char_pos)
        raise ParseError(str(e), line=line, column=column) from e

    visitor = ASTBuilderVisitor(parser, origin=origin)
    statements = visitor.visit_parse_tree(parse_tree)
    logger.debug("parsed %d top-level statements from %s", len(statements), origin)
    return statements


def getASTfromString(code: str, origin: str = "<string>") -> list[Statement]:
    """
    Parse sisplot source code from a string and return its abstract syntax tree (AST).

    Args:
        code (str): The sisplot source code to be parsed.
        origin (str): Origin identifier for source location tracking (default: "<string>").

    Returns:
        list[Statement]: The statements of the program.

    Example:
        ast = getASTfromString("for x over [0, 3) { render(x, 0) }")
    """
    parser = getSisplotParser()
    return parse_ast(parser, code, origin=origin)


def getASTfromFile(file: str) -> list[Statement]:
    """
    Parse a sisplot source file and return its abstract syntax tree (AST).

    Args:
        file (str): The sisplot source file to be parsed.

    Returns:
        list[Statement]: The statements of the program. Positions carry the
            file path as their origin.

    Raises:
        FileNotFoundError: If the specified file does not exist.
        ParseError: If the file does not match the grammar.
    """
    file_path = os.path.abspath(file)
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File {file} not found")

    with open(file_path, 'r', encoding='utf-8') as f:
        code = f.read()

    return getASTfromString(code, origin=file_path)


# vim: set ts=4 sw=4 expandtab:
