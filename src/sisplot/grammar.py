#######################################################################
# Arpeggio PEG Grammar for sisplot
#######################################################################

from arpeggio import (
    Optional, OneOrMore, EOF, Kwd,
    RegExMatch as _
)


# --- sisplot language parsing root ---

def sisplot_language():
    return (OneOrMore(statement), EOF)


# --- Lexical and basic rules ---

def comment_line():
    return _(r'//.*?$', str_repr='comment')


def comment_multi():
    return _(r'(?ms)/\*.*?\*/', str_repr='comment')


def comment():
    return [comment_line, comment_multi]


# --- Tokens ---

def TOK_NUMBER():
    # The sign belongs to the literal; there is no unary minus.
    return _(r'[+-]?(\d*\.\d+|\d+)', str_repr='number')


def TOK_VARIABLE():
    return _(r'[a-zα-ω_][a-z0-9α-ω_]*', str_repr='variable')


def TOK_FUNCTION():
    return _(r'[a-z][a-z0-9_]*', str_repr='function')


def TOK_RANGE_END():
    return _(r'[\])]', str_repr='range end')


def TOK_COMMA():
    return ','


def TOK_ASSIGN():
    return '='


def TOK_PAREN():
    return '('


def TOK_ENDPAREN():
    return ')'


def TOK_BRACE():
    return '{'


def TOK_ENDBRACE():
    return '}'


def TOK_BRACKET():
    return '['


def TOK_ADD():
    return '+'


def TOK_SUBTRACT():
    return '-'


def TOK_MULTIPLY():
    return '*'


def TOK_DIVIDE():
    return '/'


# --- Keywords ---

def KWD_FOR():
    return Kwd('for')


def KWD_OVER():
    return Kwd('over')


def KWD_BY():
    return Kwd('by')


# --- Statements ---

def statement():
    return [
            loop,
            assignment,
            void_call
        ]


def assignment():
    return (variable, TOK_ASSIGN, expr)


def void_call():
    return (func_call,)  # Tuple to prevent eliding the call


def loop():
    return (
        KWD_FOR,
        variable,
        KWD_OVER,
        TOK_BRACKET,
        expr,
        TOK_COMMA,
        expr,
        TOK_RANGE_END,
        Optional(step_clause),
        block
    )


def step_clause():
    return (KWD_BY, expr)


def block():
    return (TOK_BRACE, OneOrMore(statement), TOK_ENDBRACE)


# --- Expressions ---

def expr():
    return OneOrMore(term, sep=[TOK_ADD, TOK_SUBTRACT])


def term():
    return OneOrMore(factor, sep=[TOK_MULTIPLY, TOK_DIVIDE])


def factor():
    return [
            TOK_NUMBER,
            func_call,
            variable,
            paren_expr
        ]


def paren_expr():
    return (TOK_PAREN, expr, TOK_ENDPAREN)


def func_call():
    return (TOK_FUNCTION, TOK_PAREN, arguments, TOK_ENDPAREN)


def arguments():
    return OneOrMore(expr, sep=TOK_COMMA)


def variable():
    return (TOK_VARIABLE,)  # Tuple to prevent eliding the identifier


# vim: set ts=4 sw=4 expandtab:
