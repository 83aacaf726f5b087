"""
Rule identifiers produced by the SATySFi grammar.

Tree nodes carry their rule as a plain string; this enum names the ones the
analysis code looks for. Inner rules are the grammar rule names, leaves are
the lower-cased terminal names.
"""

from enum import Enum


class Rule(str, Enum):
    """Rule identifiers the analysis layer depends on."""

    # Headers
    HEADERS = "headers"
    HEADER_STAGE = "header_stage"

    # Bindings
    LET_STMT = "let_stmt"
    LET_INLINE_STMT = "let_inline_stmt"
    LET_BLOCK_STMT = "let_block_stmt"
    LET_MATH_STMT = "let_math_stmt"
    PATTERN = "pattern"

    # Modes
    VERTICAL_MODE = "vertical_mode"
    HORIZONTAL_MODE = "horizontal_mode"
    MATH_MODE = "math_mode"

    # Command arguments
    CMD_EXPR_ARG = "cmd_expr_arg"
    CMD_EXPR_OPTION = "cmd_expr_option"
    MATH_CMD_EXPR_ARG = "math_cmd_expr_arg"
    MATH_CMD_EXPR_OPTION = "math_cmd_expr_option"

    # Leaves
    VAR = "var"
    INLINE_CMD_NAME = "inline_cmd_name"
    BLOCK_CMD_NAME = "block_cmd_name"
    MATH_CMD_NAME = "math_cmd_name"
    STRING_INTERIOR = "string_interior"
    COMMENT = "comment"

    def __str__(self) -> str:
        return self.value
