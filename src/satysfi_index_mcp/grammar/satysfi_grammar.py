"""
Lark grammar for the SATySFi subset understood by the analysis server.

The grammar is LALR(1) and relies on Lark's contextual lexer: horizontal
text, math text and program tokens overlap heavily, so every construct that
can be followed by tokens of a different mode gets its own rule, aliased to
the shared tree name (``horizontal_mode``, ``vertical_mode``,
``math_mode``). That keeps the lookahead sets of their reduce states apart.

Named terminals surface in the tree as leaves; their rule identifier is the
lower-cased terminal name (``VAR`` -> ``var``) unless TERMINAL_RULES maps
it elsewhere. Terminals starting with an underscore are punctuation and
keywords and never reach the tree.

String literals are delimited by one to three backticks; the interior of an
n-backtick literal may contain shorter backtick runs.
"""

# Start rules accepted by LarkGrammarEngine.parse().
START_RULES = ("program", "header_stage", "type_stmt", "let_stmt")

# Leaf rule identifiers for terminals that share a meaning.
TERMINAL_RULES = {
    "STRING_INTERIOR_2": "string_interior",
    "STRING_INTERIOR_3": "string_interior",
}

SATYSFI_GRAMMAR = r"""
// ---------------------------------------------------------------- document

program: headers? preamble (_IN expr)?
       | headers? expr_body?

headers: (header_stage | header_require | header_import)+
header_stage: _STAGE_KW STAGE
header_require: _REQUIRE_KW PKGNAME
header_import: _IMPORT_KW PKGNAME

preamble: statement+

// ---------------------------------------------------------------- statements

?statement: let_stmt
          | let_rec_stmt
          | let_inline_stmt
          | let_block_stmt
          | let_math_stmt
          | type_stmt
          | open_stmt

let_stmt: _LET pattern arg* _type_annot? _EQ expr
let_rec_stmt: _LET _REC let_rec_binding (_AND let_rec_binding)*
let_rec_binding: pattern arg* _type_annot? _EQ expr

let_inline_stmt: _LET_INLINE VAR INLINE_CMD_NAME arg* _EQ expr
               | _LET_INLINE INLINE_CMD_NAME arg* _EQ expr
let_block_stmt: _LET_BLOCK VAR BLOCK_CMD_NAME arg* _EQ expr
              | _LET_BLOCK BLOCK_CMD_NAME arg* _EQ expr
let_math_stmt: _LET_MATH MATH_CMD_NAME arg* _EQ expr

type_stmt: _TYPE type_name _EQ type_expr
open_stmt: _OPEN CTOR

_type_annot: _COLON type_expr

// ---------------------------------------------------------------- patterns

arg: pattern
   | _OPT_PARAM pattern

pattern: VAR
       | WILDCARD
       | _LPAREN _RPAREN
       | _LPAREN pattern _RPAREN
       | _LPAREN pattern (_COMMA pattern)+ _RPAREN

// ---------------------------------------------------------------- types

type_expr: type_prod (_ARROW type_prod)*
type_prod: type_unary (_STAR type_unary)*
type_unary: _type_atom type_name*
_type_atom: type_name
          | TYPE_VAR
          | _LPAREN type_expr _RPAREN
type_name: VAR

// ---------------------------------------------------------------- expressions

?expr: let_in_expr
     | expr_body

?expr_body: if_expr
          | fun_expr
          | bin_operation

let_in_expr: statement _IN expr
if_expr: _IF expr _THEN expr _ELSE expr
fun_expr: _FUN arg+ _ARROW expr

?bin_operation: app_expr (BINOP app_expr)*

?app_expr: application
         | atom
         | negation

application: atom _app_arg+
_app_arg: atom
        | optional_arg
optional_arg: _OPT_PARAM atom
negation: _MINUS app_expr

?atom: VAR
     | QUALIFIED_VAR
     | CTOR
     | INT
     | FLOAT
     | LENGTH
     | unit_const
     | _LPAREN expr _RPAREN
     | tuple
     | list
     | record
     | record_access
     | string_literal
     | horizontal_literal
     | vertical_literal
     | math_literal

unit_const: _LPAREN _RPAREN
tuple: _LPAREN expr (_COMMA expr)+ _RPAREN
list: _LBRACKET _list_items? _RBRACKET
record: _RECORD_OPEN _record_fields? _RECORD_CLOSE
record_field: VAR _EQ expr
record_access: atom _HASH VAR

string_literal: _BACKTICK STRING_INTERIOR? _BACKTICK
              | _BACKTICK2 STRING_INTERIOR_2 _BACKTICK2
              | _BACKTICK3 STRING_INTERIOR_3 _BACKTICK3

_list_items: expr (_SEMICOLON expr)* _SEMICOLON?
_record_fields: record_field (_SEMICOLON record_field)* _SEMICOLON?

horizontal_literal: _LBRACE horizontal? _RBRACE -> horizontal_mode
vertical_literal: _VERT_OPEN block_cmd* _GT -> vertical_mode
math_literal: _MATH_OPEN math_item* _RBRACE -> math_mode

// ---------------------------------------------------------------- command arguments

_cmd_arg: cmd_expr_arg
        | cmd_expr_option

cmd_expr_arg: _LPAREN expr? _RPAREN
            | _LBRACKET _list_items? _RBRACKET
            | _RECORD_OPEN _record_fields? _RECORD_CLOSE
cmd_expr_option: _OPT_OPEN expr _RPAREN

// ---------------------------------------------------------------- horizontal mode

?horizontal: horizontal_single
           | horizontal_bullets

horizontal_single: _horizontal_token+
_horizontal_token: HORIZONTAL_TEXT
                 | ESCAPED_CHAR
                 | inline_cmd
                 | inline_math
                 | horizontal_string

horizontal_bullets: horizontal_bullet+
horizontal_bullet: BULLET horizontal_single?

inline_cmd: INLINE_CMD_NAME _cmd_arg* _SEMICOLON
          | INLINE_CMD_NAME _cmd_arg* _inline_text_arg+

_inline_text_arg: inline_horizontal_arg
                | inline_vertical_arg

inline_horizontal_arg: _LBRACE horizontal? _RBRACE -> horizontal_mode
inline_vertical_arg: _LT block_cmd* _GT -> vertical_mode
inline_math: _MATH_OPEN math_item* _RBRACE -> math_mode
horizontal_string: _BACKTICK STRING_INTERIOR? _BACKTICK
                 | _BACKTICK2 STRING_INTERIOR_2 _BACKTICK2
                 | _BACKTICK3 STRING_INTERIOR_3 _BACKTICK3

// ---------------------------------------------------------------- vertical mode

block_cmd: BLOCK_CMD_NAME _cmd_arg* _SEMICOLON
         | BLOCK_CMD_NAME _cmd_arg* _block_text_arg+

_block_text_arg: block_horizontal_arg
               | block_vertical_arg

block_horizontal_arg: _LBRACE horizontal? _RBRACE -> horizontal_mode
block_vertical_arg: _LT block_cmd* _GT -> vertical_mode

// ---------------------------------------------------------------- math mode

?math_item: math_cmd
          | MATH_TEXT
          | math_group

math_group: _LBRACE math_item* _RBRACE
math_cmd: MATH_CMD_NAME _math_cmd_arg*

_math_cmd_arg: math_group
             | math_cmd_expr_arg
             | math_cmd_expr_option
             | math_cmd_horizontal_arg
             | math_cmd_vertical_arg

math_cmd_expr_arg: _MATH_EXPR_OPEN expr _RPAREN
                 | _MATH_LIST_OPEN _list_items? _RBRACKET
                 | _MATH_RECORD_OPEN _record_fields? _RECORD_CLOSE
math_cmd_expr_option: _OPT_OPEN expr _RPAREN
math_cmd_horizontal_arg: _MATH_HORZ_OPEN horizontal? _RBRACE -> horizontal_mode
math_cmd_vertical_arg: _MATH_VERT_OPEN block_cmd* _GT -> vertical_mode

// ---------------------------------------------------------------- terminals

_STAGE_KW: "@stage:"
_REQUIRE_KW: "@require:"
_IMPORT_KW: "@import:"
STAGE: /0|1|persistent/
PKGNAME: /[^\s%]+/

_LET: "let"
_REC: "rec"
_AND: "and"
_LET_INLINE: "let-inline"
_LET_BLOCK: "let-block"
_LET_MATH: "let-math"
_TYPE: "type"
_OPEN: "open"
_IN: "in"
_IF: "if"
_THEN: "then"
_ELSE: "else"
_FUN: "fun"

VAR: /[a-z][-a-zA-Z0-9]*/
QUALIFIED_VAR.2: /(?:[A-Z][a-zA-Z0-9]*\.)+[a-z][-a-zA-Z0-9]*/
CTOR: /[A-Z][a-zA-Z0-9]*/
TYPE_VAR: /'[a-z][a-zA-Z0-9]*/
WILDCARD: "_"

LENGTH.3: /[0-9]+(?:\.[0-9]+)?[a-z]+/
FLOAT.2: /[0-9]+\.[0-9]+/
INT: /[0-9]+/

BINOP: /\+\+|\+'|-'|\*'|\|\||\|>|&&|::|==|<>|<=|>=|[-+*\/^<>]/

STRING_INTERIOR.2: /[^`]+/
STRING_INTERIOR_2.2: /(?:[^`]|`(?!`))+/
STRING_INTERIOR_3.2: /(?:[^`]|`(?!``))+/
_BACKTICK: "`"
_BACKTICK2: "``"
_BACKTICK3: "```"

INLINE_CMD_NAME: /\\[a-zA-Z][-a-zA-Z0-9]*/
BLOCK_CMD_NAME: /\+[a-zA-Z][-a-zA-Z0-9]*/
MATH_CMD_NAME: /\\[a-zA-Z][-a-zA-Z0-9]*/

HORIZONTAL_TEXT: /[^\\{}<>%$#;|*`\s](?:[^\\{}<>%$#;|*`\n]*[^\\{}<>%$#;|*`\s])?/
ESCAPED_CHAR: /\\[^a-zA-Z0-9\s]/
BULLET: /\*+/
MATH_TEXT: /[^\\{}%$`!?\s]+/

_VERT_OPEN: "'<"
_MATH_OPEN: "${"
_MATH_EXPR_OPEN.2: "!("
_MATH_LIST_OPEN.2: "!["
_MATH_RECORD_OPEN.2: "!(|"
_MATH_HORZ_OPEN.2: "!{"
_MATH_VERT_OPEN.2: "!<"
_OPT_OPEN.2: "?:("
_OPT_PARAM.2: "?:"
_RECORD_OPEN: "(|"
_RECORD_CLOSE: "|)"
_LPAREN: "("
_RPAREN: ")"
_LBRACKET: "["
_RBRACKET: "]"
_LBRACE: "{"
_RBRACE: "}"
_LT: "<"
_GT: ">"
_SEMICOLON: ";"
_COMMA: ","
_EQ: "="
_COLON: ":"
_ARROW: "->"
_STAR: "*"
_MINUS: "-"
_HASH: "#"

COMMENT: /%[^\n]*/
WS: /[ \t\f\r\n]+/

%ignore WS
%ignore COMMENT
"""
