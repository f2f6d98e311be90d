from lark import Transformer

from condtrail.parser import nodes as N
from condtrail.parser.nodes import make_node


class ScriptTransformer(Transformer):
    """Convierte el árbol de lark en nodos dict etiquetados por "type"."""

    # --- ESTRUCTURA GENERAL ---
    def start(self, items):
        return make_node(N.PROGRAM, body=items)

    def block(self, items):
        return make_node(N.BLOCK, body=items)

    def function_decl(self, items):
        name, params, body = items
        return make_node(N.FUNCTION_DECLARATION, id=self._identifier(name),
                         params=params or [], body=body)

    def function_expr(self, items):
        params, body = items
        return make_node(N.FUNCTION_EXPRESSION, id=None, params=params or [], body=body)

    def params(self, items):
        return [self._identifier(t) for t in items]

    # --- DECLARACIONES ---
    def var_declaration(self, items):
        return make_node(N.VARIABLE_DECLARATION, kind=items[0], declarations=items[1:])

    def var_kind(self, items): return str(items[0])

    def declarator(self, items):
        name, init = items
        return make_node(N.VARIABLE_DECLARATOR, id=self._identifier(name), init=init)

    # --- SENTENCIAS ---
    def if_statement(self, items):
        test, consequent, alternate = items
        return make_node(N.IF, test=test, consequent=consequent, alternate=alternate)

    def while_statement(self, items):
        return make_node(N.WHILE, test=items[0], body=items[1])

    def do_statement(self, items):
        return make_node(N.DO_WHILE, body=items[0], test=items[1])

    def for_statement(self, items):
        init, test, update, body = items
        return make_node(N.FOR, init=init, test=test, update=update, body=body)

    def for_in_statement(self, items):
        head, body = items
        if isinstance(head, tuple):
            left, right = head
        elif head["type"] == N.BINARY and head["operator"] == "in":
            left, right = head["left"], head["right"]
        else:
            raise ValueError("for (...) sin punto y coma debe ser un for-in")
        return make_node(N.FOR_IN, left=left, right=right, body=body)

    def for_in_var(self, items):
        kind, name, right = items
        declarator = make_node(N.VARIABLE_DECLARATOR, id=self._identifier(name), init=None)
        return make_node(N.VARIABLE_DECLARATION, kind=kind, declarations=[declarator]), right

    def switch_statement(self, items):
        return make_node(N.SWITCH, discriminant=items[0], cases=items[1:])

    def case_clause(self, items):
        return make_node(N.SWITCH_CASE, test=items[0], consequent=items[1:])

    def default_clause(self, items):
        return make_node(N.SWITCH_CASE, test=None, consequent=items)

    def try_statement(self, items):
        block, param, handler, finalizer = items
        return make_node(N.TRY, block=block,
                         param=self._identifier(param) if param is not None else None,
                         handler=handler, finalizer=finalizer)

    def throw_statement(self, items):
        return make_node(N.THROW, argument=items[0])

    def return_statement(self, items):
        return make_node(N.RETURN, argument=items[0])

    def break_statement(self, _): return make_node(N.BREAK)
    def continue_statement(self, _): return make_node(N.CONTINUE)
    def empty_statement(self, _): return make_node(N.EMPTY)

    def expr_statement(self, items):
        return make_node(N.EXPRESSION_STATEMENT, expression=items[0])

    # --- EXPRESIONES ---
    def assignment(self, items):
        left, op, right = items
        return make_node(N.ASSIGNMENT, operator=op, left=left, right=right)

    def conditional(self, items):
        test, consequent, alternate = items
        return make_node(N.CONDITIONAL, test=test, consequent=consequent, alternate=alternate)

    def logical(self, items):
        return make_node(N.LOGICAL, operator=items[1], left=items[0], right=items[2])

    def binary(self, items):
        return make_node(N.BINARY, operator=items[1], left=items[0], right=items[2])

    def prefix(self, items):
        op, argument = items
        if op in ("++", "--"):
            return make_node(N.UPDATE, operator=op, argument=argument, prefix=True)
        return make_node(N.UNARY, operator=op, argument=argument, prefix=True)

    def update(self, items):
        return make_node(N.UPDATE, operator=items[1], argument=items[0], prefix=False)

    def member(self, items):
        return make_node(N.MEMBER, object=items[0], property=self._identifier(items[1]), computed=False)

    def index(self, items):
        return make_node(N.MEMBER, object=items[0], property=items[1], computed=True)

    def call(self, items):
        callee, args = items
        return make_node(N.CALL, callee=callee, arguments=args or [])

    def new_expr(self, items):
        name, args = items
        return make_node(N.NEW, callee=self._identifier(name), arguments=args or [])

    def array(self, items):
        return make_node(N.ARRAY, elements=items[0] or [])

    def arguments(self, items):
        return items

    def object_literal(self, items):
        return make_node(N.OBJECT, properties=items[0] or [])

    def properties(self, items):
        return items

    def object_property(self, items):
        key, value = items
        return make_node(N.PROPERTY, key=key, value=value)

    # --- ATOMOS ---
    def identifier(self, items):
        return self._identifier(items[0])

    def number(self, items):
        raw = str(items[0])
        if raw.lower().startswith("0x"):
            value = int(raw, 16)
        else:
            value = float(raw) if ('.' in raw or 'e' in raw.lower()) else int(raw)
        return make_node(N.LITERAL, value=value, raw=raw)

    def string(self, items):
        raw = str(items[0])
        return make_node(N.LITERAL, value=raw[1:-1], raw=raw)

    def regex(self, items):
        raw = str(items[0])
        end = raw.rindex("/")
        return make_node(N.LITERAL, value=raw, raw=raw,
                         regex={"pattern": raw[1:end], "flags": raw[end + 1:]})

    def keyword_literal(self, items):
        word = str(items[0])
        if word == "this":
            return make_node(N.THIS)
        value = {"true": True, "false": False, "null": None}[word]
        return make_node(N.LITERAL, value=value, raw=word)

    # --- OPERADORES ---
    def _op(self, items): return str(items[0])

    assign_op = or_op = and_op = eq_op = rel_op = add_op = mul_op = _op
    bitor_op = bitxor_op = bitand_op = shift_op = _op
    unary_op = update_op = _op

    def _identifier(self, token):
        return make_node(N.IDENTIFIER, name=str(token))
