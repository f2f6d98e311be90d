"""
Tipos de nodo del árbol sintáctico.

Cada nodo es un dict con la llave "type". El conjunto de tipos es cerrado:
NODE_FIELDS define, para cada tipo, los campos que contienen hijos y el orden
en que se recorren. Cualquier tipo fuera de la tabla es un error.
"""

PROGRAM = "Program"
FUNCTION_DECLARATION = "FunctionDeclaration"
FUNCTION_EXPRESSION = "FunctionExpression"
BLOCK = "BlockStatement"
IF = "IfStatement"
WHILE = "WhileStatement"
DO_WHILE = "DoWhileStatement"
FOR = "ForStatement"
FOR_IN = "ForInStatement"
SWITCH = "SwitchStatement"
SWITCH_CASE = "SwitchCase"
TRY = "TryStatement"
THROW = "ThrowStatement"
RETURN = "ReturnStatement"
BREAK = "BreakStatement"
CONTINUE = "ContinueStatement"
EMPTY = "EmptyStatement"
EXPRESSION_STATEMENT = "ExpressionStatement"
VARIABLE_DECLARATION = "VariableDeclaration"
VARIABLE_DECLARATOR = "VariableDeclarator"
ASSIGNMENT = "AssignmentExpression"
CONDITIONAL = "ConditionalExpression"
LOGICAL = "LogicalExpression"
BINARY = "BinaryExpression"
UNARY = "UnaryExpression"
UPDATE = "UpdateExpression"
CALL = "CallExpression"
NEW = "NewExpression"
MEMBER = "MemberExpression"
ARRAY = "ArrayExpression"
OBJECT = "ObjectExpression"
PROPERTY = "Property"
IDENTIFIER = "Identifier"
LITERAL = "Literal"
THIS = "ThisExpression"

# Campos hijos por tipo, en orden de recorrido (orden del documento).
NODE_FIELDS = {
    PROGRAM: ("body",),
    FUNCTION_DECLARATION: ("id", "params", "body"),
    FUNCTION_EXPRESSION: ("params", "body"),
    BLOCK: ("body",),
    IF: ("test", "consequent", "alternate"),
    WHILE: ("test", "body"),
    DO_WHILE: ("body", "test"),
    FOR: ("init", "test", "update", "body"),
    FOR_IN: ("left", "right", "body"),
    SWITCH: ("discriminant", "cases"),
    SWITCH_CASE: ("test", "consequent"),
    TRY: ("block", "param", "handler", "finalizer"),
    THROW: ("argument",),
    RETURN: ("argument",),
    BREAK: (),
    CONTINUE: (),
    EMPTY: (),
    EXPRESSION_STATEMENT: ("expression",),
    VARIABLE_DECLARATION: ("declarations",),
    VARIABLE_DECLARATOR: ("id", "init"),
    ASSIGNMENT: ("left", "right"),
    CONDITIONAL: ("test", "consequent", "alternate"),
    LOGICAL: ("left", "right"),
    BINARY: ("left", "right"),
    UNARY: ("argument",),
    UPDATE: ("argument",),
    CALL: ("callee", "arguments"),
    NEW: ("callee", "arguments"),
    MEMBER: ("object", "property"),
    ARRAY: ("elements",),
    OBJECT: ("properties",),
    PROPERTY: ("key", "value"),
    IDENTIFIER: (),
    LITERAL: (),
    THIS: (),
}

STATEMENT_TYPES = frozenset([
    PROGRAM, FUNCTION_DECLARATION, BLOCK, IF, WHILE, DO_WHILE, FOR, FOR_IN,
    SWITCH, SWITCH_CASE, TRY, THROW, RETURN, BREAK, CONTINUE, EMPTY,
    EXPRESSION_STATEMENT, VARIABLE_DECLARATION,
])


def make_node(node_type, **fields):
    if node_type not in NODE_FIELDS:
        raise ValueError(f"Tipo de nodo desconocido: {node_type}")
    return {"type": node_type, **fields}


def iter_children(node):
    """Entrega (campo, hijo) en orden de documento, aplanando las listas."""
    try:
        fields = NODE_FIELDS[node["type"]]
    except KeyError:
        raise ValueError(f"Tipo de nodo desconocido: {node.get('type')}") from None

    for field in fields:
        value = node.get(field)
        if value is None:
            continue
        if isinstance(value, list):
            for item in value:
                if item is not None:
                    yield field, item
        else:
            yield field, value
