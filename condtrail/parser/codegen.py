"""
Regeneración de código fuente a partir de nodos.

El texto sale normalizado: operadores binarios separados por un espacio,
argumentos separados por ", " y paréntesis solo donde la precedencia los exige.
"""
from condtrail.parser import nodes as N

INDENT = "    "

# Niveles de precedencia (mayor = liga más fuerte)
ASSIGNMENT = 1
CONDITIONAL = 2
LOGICAL_OR = 3
UNARY = 13
POSTFIX = 14
CALL = 16
PRIMARY = 17

BINARY_PRECEDENCE = {
    "||": 3,
    "&&": 4,
    "|": 5,
    "^": 6,
    "&": 7,
    "==": 8, "!=": 8, "===": 8, "!==": 8,
    "<": 9, ">": 9, "<=": 9, ">=": 9, "in": 9, "instanceof": 9,
    "<<": 10, ">>": 10, ">>>": 10,
    "+": 11, "-": 11,
    "*": 12, "/": 12, "%": 12,
}

WORD_OPERATORS = ("typeof", "void", "delete")


def regenerate(node):
    """Texto fuente equivalente para cualquier subárbol."""
    if node["type"] in N.STATEMENT_TYPES:
        return _statement(node, 0)
    return _expression(node)[0]


def _operand(node, min_prec):
    text, prec = _expression(node)
    return f"({text})" if prec < min_prec else text


def _arguments(items):
    return ", ".join(_operand(arg, ASSIGNMENT) for arg in items)


def _expression(node):
    kind = node["type"]

    if kind == N.IDENTIFIER:
        return node["name"], PRIMARY
    if kind == N.LITERAL:
        return node["raw"], PRIMARY
    if kind == N.THIS:
        return "this", PRIMARY
    if kind == N.ARRAY:
        return f"[{_arguments(node['elements'])}]", PRIMARY
    if kind == N.FUNCTION_EXPRESSION:
        params = ", ".join(p["name"] for p in node["params"])
        return f"function ({params}) {_statement(node['body'], 0)}", PRIMARY
    if kind == N.OBJECT:
        if not node["properties"]:
            return "{}", PRIMARY
        return "{" + ", ".join(_expression(p)[0] for p in node["properties"]) + "}", PRIMARY
    if kind == N.PROPERTY:
        key = node["key"]
        key_text = key["name"] if key["type"] == N.IDENTIFIER else key["raw"]
        return f"{key_text}: {_operand(node['value'], ASSIGNMENT)}", ASSIGNMENT

    if kind == N.MEMBER:
        obj = _operand(node["object"], CALL)
        if node["computed"]:
            return f"{obj}[{_expression(node['property'])[0]}]", CALL
        return f"{obj}.{node['property']['name']}", CALL
    if kind == N.CALL:
        return f"{_operand(node['callee'], CALL)}({_arguments(node['arguments'])})", CALL
    if kind == N.NEW:
        return f"new {_operand(node['callee'], CALL)}({_arguments(node['arguments'])})", CALL

    if kind == N.UPDATE:
        if node["prefix"]:
            return node["operator"] + _operand(node["argument"], UNARY), UNARY
        return _operand(node["argument"], POSTFIX) + node["operator"], POSTFIX
    if kind == N.UNARY:
        op = node["operator"]
        argument = _operand(node["argument"], UNARY)
        # "- -x" no debe fusionarse en "--x"
        if op in WORD_OPERATORS or (op in "+-" and argument[0] in "+-"):
            return f"{op} {argument}", UNARY
        return op + argument, UNARY

    if kind in (N.BINARY, N.LOGICAL):
        op = node["operator"]
        prec = BINARY_PRECEDENCE[op]
        # Asociatividad izquierda: el operando derecho exige precedencia estricta
        left = _operand(node["left"], prec)
        right = _operand(node["right"], prec + 1)
        return f"{left} {op} {right}", prec

    if kind == N.CONDITIONAL:
        test = _operand(node["test"], LOGICAL_OR)
        consequent = _operand(node["consequent"], ASSIGNMENT)
        alternate = _operand(node["alternate"], ASSIGNMENT)
        return f"{test} ? {consequent} : {alternate}", CONDITIONAL
    if kind == N.ASSIGNMENT:
        left = _operand(node["left"], POSTFIX)
        right = _operand(node["right"], ASSIGNMENT)
        return f"{left} {node['operator']} {right}", ASSIGNMENT

    raise ValueError(f"No es una expresión: {kind}")


def _declaration(node):
    parts = []
    for decl in node["declarations"]:
        if decl["init"] is None:
            parts.append(decl["id"]["name"])
        else:
            parts.append(f"{decl['id']['name']} = {_operand(decl['init'], ASSIGNMENT)}")
    return f"{node['kind']} {', '.join(parts)}"


def _statement(node, level):
    kind = node["type"]
    pad = INDENT * level

    if kind == N.PROGRAM:
        return "\n".join(_statement(s, level) for s in node["body"])
    if kind == N.BLOCK:
        if not node["body"]:
            return "{}"
        inner = "\n".join(INDENT * (level + 1) + _statement(s, level + 1) for s in node["body"])
        return "{\n" + inner + "\n" + pad + "}"
    if kind == N.FUNCTION_DECLARATION:
        params = ", ".join(p["name"] for p in node["params"])
        return f"function {node['id']['name']}({params}) {_statement(node['body'], level)}"
    if kind == N.VARIABLE_DECLARATION:
        return _declaration(node) + ";"
    if kind == N.EXPRESSION_STATEMENT:
        text = _expression(node["expression"])[0]
        # al inicio de sentencia "{" y "function" cambian de significado
        if text.startswith(("{", "function")):
            text = f"({text})"
        return text + ";"

    if kind == N.IF:
        text = f"if ({_expression(node['test'])[0]}) {_statement(node['consequent'], level)}"
        if node["alternate"] is not None:
            text += f" else {_statement(node['alternate'], level)}"
        return text
    if kind == N.WHILE:
        return f"while ({_expression(node['test'])[0]}) {_statement(node['body'], level)}"
    if kind == N.DO_WHILE:
        return f"do {_statement(node['body'], level)} while ({_expression(node['test'])[0]});"
    if kind == N.FOR:
        init = node["init"]
        if init is None:
            init_text = ""
        elif init["type"] == N.VARIABLE_DECLARATION:
            init_text = _declaration(init)
        else:
            init_text = _expression(init)[0]
        test = _expression(node["test"])[0] if node["test"] is not None else ""
        update = _expression(node["update"])[0] if node["update"] is not None else ""
        return f"for ({init_text}; {test}; {update}) {_statement(node['body'], level)}"
    if kind == N.FOR_IN:
        left = node["left"]
        if left["type"] == N.VARIABLE_DECLARATION:
            left_text = _declaration(left)
        else:
            left_text = _expression(left)[0]
        right = _expression(node["right"])[0]
        return f"for ({left_text} in {right}) {_statement(node['body'], level)}"
    if kind == N.SWITCH:
        lines = [f"switch ({_expression(node['discriminant'])[0]}) {{"]
        lines += [INDENT * (level + 1) + _statement(case, level + 1) for case in node["cases"]]
        return "\n".join(lines) + "\n" + pad + "}"
    if kind == N.SWITCH_CASE:
        head = "default:" if node["test"] is None else f"case {_expression(node['test'])[0]}:"
        body = [INDENT * (level + 1) + _statement(s, level + 1) for s in node["consequent"]]
        return "\n".join([head] + body)
    if kind == N.TRY:
        text = f"try {_statement(node['block'], level)}"
        if node["handler"] is not None:
            text += f" catch ({node['param']['name']}) {_statement(node['handler'], level)}"
        if node["finalizer"] is not None:
            text += f" finally {_statement(node['finalizer'], level)}"
        return text

    if kind == N.THROW:
        return f"throw {_expression(node['argument'])[0]};"
    if kind == N.RETURN:
        if node["argument"] is None:
            return "return;"
        return f"return {_expression(node['argument'])[0]};"
    if kind == N.BREAK:
        return "break;"
    if kind == N.CONTINUE:
        return "continue;"
    if kind == N.EMPTY:
        return ";"

    raise ValueError(f"No es una sentencia: {kind}")
