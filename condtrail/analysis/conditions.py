import re

from condtrail.parser.codegen import regenerate

# Tabla ordenada operador -> frase. Los operadores largos van antes que sus
# prefijos (">=" antes que ">", "!==" antes que "===" y "!=", "!=" antes que "!").
OPERATOR_PHRASES = [
    (">>>", "desplazado sin signo"),
    (">>", "desplazado a la derecha"),
    ("<<", "desplazado a la izquierda"),
    (">=", "mayor o igual que"),
    ("<=", "menor o igual que"),
    ("!==", "distinto de"),
    ("===", "igual a"),
    ("==", "igual a"),
    ("!=", "distinto de"),
    (">", "mayor que"),
    ("<", "menor que"),
    ("||", "o"),
    ("&&", "y"),
    ("!", "no "),
]

OPERATOR_TABLE = [(re.compile(re.escape(op)), phrase) for op, phrase in OPERATOR_PHRASES]

# Conectores de la cadena de condiciones
CHAIN_JOINER = " y además "
NEGATION = "no({})"

WORD_PATTERN = re.compile(r'\b\w+\b')


def replace_variables(text, bindings):
    """Sustitución de una sola pasada: los valores no se vuelven a sustituir."""
    if not bindings:
        return text
    return WORD_PATTERN.sub(lambda m: bindings.get(m.group(0), m.group(0)), text)


def translate_operators(text):
    for pattern, phrase in OPERATOR_TABLE:
        text = pattern.sub(phrase, text)
    return text


def negate(condition):
    return NEGATION.format(condition)


class ConditionTranslator:
    """Convierte el test de un if en texto legible usando las variables conocidas."""

    def translate(self, test_node, bindings):
        text = regenerate(test_node)
        text = replace_variables(text, bindings)
        return translate_operators(text)
