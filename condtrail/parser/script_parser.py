from lark import Lark

from condtrail.parser.transformer import ScriptTransformer
from condtrail.settings import GRAMMAR_PATH

_LARK_CACHE = {}


def cargar_gramatica(path=GRAMMAR_PATH):
    with open(path, 'r', encoding='utf-8') as file:
        return file.read()


def _build_lark(grammar_path):
    # La tabla LALR se construye una sola vez por gramática
    if grammar_path not in _LARK_CACHE:
        _LARK_CACHE[grammar_path] = Lark(
            cargar_gramatica(grammar_path),
            start='start',
            parser='lalr',
            propagate_positions=True,
        )
    return _LARK_CACHE[grammar_path]


class ScriptParser:
    """
    Proveedor del árbol sintáctico: texto fuente -> nodo Program.
    Los errores de sintaxis salen como lark.exceptions.UnexpectedInput.
    """

    def __init__(self, grammar_path=GRAMMAR_PATH):
        self.lark = _build_lark(grammar_path)
        self.transformer = ScriptTransformer()

    def parse(self, source_text):
        tree = self.lark.parse(source_text)
        return self.transformer.transform(tree)
