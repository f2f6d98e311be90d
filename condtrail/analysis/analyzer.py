import logging

from lark.exceptions import UnexpectedInput, VisitError

from condtrail.analysis.collector import CallCollector
from condtrail.analysis.conditions import ConditionTranslator
from condtrail.analysis.context import BranchContextTracker
from condtrail.parser import nodes as N
from condtrail.parser.codegen import regenerate
from condtrail.parser.script_parser import ScriptParser

logger = logging.getLogger(__name__)


class ScriptAnalyzer:
    """
    Recorre el árbol del script una sola vez:
    - entrada: variables declaradas, contextos de if/else, llamadas objetivo
    - salida: al dejar un if se restaura el contexto anterior
    """

    def __init__(self, namespace, target_methods, parser=None, translator=None):
        self.namespace = namespace
        self.target_methods = list(target_methods)
        self.parser = parser or ScriptParser()
        self.translator = translator or ConditionTranslator()

    def analyze(self, source_text):
        try:
            tree = self.parser.parse(source_text)
        except (UnexpectedInput, VisitError) as e:
            logger.error("Error parsing script: %s", e)
            return []

        # Estado de una sola ejecución
        self.bindings = {}
        self.tracker = BranchContextTracker(self.translator)
        self.collector = CallCollector(self.namespace, self.target_methods, self.tracker)

        self._walk(tree, None, None)
        return self.collector.records

    def _walk(self, node, parent, field):
        self._enter(node, parent, field)
        for child_field, child in N.iter_children(node):
            self._walk(child, node, child_field)
        self._leave(node)

    def _enter(self, node, parent, field):
        kind = node["type"]

        if kind == N.VARIABLE_DECLARATION:
            for declaration in node["declarations"]:
                if declaration["init"] is not None:
                    self.bindings[declaration["id"]["name"]] = regenerate(declaration["init"])

        is_alternate = parent is not None and parent["type"] == N.IF and field == "alternate"
        if is_alternate:
            # else if / else
            self.tracker.enter_alternate_branch(node, self.bindings)
        elif kind == N.IF:
            self.tracker.enter_conditional(node, self.bindings)

        if kind == N.CALL:
            self.collector.visit_call(node)

    def _leave(self, node):
        if node["type"] == N.IF:
            self.tracker.leave_conditional()


def analyze_conditional_calls(source_text, namespace, target_methods):
    """
    Devuelve [{"call": Str, "condition": Str|None}] en orden de documento.
    Si el script no se puede parsear, registra el error y devuelve [].
    """
    return ScriptAnalyzer(namespace, target_methods).analyze(source_text)
