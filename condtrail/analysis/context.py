from condtrail.analysis.conditions import CHAIN_JOINER, ConditionTranslator, negate
from condtrail.parser import nodes as N

ROOT = 0


class BranchContextTracker:
    """
    Árbol de contextos de condición que refleja los if abiertos durante el recorrido.

    Los contextos viven en una lista (arena) y se referencian por índice:
    { "condition": Str|None, "test": Str|None, "excluded": [Str],
      "parent": Int|None, "children": [Int] }

    Las ramas else if / else se cuelgan del padre de la rama anterior, de modo
    que una cadena if / else if / else queda como hermanos mutuamente excluyentes.
    """

    def __init__(self, translator=None):
        self.translator = translator or ConditionTranslator()
        self.contexts = [self._new_context(None, None, [], None)]
        self.current = ROOT
        self._stack = []

    def enter_conditional(self, node, bindings):
        test = self.translator.translate(node["test"], bindings)
        self._stack.append(self.current)
        self.current = self._attach(self.current, test, [])
        return self.current

    def enter_alternate_branch(self, node, bindings):
        """
        Rama alternativa de un if. El contexto actual es la rama hermana anterior.
        - else if: no(anteriores) y además <test>, apila igual que un if normal.
        - else:    no(anteriores), no apila (lo restaura la salida del if).
        """
        sibling = self.contexts[self.current]
        if sibling["parent"] is None:
            raise RuntimeError("Rama alternativa sin rama previa")
        excluded = sibling["excluded"] + [sibling["test"]]

        if node["type"] == N.IF:
            test = self.translator.translate(node["test"], bindings)
            self._stack.append(self.current)
        else:
            test = None

        self.current = self._attach(sibling["parent"], test, excluded)
        return self.current

    def leave_conditional(self):
        self.current = self._stack.pop()

    def current_chain(self):
        parts = []
        index = self.current
        while index is not None:
            context = self.contexts[index]
            if context["condition"] is not None:
                parts.append(context["condition"])
            index = context["parent"]
        return CHAIN_JOINER.join(reversed(parts))

    def _attach(self, parent, test, excluded):
        fragments = [negate(t) for t in excluded]
        if test is not None:
            fragments.append(test)
        index = len(self.contexts)
        self.contexts.append(self._new_context(CHAIN_JOINER.join(fragments), test, excluded, parent))
        self.contexts[parent]["children"].append(index)
        return index

    @staticmethod
    def _new_context(condition, test, excluded, parent):
        return {
            "condition": condition,
            "test": test,
            "excluded": excluded,
            "parent": parent,
            "children": [],
        }
