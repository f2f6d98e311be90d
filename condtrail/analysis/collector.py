from condtrail.parser import nodes as N
from condtrail.parser.codegen import regenerate


class CallCollector:
    """Registra las llamadas a los métodos objetivo junto con su cadena de condiciones."""

    def __init__(self, namespace, target_methods, tracker):
        self.namespace = namespace
        self.target_methods = set(target_methods)
        self.tracker = tracker
        self.records = []

    def visit_call(self, node):
        if not self.matches(node["callee"]):
            return
        chain = self.tracker.current_chain()
        self.records.append({
            "call": regenerate(node),
            "condition": chain or None,
        })

    def matches(self, callee):
        # alert(...)
        if callee["type"] == N.IDENTIFIER:
            return callee["name"] in self.target_methods
        # DV.metodo(...)
        if callee["type"] == N.MEMBER and not callee["computed"]:
            obj = callee["object"]
            return (obj["type"] == N.IDENTIFIER
                    and obj["name"] == self.namespace
                    and callee["property"]["name"] in self.target_methods)
        return False
