import re

from condtrail.settings import DEFAULT_NAMESPACE


class Normalizer:
    def __init__(self, namespace=DEFAULT_NAMESPACE):
        self.namespace = namespace
        # Lista de diccionarios: { "nivel":Str, "contexto":Str, "mensaje":Str }
        self.report = []
        ns = re.escape(namespace)

        # Accesores del runtime de formularios -> código de campo desnudo.
        # El orden importa: getFieldValue antes que el genérico .equals().
        self.patterns = [
            (re.compile(ns + r"\.getFieldValue\('([^']*)'\)"), r'\1'),
            (re.compile(ns + r'\.toFloat\(([^)]+)\)'), r'\1'),
            (re.compile(r'\.equals\(([^)]+)\)'), r' = \1'),
            (re.compile(r'SYS_BeFloat\(([^)]+)\)'), r'\1'),
            (re.compile(r'document\.MAINFORM\.([a-zA-Z_][a-zA-Z0-9_]*)\.value'), r'\1'),
            (re.compile(r'document\.getElementById\(([^)]+)\)'), r'\1'),
            (re.compile(r'\$F\.([a-zA-Z_][a-zA-Z0-9_]*)\.value'), r'\1'),
            (re.compile(r'\$E\((.*?)\)\.value'), r'\1'),
        ]
        self._residual = re.compile(r'\b' + ns + r'\.\w+')

    def clean_condition(self, text, context_name="General"):
        """
        Deja solo los códigos de campo en el texto de una condición.
        DV.getFieldValue('C104') mayor que 0  ->  C104 mayor que 0
        """
        if not isinstance(text, str):
            return ''

        for pattern, replacement in self.patterns:
            text = pattern.sub(replacement, text)

        self._audit_condition(text, context_name)
        return text

    def _add_log(self, level, context, message):
        self.report.append({
            "nivel": level,
            "contexto": context,
            "mensaje": message
        })

    def _audit_condition(self, text, context):
        # Accesores que no reconocemos quedan tal cual: avisamos para revisión manual
        for match in self._residual.finditer(text):
            self._add_log("WARNING", context,
                          f"Accesor no reconocido '{match.group(0)}'. Se mantiene sin traducir.")
