import logging
import os
import re

from condtrail import settings
from condtrail.descriptors.table_loader import TableLoader

logger = logging.getLogger(__name__)

FIELD_PATTERN = re.compile(r'\b[A-Z0-9_]+\b')


def resolve_path(base_path, relative_path):
    """Ruta absoluta con separadores '/', usada como llave de caché."""
    return os.path.abspath(os.path.join(base_path, relative_path)).replace('\\', '/')


def registry_file_name(extension=None):
    return settings.FUNCTION_REGISTRY_NAME + (extension or settings.TABLE_EXTENSION)


class TableCache:
    """
    Dos cachés independientes por ruta normalizada:
    - tables:  ruta -> lista de filas (registro de funciones y tablas de atributos)
    - indexes: ruta -> {id: fila}, solo para tablas de atributos
    """

    def __init__(self):
        self.tables = {}
        self.indexes = {}
        self.loads = 0
        self.hits = 0

    def reset(self):
        self.tables.clear()
        self.indexes.clear()
        self.loads = 0
        self.hits = 0


class DescriptorResolver:
    """Traduce códigos de campo (C104, MONTO_TOTAL...) a su título legible."""

    def __init__(self, registry_path=None, attr_dir=None, base_dir=None, cache=None, loader=None,
                 extension=None):
        base_dir = base_dir or os.getcwd()
        data_dir = resolve_path(base_dir, settings.DATA_DIR)
        self.extension = extension or settings.TABLE_EXTENSION
        self.registry_path = resolve_path(
            base_dir, registry_path or os.path.join(data_dir, registry_file_name(self.extension)))
        self.attr_dir = resolve_path(
            base_dir, attr_dir or os.path.join(data_dir, settings.ATTRIBUTE_TABLE_DIR))
        self.cache = cache if cache is not None else TableCache()
        self.loader = loader or TableLoader()

    def load_table(self, path):
        if path in self.cache.tables:
            self.cache.hits += 1
            return self.cache.tables[path]
        rows = self.loader.load(path)
        self.cache.loads += 1
        self.cache.tables[path] = rows
        return rows

    def load_index(self, path):
        index = self.cache.indexes.get(path)
        if index is None:
            rows = self.load_table(path)
            index = {row.get(settings.ATTRIBUTE_ID_COLUMN): row for row in rows}
            self.cache.indexes[path] = index
        else:
            self.cache.hits += 1
        return index

    def attribute_table_path(self, table_name):
        return resolve_path(self.attr_dir, f"{table_name}{self.extension}")

    def resolve(self, function_id, field_id):
        # 1. Tabla de atributos asociada a la función
        registry = self.load_table(self.registry_path)
        function_id = str(function_id)
        entry = next((row for row in registry
                      if row.get(settings.REGISTRY_ID_COLUMN) == function_id), None)
        table_name = entry.get(settings.REGISTRY_TABLE_COLUMN) if entry else None

        if not table_name:
            logger.info("funcId:%s, fieldId:%s sin tabla de atributos asociada", function_id, field_id)
            return field_id

        # 2. Índice por id de la tabla de atributos
        index = self.load_index(self.attribute_table_path(table_name))

        # 3. Búsqueda
        row = index.get(field_id)
        if row is None:
            logger.debug("funcId:%s, fieldId:%s no existe en %s", function_id, field_id, table_name)
            return field_id
        return row.get(settings.ATTRIBUTE_TITLE_COLUMN) or field_id

    def translate_condition_text(self, text, function_id):
        return FIELD_PATTERN.sub(lambda m: self.resolve(function_id, m.group(0)), text)

    def reset(self):
        self.cache.reset()


_default_resolver = None


def get_default_resolver():
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = DescriptorResolver()
    return _default_resolver


def reset_default_resolver():
    global _default_resolver
    _default_resolver = None


def resolve_descriptor(function_id, field_id):
    return get_default_resolver().resolve(function_id, field_id)


def translate_condition_text(text, function_id):
    return get_default_resolver().translate_condition_text(text, function_id)
