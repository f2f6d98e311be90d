import csv
import os

from openpyxl import load_workbook

from condtrail.settings import TABLE_ENCODING

EXCEL_EXTENSIONS = (".xlsx", ".xlsm")


class TableLoader:
    def __init__(self, encoding=TABLE_ENCODING, delimiter=','):
        self.encoding = encoding
        self.delimiter = delimiter
        self.load_count = 0

    def load(self, filepath):
        """
        Lee una tabla (CSV o Excel) y devuelve una lista de filas:
        [{'id': 'C104', 'title': 'Monto', ...}, ...]

        La primera fila es la cabecera. Celdas vacías o ausentes quedan en None.
        Si el archivo no existe se propaga el error: las tablas son obligatorias.
        """
        self.load_count += 1
        if os.path.splitext(filepath)[1].lower() in EXCEL_EXTENSIONS:
            return self._load_excel(filepath)
        return self._load_csv(filepath)

    def _load_csv(self, filepath):
        with open(filepath, mode='r', encoding=self.encoding, newline='') as f:
            return self._build_rows(csv.reader(f, delimiter=self.delimiter))

    def _load_excel(self, filepath):
        # Solo la primera hoja, igual que la exportación que genera las tablas
        workbook = load_workbook(filepath, read_only=True, data_only=True)
        try:
            sheet = workbook.worksheets[0]
            return self._build_rows(sheet.iter_rows(values_only=True))
        finally:
            workbook.close()

    def _build_rows(self, raw_rows):
        raw_rows = iter(raw_rows)
        header = next(raw_rows, None)
        if header is None:
            return []
        header = [_cell(h) or '' for h in header]

        rows = []
        for raw in raw_rows:
            values = [_cell(value) for value in raw]
            if not any(values):
                continue
            row = {}
            for index, key in enumerate(header):
                row[key] = values[index] if index < len(values) else None
            rows.append(row)
        return rows


def _cell(value):
    """Texto limpio de una celda; None si está vacía."""
    if value is None:
        return None
    text = str(value).strip()
    return text if text != '' else None
