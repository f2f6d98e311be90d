import csv
import os

ALWAYS = "Siempre"


class CSVExporter:
    def __init__(self, output_dir):
        self.output_dir = output_dir

    def export(self, filename, records):
        path = os.path.join(self.output_dir, filename)
        fieldnames = ["ID", "Llamada", "Condicion", "Descripcion"]

        with open(path, 'w', newline='', encoding='utf-8-sig') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction='ignore')
            writer.writeheader()

            for i, record in enumerate(records, start=1):
                condition = record.get("condition")
                writer.writerow({
                    "ID": i,
                    "Llamada": record.get("call", ""),
                    "Condicion": condition if condition else ALWAYS,
                    # Sin tablas de descriptores la descripción es la condición misma
                    "Descripcion": record.get("description") or condition or ALWAYS,
                })

        return path
