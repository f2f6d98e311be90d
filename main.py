import os
import sys
import json
import argparse
import logging
from condtrail import settings
from condtrail.analysis.analyzer import ScriptAnalyzer
from condtrail.parser.normalizer import Normalizer
from condtrail.descriptors.resolver import DescriptorResolver, registry_file_name
from condtrail.export.csv_exporter import CSVExporter


def leer_script(path):
    with open(path, 'r', encoding='utf-8') as f: return f.read()

def guardar_json(output_dir, nombre, datos):
    path = os.path.join(output_dir, nombre)
    with open(path, 'w', encoding='utf-8') as f: json.dump(datos, f, indent=2, ensure_ascii=False)
    return path

def build_arg_parser():
    parser = argparse.ArgumentParser(
        description="Extrae las llamadas condicionales de un script de formulario.")
    parser.add_argument("script", help="Ruta del script a analizar")
    parser.add_argument("--namespace", default=settings.DEFAULT_NAMESPACE,
                        help="Objeto del runtime (DV.metodo(...))")
    parser.add_argument("--methods", nargs="+", default=settings.DEFAULT_METHODS,
                        help="Métodos objetivo")
    parser.add_argument("--func-id", default=None,
                        help="FuncId para traducir códigos de campo a descripciones")
    parser.add_argument("--data-dir", default=settings.DATA_DIR,
                        help="Directorio con handleFunction y handleJspAttr/")
    parser.add_argument("--table-ext", default=settings.TABLE_EXTENSION,
                        choices=settings.TABLE_EXTENSIONS,
                        help="Formato de las tablas auxiliares")
    parser.add_argument("--output-dir", default=settings.OUTPUT_DIR)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser

def describe_records(records, normalizer, resolver, func_id):
    """Agrega a cada registro la condición limpia y, si hay FuncId, traducida."""
    for i, record in enumerate(records, start=1):
        condition = record["condition"]
        if not condition:
            continue
        clean = normalizer.clean_condition(condition, context_name=f"Llamada #{i} {record['call']}")
        if resolver is not None:
            clean = resolver.translate_condition_text(clean, func_id)
        record["description"] = clean
    return records

def run(argv=None):
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    os.makedirs(args.output_dir, exist_ok=True)

    try:
        print("📥 Leyendo script...")
        source = leer_script(args.script)

        print("🔍 Analizando llamadas condicionales...")
        analyzer = ScriptAnalyzer(args.namespace, args.methods)
        records = analyzer.analyze(source)
        if not records:
            print("⚠️  No se encontraron llamadas (o el script no se pudo parsear).")

        print("🧹 Normalizando condiciones...")
        normalizer = Normalizer(namespace=args.namespace)
        resolver = None
        if args.func_id:
            print(f"📚 Traduciendo campos con FuncId {args.func_id}...")
            resolver = DescriptorResolver(
                registry_path=os.path.join(args.data_dir, registry_file_name(args.table_ext)),
                attr_dir=os.path.join(args.data_dir, settings.ATTRIBUTE_TABLE_DIR),
                extension=args.table_ext)
        describe_records(records, normalizer, resolver, args.func_id)

        if normalizer.report:
            print(f"\n⚠️  Se detectaron {len(normalizer.report)} advertencias:")
            for item in normalizer.report:
                print(f"[{item['nivel']}] {item['contexto']}")
                print(f"    {item['mensaje']}")

        CSVExporter(args.output_dir).export(f"{settings.RECORDS_BASENAME}.csv", records)
        guardar_json(args.output_dir, f"{settings.RECORDS_BASENAME}.json", records)

        print("\n✅ PROCESO COMPLETADO")
        print(f"🚀 {len(records)} llamadas exportadas a {args.output_dir}")
        return 0

    except Exception as e:
        import traceback
        traceback.print_exc()
        print(f"\n❌ ERROR FATAL: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(run())
