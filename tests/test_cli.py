import csv
import json

import main
from condtrail.export.csv_exporter import CSVExporter

SCRIPT = """
function validar() {
    var monto = DV.getFieldValue('C104')
    if (monto > 1000) {
        DV.setFieldReadOnly('C105', true)
    } else {
        alert('Monto bajo')
    }
    DV.setFieldVisible('C106', false)
}
"""


def _read_csv(path):
    with open(path, encoding="utf-8-sig", newline="") as f:
        return list(csv.DictReader(f))


def test_csv_exporter_marks_unconditional_calls(tmp_path):
    records = [
        {"call": "alert(1)", "condition": None},
        {"call": "alert(2)", "condition": "a mayor que 1", "description": "Monto mayor que 1"},
    ]
    path = CSVExporter(str(tmp_path)).export("out.csv", records)
    rows = _read_csv(path)
    assert rows[0] == {"ID": "1", "Llamada": "alert(1)", "Condicion": "Siempre", "Descripcion": "Siempre"}
    assert rows[1]["Condicion"] == "a mayor que 1"
    assert rows[1]["Descripcion"] == "Monto mayor que 1"


def test_cli_end_to_end_with_descriptors(tmp_path, write_csv):
    script = tmp_path / "form.js"
    script.write_text(SCRIPT, encoding="utf-8")
    data_dir = tmp_path / "data"
    write_csv(data_dir / "handleFunction.csv", ["FuncId", "JspFile"], [["F001", "form"]])
    write_csv(data_dir / "handleJspAttr" / "form.csv", ["id", "title"], [["C104", "Monto"]])
    out_dir = tmp_path / "out"

    status = main.run([
        str(script),
        "--func-id", "F001",
        "--data-dir", str(data_dir),
        "--output-dir", str(out_dir),
    ])
    assert status == 0

    records = json.loads((out_dir / "llamadas_condicionales.json").read_text(encoding="utf-8"))
    assert [r["call"] for r in records] == [
        "DV.setFieldReadOnly('C105', true)",
        "alert('Monto bajo')",
        "DV.setFieldVisible('C106', false)",
    ]
    assert records[0]["condition"] == "DV.getFieldValue('C104') mayor que 1000"
    assert records[0]["description"] == "Monto mayor que 1000"
    assert records[1]["description"] == "no(Monto mayor que 1000)"
    assert records[2]["condition"] is None

    rows = _read_csv(out_dir / "llamadas_condicionales.csv")
    assert rows[2]["Condicion"] == "Siempre"


def test_cli_reports_missing_script(tmp_path, capsys):
    status = main.run([str(tmp_path / "missing.js"), "--output-dir", str(tmp_path)])
    assert status == 1
    assert "ERROR FATAL" in capsys.readouterr().out


def test_cli_reads_xlsx_tables(tmp_path, write_xlsx):
    script = tmp_path / "form.js"
    script.write_text(SCRIPT, encoding="utf-8")
    data_dir = tmp_path / "data"
    write_xlsx(data_dir / "handleFunction.xlsx", ["FuncId", "JspFile"], [["F001", "form"]])
    write_xlsx(data_dir / "handleJspAttr" / "form.xlsx", ["id", "title"], [["C104", "Monto"]])
    out_dir = tmp_path / "out"

    status = main.run([
        str(script),
        "--func-id", "F001",
        "--data-dir", str(data_dir),
        "--table-ext", ".xlsx",
        "--output-dir", str(out_dir),
    ])
    assert status == 0

    records = json.loads((out_dir / "llamadas_condicionales.json").read_text(encoding="utf-8"))
    assert records[0]["description"] == "Monto mayor que 1000"
    assert records[1]["description"] == "no(Monto mayor que 1000)"
