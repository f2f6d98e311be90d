"""Fixtures compartidas: parser de scripts y escritura de tablas auxiliares."""

import pytest
from openpyxl import Workbook

from condtrail.parser.script_parser import ScriptParser


@pytest.fixture(scope="session")
def parser():
    return ScriptParser()


@pytest.fixture
def write_csv():
    def _write(path, header, rows):
        path.parent.mkdir(parents=True, exist_ok=True)
        lines = [",".join(header)] + [",".join(row) for row in rows]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write


@pytest.fixture
def write_xlsx():
    def _write(path, header, rows):
        path.parent.mkdir(parents=True, exist_ok=True)
        workbook = Workbook()
        sheet = workbook.active
        sheet.append(header)
        for row in rows:
            sheet.append(row)
        workbook.save(path)
        return path
    return _write
