from __future__ import annotations

import csv
import io

from workforce_admin.table import ColumnDef, DataTable, build_csv, export_csv, export_filename


class Unprintable:
    def __str__(self) -> str:
        raise RuntimeError("cannot render")


def _parse(text: str) -> list[list[str]]:
    return list(csv.reader(io.StringIO(text)))


def test_export_covers_filtered_set_not_visible_page() -> None:
    rows = [{"id": index, "team": "red" if index % 4 == 0 else "blue"} for index in range(1, 13)]
    columns = [ColumnDef(accessor="id", header="ID"), ColumnDef(accessor="team", header="Team")]
    table = DataTable(rows, columns, page_size=10)
    table.set_column_filter("team", "red")

    parsed = _parse(build_csv(table.processed_rows, table.columns))

    assert parsed[0] == ["ID", "Team"]
    assert len(parsed) == 4


def test_export_spans_every_page() -> None:
    rows = [{"id": index} for index in range(25)]
    columns = [ColumnDef(accessor="id", header="ID")]
    table = DataTable(rows, columns, page_size=10)
    assert len(_parse(build_csv(table.processed_rows, table.columns))) == 26


def test_fields_are_quoted_and_quotes_doubled() -> None:
    columns = [ColumnDef(accessor="note", header="Note")]
    text = build_csv([{"note": 'say "hi"'}], columns)
    assert text == '"Note"\n"say ""hi"""\n'


def test_sequences_and_records_flatten_into_one_field() -> None:
    columns = [ColumnDef(accessor="names", header="Names"), ColumnDef(accessor="parts", header="Parts")]
    rows = [{"names": ["Ana", "Bo"], "parts": [{"name": "api", "done": True}]}]
    parsed = _parse(build_csv(rows, columns))
    assert parsed[1] == ["Ana, Bo", '{"name":"api","done":true}']


def test_unserializable_values_become_placeholder() -> None:
    columns = [ColumnDef(accessor="value", header="Value"), ColumnDef(accessor="empty", header="Empty")]
    parsed = _parse(build_csv([{"value": Unprintable(), "empty": None}], columns))
    assert parsed[1] == ["N/A", ""]


def test_export_filename_falls_back() -> None:
    assert export_filename("Employees") == "Employees.csv"
    assert export_filename("Team/Roster") == "Team_Roster.csv"
    assert export_filename(None) == "export.csv"
    assert export_filename("  ") == "export.csv"


def test_export_csv_writes_file(tmp_path) -> None:
    columns = [ColumnDef(accessor="id", header="ID")]
    path = export_csv([{"id": 1}, {"id": 2}], columns, title="Projects", output_dir=tmp_path / "out")
    assert path == tmp_path / "out" / "Projects.csv"
    assert path.read_text(encoding="utf-8") == '"ID"\n"1"\n"2"\n'
