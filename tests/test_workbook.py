import pytest
from openpyxl import Workbook, load_workbook

from verbalcalc.errors import WorkbookError
from verbalcalc.workbook import (
    GROUPED_HEADER,
    WORDS_HEADER,
    cell_to_number_text,
    create_sample_workbook,
    spell_workbook,
)


def read_rows(path):
    wb = load_workbook(path)
    rows = [list(row) for row in wb.active.iter_rows(values_only=True)]
    wb.close()
    return rows


@pytest.fixture
def sample(tmp_path):
    return create_sample_workbook(tmp_path / "amounts.xlsx")


class TestSpellWorkbook:

    def test_sample_indian(self, sample, tmp_path):
        output = tmp_path / "out.xlsx"
        assert spell_workbook(sample, output, "indian") == 4

        rows = read_rows(output)
        assert rows[0] == ["Item", "Amount", GROUPED_HEADER, WORDS_HEADER]
        assert rows[1] == ["Office rent", 125000, "1,25,000", "one lakh twenty five thousand"]
        assert rows[2][2:] == ["12,34,567", "twelve lakh thirty four thousand five hundred sixty seven"]
        assert rows[3][2:] == ["9,850.75", "nine thousand eight hundred fifty point seven five"]
        assert rows[4][2:] == ["-4,200", "minus four thousand two hundred"]

    def test_sample_international_by_header(self, sample, tmp_path):
        output = tmp_path / "out.xlsx"
        spell_workbook(sample, output, "international", header="amount")
        rows = read_rows(output)
        assert rows[1][2:] == ["125,000", "one hundred twenty five thousand"]

    def test_text_cells(self, tmp_path):
        path = tmp_path / "text.xlsx"
        wb = Workbook()
        ws = wb.active
        ws.append(["Total"])
        ws.append(["1,000"])
        ws.append(["n/a"])
        ws.append([None])
        ws.append([7])
        wb.save(path)

        assert spell_workbook(path, path, "international", column=1) == 2

        rows = read_rows(path)
        assert rows[1][1:] == ["1,000", "one thousand"]
        assert rows[2][1:] == [None, None]
        assert rows[3][1:] == [None, None]
        assert rows[4][1:] == ["7", "seven"]

    def test_missing_header(self, sample, tmp_path):
        with pytest.raises(WorkbookError):
            spell_workbook(sample, tmp_path / "out.xlsx", "international", header="Price")

    def test_column_out_of_range(self, sample, tmp_path):
        with pytest.raises(WorkbookError):
            spell_workbook(sample, tmp_path / "out.xlsx", "international", column=9)

    def test_no_numeric_column(self, tmp_path):
        path = tmp_path / "empty.xlsx"
        wb = Workbook()
        wb.active.append(["Name"])
        wb.active.append(["Alice"])
        wb.save(path)
        with pytest.raises(WorkbookError):
            spell_workbook(path, tmp_path / "out.xlsx", "international")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            spell_workbook(tmp_path / "nope.xlsx", tmp_path / "out.xlsx", "international")

    @pytest.mark.parametrize("content", [b"not a zip file", b""])
    def test_corrupt_file(self, tmp_path, content):
        path = tmp_path / "broken.xlsx"
        path.write_bytes(content)
        with pytest.raises(WorkbookError, match="Cannot read workbook"):
            spell_workbook(path, tmp_path / "out.xlsx", "international")
        assert not (tmp_path / "out.xlsx").exists()


class TestCellToNumberText:

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value, expected",
        [(None, None), (5, "5"), (5.0, "5"), (0.1, "0.1"), (" 12 ", "12"), (True, "True"), (float("inf"), "")],
    )
    def test_cell_to_number_text(self, value, expected):
        assert cell_to_number_text(value) == expected
