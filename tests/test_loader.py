import asyncio

import pytest

from propsearch.config import PROJECT_TABLE, VARIANT_TABLE, ADDRESS_TABLE
from propsearch.data.loader import load_table, read_table, read_all_tables
from propsearch.exceptions import SourceUnavailable, TableParseError

from conftest import write_tables


def test_load_table_returns_text_rows_in_file_order(data_dir):
    rows = load_table(PROJECT_TABLE, data_dir)
    assert [r["id"] for r in rows] == ["p1", "p2", "p3"]
    assert rows[1]["status"] == "Under Construction"
    assert all(isinstance(v, str) for row in rows for v in row.values())


def test_blank_cells_stay_empty_strings(data_dir):
    rows = load_table(VARIANT_TABLE, data_dir)
    assert rows[1]["propertyImages"] == ""


def test_quoted_fields_keep_commas(data_dir):
    rows = load_table(ADDRESS_TABLE, data_dir)
    assert rows[0]["fullAddress"] == "Baner Road, Pune, Maharashtra"
    assert rows[0]["pincode"] == "411045"


def test_missing_file_is_source_unavailable(tmp_path):
    with pytest.raises(SourceUnavailable) as exc:
        read_table(PROJECT_TABLE, tmp_path)
    assert exc.value.table == PROJECT_TABLE


def test_row_with_extra_field_is_parse_error(tmp_path):
    write_tables(tmp_path, {"project.csv": (
        "id,projectName,projectType,projectCategory,status,possessionDate,cityId\n"
        "p1,A,R,A,Ready,2024,c1\n"
        "p2,B,R,A,Ready,2024,c1,extra\n"
    )})
    with pytest.raises(TableParseError):
        read_table(PROJECT_TABLE, tmp_path)


def test_row_with_missing_field_is_parse_error(tmp_path):
    write_tables(tmp_path, {"project.csv": (
        "id,projectName,projectType,projectCategory,status,possessionDate,cityId\n"
        "p1,A,R,A,Ready,2024,c1\n"
        "p2,B,R\n"
    )})
    with pytest.raises(TableParseError, match="too few fields"):
        read_table(PROJECT_TABLE, tmp_path)


def test_missing_required_column_is_parse_error(tmp_path):
    write_tables(tmp_path, {"project.csv": "id,projectName\np1,A\n"})
    with pytest.raises(TableParseError, match="missing column"):
        read_table(PROJECT_TABLE, tmp_path)


def test_empty_file_is_parse_error(tmp_path):
    write_tables(tmp_path, {"project.csv": ""})
    with pytest.raises(TableParseError):
        read_table(PROJECT_TABLE, tmp_path)


def test_read_all_tables_returns_four_frames(data_dir):
    projects, addresses, configs, variants = asyncio.run(read_all_tables(data_dir))
    assert len(projects) == 3
    assert len(addresses) == 2
    assert len(configs) == 4
    assert len(variants) == 6


def test_read_all_tables_fails_when_one_source_missing(data_dir):
    (data_dir / "ProjectAddress.csv").unlink()
    with pytest.raises(SourceUnavailable) as exc:
        asyncio.run(read_all_tables(data_dir))
    assert exc.value.table == ADDRESS_TABLE


def test_every_row_with_extra_field_is_parse_error(tmp_path):
    write_tables(tmp_path, {"project.csv": (
        "id,projectName,projectType,projectCategory,status,possessionDate,cityId\n"
        "p1,A,R,A,Ready,2024,c1,extra\n"
        "p2,B,R,A,Ready,2024,c1,extra\n"
    )})
    with pytest.raises(TableParseError, match="more fields"):
        read_table(PROJECT_TABLE, tmp_path)


def test_invalid_utf8_is_parse_error(tmp_path):
    write_tables(tmp_path)
    (tmp_path / "project.csv").write_bytes(
        b"id,projectName,projectType,projectCategory,status,possessionDate,cityId\n"
        b"p1,\xff\xfeSkyline,R,A,Ready,2024,c1\n"
    )
    with pytest.raises(TableParseError, match="UTF-8") as exc:
        read_table(PROJECT_TABLE, tmp_path)
    assert exc.value.table == PROJECT_TABLE
