import pytest

from perseus.fileutils import (
    ARRAY_FILE_HEADER,
    read_array_file,
    read_array_with_vector,
    read_floats,
    read_text,
    write_array_file,
    write_array_with_vector,
    write_named_flat_matrix,
    write_named_rows,
    write_named_vector,
    write_object_matrix,
    write_text,
)


def test_text_round_trip(tmp_path):
    path = tmp_path / "note.txt"
    write_text(path, "line one\nline two\n")
    assert read_text(path) == "line one\nline two\n"


def test_read_text_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_text(tmp_path / "absent.txt")


def test_array_file_round_trip(tmp_path):
    path = tmp_path / "a.txt"
    values = [1.0, 2.5, -3.0, 4.25]
    write_array_file(path, values, 2, 2)
    assert read_array_file(path) == (values, 2, 2)


def test_array_file_starts_with_header(tmp_path):
    path = tmp_path / "a.txt"
    write_array_file(path, [0.0] * 9, 3, 3)
    lines = read_text(path).splitlines()
    assert lines[0] == ARRAY_FILE_HEADER
    assert lines[1:3] == ["m=3", "n=3"]
    assert len(lines) == 6


def test_array_file_too_few_values(tmp_path):
    with pytest.raises(ValueError):
        write_array_file(tmp_path / "a.txt", [1.0, 2.0], 2, 2)


def test_array_with_vector_round_trip(tmp_path):
    path = tmp_path / "av.txt"
    values = [0.5, 1.5, 2.5, 3.5, 4.5, 5.5]
    vector = [7.0, -8.0]
    write_array_with_vector(path, values, 2, 3, vector)
    assert read_array_with_vector(path) == (values, 2, 3, vector)


def test_array_with_vector_rows_end_with_semicolon(tmp_path):
    path = tmp_path / "av.txt"
    write_array_with_vector(path, [1.0, 2.0, 3.0, 4.0], 2, 2, [9.0])
    lines = read_text(path).splitlines()
    assert all(line.endswith(";") for line in lines[3:5])
    assert lines[5] == "v=1"


def test_read_array_file_rejects_missing_header(tmp_path):
    path = tmp_path / "bad.txt"
    write_text(path, "m=1\nn=1\n1.0\n")
    with pytest.raises(ValueError):
        read_array_file(path)


def test_named_rows_integers(tmp_path):
    path = tmp_path / "rows.txt"
    write_named_rows(path, [[1, 2], [3, 4]], "a")
    assert read_text(path) == "height_a=2;\nwidth_a=2;\na=[\n1 2 ;\n3 4 \n];"


def test_named_rows_floats_keep_values(tmp_path):
    path = tmp_path / "rows.txt"
    rows = [[0.5, 1.25, 2.0]]
    write_named_rows(path, rows, "f")
    lines = read_text(path).splitlines()
    assert lines[0] == f"height_f={len(rows)};"
    assert [float(tok) for tok in lines[3].split()] == rows[0]
    assert lines[-1] == "];"


def test_named_rows_empty_raises(tmp_path):
    with pytest.raises(ValueError):
        write_named_rows(tmp_path / "rows.txt", [], "a")


def test_named_flat_matrix_ends_with_transpose(tmp_path):
    path = tmp_path / "flat.txt"
    values = [1.0, 2.0, 3.0, 4.0]
    write_named_flat_matrix(path, values, 2, 2, "x")
    lines = read_text(path).splitlines()
    assert lines[-1] == "x = x';"
    numbers = [float(tok) for line in lines[3:5] for tok in line.replace(";", "").split()]
    assert numbers == values


def test_named_vector_integers(tmp_path):
    path = tmp_path / "vec.txt"
    write_named_vector(path, [1, 2, 3], "v")
    assert read_text(path) == "width_v=3;\nv=[1  2  3 ];"


def test_named_vector_floats_parse_back(tmp_path):
    path = tmp_path / "vec.txt"
    values = [0.25, -1.5]
    write_named_vector(path, values, "w")
    body = read_text(path).splitlines()[1]
    inner = body[len("w=["):-len("];")]
    assert [float(tok) for tok in inner.split()] == values


def test_object_matrix_layout(tmp_path):
    path = tmp_path / "obj.txt"
    rows = [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]
    write_object_matrix(path, rows, "m")
    lines = read_text(path).splitlines()
    assert lines[0] == f"m_width={len(rows)}"
    assert lines[1] == f"m_height={len(rows[0])}"
    assert lines[3].count(";") == len(rows) - 1
    assert lines[3].endswith("];")


def test_read_floats_takes_first_values(tmp_path):
    path = tmp_path / "h.txt"
    write_text(path, "0.5 1.5\n2.5 3.5\n")
    assert read_floats(path, 3) == [0.5, 1.5, 2.5]


def test_read_floats_too_few(tmp_path):
    path = tmp_path / "h.txt"
    write_text(path, "1.0 2.0")
    with pytest.raises(ValueError):
        read_floats(path, 5)