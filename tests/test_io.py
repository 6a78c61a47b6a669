import pytest

from giniforest import ConfigurationError, build_tree, read_csv, write_csv
from giniforest.io import dataset_from_frame

CSV = """color,diameter,shape,label
yellow,4,round,apple
green,5,long,cucumber
green,10,round,watermelon
yellow,NA,round,lemon
red,3,round,apple
"""


def test_read_csv_types_cells(tmp_path):
    path = tmp_path / "fruit.csv"
    path.write_text(CSV.replace("NA", "3.5"))
    data = read_csv(path)
    assert data.schema.columns == ("color", "diameter", "shape", "label")
    assert len(data) == 5
    assert data[0] == ("yellow", 4.0, "round", "apple")
    assert isinstance(data[0][1], float)
    assert isinstance(data[0][0], str)


def test_read_csv_drops_missing_rows(tmp_path):
    path = tmp_path / "fruit.csv"
    path.write_text(CSV)
    data = read_csv(path, na_values="NA")
    assert len(data) == 4
    assert "lemon" not in data.labels()


def test_read_csv_integer_columns_and_text_labels(tmp_path):
    path = tmp_path / "ints.csv"
    path.write_text("age,sex,label\n63,m,1\n37,f,0\n")
    data = read_csv(path)
    assert data[0] == (63, "m", "1")
    assert type(data[0][0]) is int


def test_unlabeled_file_reads_but_cannot_train(tmp_path):
    path = tmp_path / "unlabeled.csv"
    path.write_text("color,diameter\nred,3\n")
    data = read_csv(path)
    assert len(data) == 1
    with pytest.raises(ConfigurationError):
        build_tree(data)


def test_custom_label_column(tmp_path):
    path = tmp_path / "target.csv"
    path.write_text("target;x\nyes;1\nno;2\n")
    data = read_csv(path, label="target", sep=";")
    assert data.schema.label_index == 0
    assert data.labels() == ["yes", "no"]


def test_write_csv_round_trip(tmp_path, fruit):
    path = tmp_path / "out.csv"
    write_csv(fruit, path)
    back = read_csv(path)
    assert back.schema.columns == fruit.schema.columns
    assert back.labels() == fruit.labels()
    assert [row[1] for row in back] == [float(row[1]) for row in fruit]


def test_dataset_from_frame_bool_columns_are_text():
    pd = pytest.importorskip("pandas")
    frame = pd.DataFrame({"flag": [True, False], "label": ["a", "b"]})
    data = dataset_from_frame(frame)
    assert data[0] == ("True", "a")


def test_read_csv_dtype_makes_codes_nominal(tmp_path):
    from giniforest import EqualityQuestion

    path = tmp_path / "codes.csv"
    path.write_text("age,sex,label\n50,1,yes\n50,0,no\n50,1,yes\n50,0,no\n")
    data = read_csv(path, dtype={"sex": str})
    assert data[0] == (50, "1", "yes")
    tree = build_tree(data)
    assert isinstance(tree.question, EqualityQuestion)
    assert tree.question.column == 1


def test_heart_disease_example_runs_on_a_short_file(tmp_path, monkeypatch, capsys):
    import runpy
    import sys
    from pathlib import Path

    header = ",".join(f"c{i}" for i in range(14))
    rows = [",".join(str((r * (i + 1)) % 4) for i in range(13)) + f",{r % 2}" for r in range(12)]
    path = tmp_path / "heart.csv"
    path.write_text(header + "\n" + "\n".join(rows) + "\n")

    script = Path(__file__).resolve().parents[1] / "examples" / "heart_disease_quickstart.py"
    monkeypatch.setattr(sys, "argv", [str(script), str(path)])
    runpy.run_path(str(script), run_name="__main__")
    out = capsys.readouterr().out
    assert "Size of training dataset: 12" in out
    assert "Size of test dataset: 0" in out
