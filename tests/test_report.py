import csv
import logging

import pytest

import report


SAMPLE = "the quick brown fox\r\njumps over\nthe lazy dog, Twice!\n"


def _write_sample(tmp_path, text=SAMPLE):
    path = tmp_path / "input.txt"
    path.write_text(text, encoding="utf-8")
    return path


def test_read_text_drops_line_breaks(tmp_path):
    path = _write_sample(tmp_path)
    text = report.read_text(path)
    assert "\n" not in text and "\r" not in text
    assert text.startswith("the quick brown foxjumps over")
    assert "T" in text


def test_read_text_fold_case(tmp_path):
    path = _write_sample(tmp_path)
    assert "T" not in report.read_text(path, fold_case=True)


def test_filter_alphabet():
    assert report.filter_alphabet("Hi, there!") == "i there"


def test_freq_table_covers_alphabet_in_order():
    ft = report.freq_table("aab  z")
    assert len(ft) == 27
    assert [s for s, _ in ft] == list(report.ALPHABET)
    counts = dict(ft)
    assert counts[" "] == 2
    assert counts["a"] == 2
    assert counts["b"] == 1
    assert counts["z"] == 1
    assert counts["q"] == 0


@pytest.mark.parametrize("raw", ["abc", "1.5", "", "0", "-3", "11", "+5", "1_000"])
def test_parse_length_rejects(raw):
    with pytest.raises(ValueError):
        report.parse_length(raw, limit=10)


def test_parse_length_accepts_bounds():
    assert report.parse_length("1", limit=10) == 1
    assert report.parse_length(" 10 ", limit=10) == 10


def test_prompt_length_retries_until_valid(caplog):
    answers = iter(["nope", "0", "99", "4"])
    with caplog.at_level(logging.WARNING, logger="report"):
        n = report.prompt_length(10, input_fn=lambda _prompt: next(answers))
    assert n == 4
    assert len(caplog.records) == 3


def test_format_report_layout():
    code_map = {ch: "0" * (i + 1) for i, ch in enumerate(report.ALPHABET)}
    rows = report.totals_rows("ab", code_map)
    lines = report.format_report(code_map, rows).splitlines()
    assert lines[0] == "' ' : 0"
    assert lines[1] == "'a' : 00"
    assert lines[26] == "'z' : " + "0" * 27
    assert lines[27] == "00\t\t2\t\t7"
    assert lines[28] == "000\t\t5\t\t14"


def test_write_csv(tmp_path):
    code_map = {"a": "0", "b": "1"}
    rows = report.totals_rows("abba", code_map)
    out = tmp_path / "totals.csv"
    report.write_csv(out, rows)
    with out.open(newline="", encoding="utf-8") as f:
        got = list(csv.DictReader(f))
    assert [r["char"] for r in got] == ["a", "b", "b", "a"]
    assert got[-1]["huffman_bits"] == "4"
    assert got[-1]["fixed_bits"] == "28"


def test_plot_totals_writes_png(tmp_path):
    rows = report.totals_rows("abba", {"a": "0", "b": "1"})
    out = tmp_path / "totals.png"
    report.plot_totals(rows, out)
    assert out.exists() and out.stat().st_size > 0


def test_main_end_to_end(tmp_path, capsys):
    path = _write_sample(tmp_path)
    out = tmp_path / "out.txt"
    csv_path = tmp_path / "totals.csv"
    png_path = tmp_path / "totals.png"

    rc = report.main([
        str(path), "--length", "5", "--output", str(out),
        "--csv", str(csv_path), "--plot", str(png_path),
    ])
    assert rc == 0

    lines = out.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 27 + 5
    assert lines[0].startswith("' ' : ")
    assert lines[-1].endswith("\t\t35")
    assert csv_path.exists()
    assert png_path.exists()

    printed = capsys.readouterr().out
    assert "Encoded 5 characters" in printed
    assert "35 bits ASCII" in printed


def test_main_prompts_for_length(tmp_path, monkeypatch):
    path = _write_sample(tmp_path)
    answers = iter(["1000000", "3"])
    monkeypatch.setattr("builtins.input", lambda _prompt: next(answers))
    out = tmp_path / "out.txt"
    assert report.main([str(path), "--output", str(out)]) == 0
    assert len(out.read_text(encoding="utf-8").splitlines()) == 27 + 3


def test_main_show_heap_logs_every_merge(tmp_path, caplog):
    path = _write_sample(tmp_path)
    with caplog.at_level(logging.INFO, logger="report"):
        report.main([str(path), "--length", "2", "--output", str(tmp_path / "o.txt"), "--show-heap"])
    merges = [r for r in caplog.records if r.getMessage().startswith("merged")]
    assert len(merges) == 26


def test_main_single_symbol_input(tmp_path):
    path = _write_sample(tmp_path, "aaaa\n")
    out = tmp_path / "out.txt"
    assert report.main([str(path), "--length", "4", "--output", str(out)]) == 0
    lines = out.read_text(encoding="utf-8").splitlines()
    codes = dict(line.split(" : ") for line in lines[:27])
    assert all(len(code) >= 1 for code in codes.values())


def test_main_missing_file(tmp_path):
    with pytest.raises(SystemExit):
        report.main([str(tmp_path / "nope.txt"), "--length", "1"])


def test_main_length_too_big(tmp_path):
    path = _write_sample(tmp_path)
    with pytest.raises(SystemExit):
        report.main([str(path), "--length", "100000", "--output", str(tmp_path / "o.txt")])


def test_main_no_alphabet_characters(tmp_path):
    path = _write_sample(tmp_path, "123!?\n")
    with pytest.raises(SystemExit):
        report.main([str(path), "--length", "1"])


def test_prompt_length_closed_stdin_exits():
    def closed(_prompt):
        raise EOFError

    with pytest.raises(SystemExit):
        report.prompt_length(10, input_fn=closed)
