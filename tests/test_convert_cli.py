from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

import convert
from pinyin_ruby.history import load_history


@pytest.fixture(autouse=True)
def isolated_env(history_path, monkeypatch):
    monkeypatch.setenv("PINYIN_RUBY_HISTORY", str(history_path))
    monkeypatch.delenv("PINYIN_RUBY_MODE", raising=False)
    monkeypatch.delenv("PINYIN_RUBY_TONE_DISPLAY", raising=False)
    monkeypatch.delenv("PINYIN_RUBY_ZHUYIN_MAP", raising=False)


def test_annotates_text_and_records_history(capsys, history_path) -> None:
    convert.main(["你好，世界！"])
    out = capsys.readouterr().out.strip()
    assert out == "你(nǐ)好(hǎo)，世(shì)界(jiè)！"
    assert [item.input_text for item in load_history(history_path)] == ["你好，世界！"]


def test_zhuyin_with_tone_numbers(capsys, history_path) -> None:
    convert.main(["你好", "--zhuyin", "--tone-number", "--no-history"])
    assert capsys.readouterr().out.strip() == "你(ㄋㄧ3)好(ㄏㄠ3)"
    assert load_history(history_path) == []


def test_html_output_file(tmp_path) -> None:
    source = tmp_path / "story.txt"
    source.write_text("你好\n世界", encoding="utf-8")
    output = tmp_path / "story.html"
    convert.main(["-i", str(source), "--html", "-o", str(output), "--no-history"])

    soup = BeautifulSoup(output.read_text(encoding="utf-8"), "html.parser")
    assert len(soup.find_all("div", class_="ruby-line")) == 2
    assert len(soup.find_all("ruby")) == 4


def test_history_listing_and_clear(capsys) -> None:
    convert.main(["你好"])
    capsys.readouterr()
    convert.main(["--history"])
    assert "你好" in capsys.readouterr().out
    convert.main(["--clear-history"])
    capsys.readouterr()
    convert.main(["--history"])
    assert "No conversions yet." in capsys.readouterr().out


def test_blank_input_exits_with_error() -> None:
    with pytest.raises(SystemExit) as exc:
        convert.main(["   "])
    assert exc.value.code == 1


def test_invalid_mode_from_env(monkeypatch) -> None:
    monkeypatch.setenv("PINYIN_RUBY_MODE", "ipa")
    with pytest.raises(SystemExit) as exc:
        convert.main(["你好"])
    assert exc.value.code == 1


def test_zhuyin_overrides_from_env(capsys, tmp_path, monkeypatch) -> None:
    overrides = tmp_path / "zhuyin.json"
    overrides.write_text('{"ni": "NI"}', encoding="utf-8")
    monkeypatch.setenv("PINYIN_RUBY_ZHUYIN_MAP", str(overrides))
    convert.main(["你", "--zhuyin", "--no-history"])
    assert capsys.readouterr().out.strip() == "你(NIˇ)"
