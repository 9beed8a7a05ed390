from __future__ import annotations

from bs4 import BeautifulSoup

from pinyin_ruby.chinese_processing import tokenize
from pinyin_ruby.ruby_html import (
    render_page,
    tokens_to_annotated_text,
    tokens_to_html,
)
from pinyin_ruby.tokens import select_variant


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def test_each_character_gets_its_own_ruby(lookup) -> None:
    soup = _soup(tokens_to_html(tokenize("你好，世界！", lookup)))
    rubies = soup.find_all("ruby")
    assert [r.contents[0] for r in rubies] == ["你", "好", "世", "界"]
    assert [r.rt.get_text() for r in rubies] == ["nǐ", "hǎo", "shì", "jiè"]
    assert [r["data-index"] for r in rubies] == ["0", "1", "3", "4"]
    plain = soup.find_all("span", class_="plain-text")
    assert [p.get_text() for p in plain] == ["，", "！"]


def test_zhuyin_and_tone_numbers(lookup) -> None:
    tokens = tokenize("你好", lookup)
    zhuyin = _soup(tokens_to_html(tokens, mode="zhuyin"))
    assert [r.rt.get_text() for r in zhuyin.find_all("ruby")] == ["ㄋㄧˇ", "ㄏㄠˇ"]
    numbered = _soup(tokens_to_html(tokens, tone_display="number"))
    assert [r.rt.get_text() for r in numbered.find_all("ruby")] == ["ni3", "hao3"]


def test_selected_and_polyphonic_classes(lookup) -> None:
    tokens = select_variant(tokenize("你好", lookup), 1, 1)
    soup = _soup(tokens_to_html(tokens, selected_index=1))
    first, second = soup.find_all("ruby")
    assert "selected" not in first["class"]
    assert "polyphonic" not in first["class"]
    assert "selected" in second["class"]
    assert "polyphonic" in second["class"]
    assert second.rt.get_text() == "hào"


def test_lines_become_divs_with_breaks(lookup) -> None:
    soup = _soup(tokens_to_html(tokenize("你好\n世界", lookup)))
    lines = soup.find_all("div", class_="ruby-line")
    assert len(lines) == 2
    assert len(soup.find_all("br")) == 1
    assert [len(line.find_all("ruby")) for line in lines] == [2, 2]


def test_plain_text_is_escaped(lookup) -> None:
    html = tokens_to_html(tokenize("<b>你</b>", lookup))
    soup = _soup(html)
    assert soup.find("b") is None
    assert soup.find("span", class_="plain-text").get_text() == "<b>"


def test_render_page_includes_css() -> None:
    page = render_page("<div>x</div>", title="测试")
    soup = _soup(page)
    assert soup.title.get_text() == "测试"
    assert "ruby-position" in soup.style.get_text()


def test_annotated_text(lookup) -> None:
    tokens = tokenize("你好，丁", lookup)
    assert tokens_to_annotated_text(tokens) == "你(nǐ)好(hǎo)，丁"
    assert tokens_to_annotated_text(tokens, "zhuyin", "number") == "你(ㄋㄧ3)好(ㄏㄠ3)，丁"
