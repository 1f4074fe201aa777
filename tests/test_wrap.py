import pytest

from logic import wrap, wrap_chars, wrap_px

TEXTS = [
    "The unexamined life is not worth living.",
    "He who thinks great thoughts, often makes great errors, and he who makes great errors learns.",
    "one",
    "a b c d e f g h i j k l m n o p q r s t u v w x y z",
    "Supercalifragilisticexpialidociousnessitude is long but short words follow it",
]


def test_empty_input_gives_no_lines():
    assert wrap_chars("") == []
    assert wrap_chars("   \n\t ") == []
    assert wrap_chars(None) == []


@pytest.mark.parametrize("text", TEXTS)
@pytest.mark.parametrize("width", [5, 12, 38])
def test_lines_fit_except_lone_long_word(text, width):
    for line in wrap_chars(text, width):
        assert len(line) <= width or " " not in line


@pytest.mark.parametrize("text", TEXTS)
@pytest.mark.parametrize("width", [1, 10, 38, 500])
def test_tokens_are_preserved_in_order(text, width):
    lines = wrap_chars(text, width)
    assert " ".join(lines).split() == text.split()


def test_greedy_fill():
    assert wrap_chars("aa bb cc dd", 5) == ["aa bb", "cc dd"]
    assert wrap_chars("aa bb cc dd", 4) == ["aa", "bb", "cc", "dd"]


def test_long_word_is_not_split():
    assert wrap_chars("tiny enormousword x", 6) == ["tiny", "enormousword", "x"]
    assert wrap_chars("enormousword", 3) == ["enormousword"]


def test_whitespace_runs_collapse():
    assert wrap_chars("a    b\n\nc", 38) == ["a b c"]


def test_pixel_wrap_uses_measure():
    measure = lambda s, font: len(s) * 10
    lines = wrap_px("aaa bbb ccc", font=None, max_px=70, measure=measure)
    assert lines == ["aaa bbb", "ccc"]
    assert all(measure(ln, None) <= 70 for ln in lines)


def test_generic_wrap_predicate():
    # Zeilen mit hoechstens zwei Woertern
    lines = wrap("a b c d e", lambda s: s.count(" ") < 2)
    assert lines == ["a b", "c d", "e"]
