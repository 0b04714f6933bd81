import pytest

from sowgen.core.cleaner import clean


def test_end_marker_truncates_trailing_text():
    assert clean("Real text here\n\n---\nIgnored trailing text") == "Real text here"

def test_marker_in_first_half_is_kept():
    text = "Intro\n---\nLine one\nLine two\nLine three\nLine four"
    assert clean(text) == text

def test_last_marker_in_second_half_wins():
    text = "a\n---\nb\nc\nd\ne\n----\nf"
    assert clean(text) == "a\n---\nb\nc\nd\ne"

def test_table_separator_is_not_an_end_marker():
    text = "| A | B |\n|---|---|\n| 1 | 2 |"
    assert clean(text) == text

def test_trailing_boilerplate_removed_repeatedly():
    text = (
        "Scope of the work.\n\n"
        "This section is designed to outline the scope.\n"
        "Note: adjust as required.\n"
        "--"
    )
    assert clean(text) == "Scope of the work."

def test_bold_note_is_removed():
    assert clean("Body text\n\n**Note:** generated content") == "Body text"

def test_collapses_blank_lines_and_trims():
    assert clean("\n\n  First\n\n\n\n\nSecond  \n\n") == "First\n\nSecond"

def test_only_marker_cleans_to_empty():
    assert clean("---") == ""
    assert clean("") == ""
    assert clean(None) == ""

def test_windows_newlines():
    assert clean("One\r\n\r\n---\r\nTwo") == "One"

@pytest.mark.parametrize("text", [
    "Real text here\n\n---\nIgnored trailing text",
    "a\nb\nc\n---\nd\n---\ne",
    "x\n\n\n\ny\nNote: z\n----",
    "| A | B |\n|---|---|\n| 1 | 2 |\n\n---",
    "  \n---\n---\n---\n",
])
def test_clean_is_idempotent(text):
    once = clean(text)
    assert clean(once) == once
