from status_bar import render_status, search_prompt


def test_viewing_status_is_padded_to_width():
    text = render_status({"percent": 0, "total_lines": 0}, 30)
    assert text == " 0% of 0 lines".ljust(30)


def test_viewing_status_with_message():
    text = render_status(
        {"percent": 42, "total_lines": 1000, "message": "Pattern not found: x"}, 60
    )
    assert text.rstrip() == " 42% of 1000 lines | Pattern not found: x"


def test_status_is_truncated_to_width():
    text = render_status({"percent": 100, "total_lines": 123456}, 10)
    assert text == " 100% of 1"


def test_searching_status_shows_prompt():
    text = render_status({"searching": True, "search_text": "err", "percent": 50}, 20)
    assert text == "/err".ljust(20)


def test_long_search_input_keeps_its_end_visible():
    assert search_prompt("abcdefghij", 6) == "fghij"
    assert len(search_prompt("x" * 100, 20)) == 19
    assert search_prompt("", 1) == "/"
