from zbplugins.runcode import RunRequest, cut_too_long, parse_command

SUFFIX = "\n............\n............"


def test_short_output_unchanged():
    text = "hello\nworld\n"
    assert cut_too_long(text) == text


def test_too_many_lines_cut():
    text = "a\n" * 40
    result = cut_too_long(text)
    assert result.endswith(SUFFIX)
    assert result[: -len(SUFFIX)].count("\n") <= 30


def test_crlf_counts_once():
    text = "a\r\n" * 31 + "b"
    assert cut_too_long(text) == "a\r\n" * 30 + "a" + SUFFIX


def test_lone_cr_counts():
    text = "a\r" * 31
    assert cut_too_long(text) == "a\r" * 30 + SUFFIX


def test_thirty_crlf_lines_kept():
    text = "a\r\n" * 30
    assert cut_too_long(text) == text


def test_too_many_chars_cut():
    text = "x" * 2000
    result = cut_too_long(text)
    assert result == "x" * 1000 + SUFFIX


def test_parse_plain_command():
    assert parse_command(">runcode py print(1)") == RunRequest(False, "py", "print(1)")


def test_parse_raw_and_lowercase():
    req = parse_command(">runcoderaw Go fmt.Println(1)\nx")
    assert req == RunRequest(True, "go", "fmt.Println(1)\nx")


def test_parse_unescapes_brackets():
    req = parse_command(">runcode py print(&#91;1&#93;)")
    assert req.code == "print([1])"


def test_parse_rejects_other_text():
    assert parse_command("runcode py print(1)") is None
    assert parse_command(">runcode py") is None