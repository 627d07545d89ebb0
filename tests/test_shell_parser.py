import pytest

from pipesh.shell_parser import parse_command, parse_pipeline, split_pipeline, tokenize


@pytest.mark.parametrize(
    "words",
    [["echo"], ["echo", "hello", "world"], ["ls", "-la", "/tmp"], ["a", "b", "c", "d"]],
)
def test_plain_words_round_trip(words):
    assert tokenize(" ".join(words)) == words


def test_whitespace_collapses():
    assert tokenize("echo   a   b") == ["echo", "a", "b"]
    assert tokenize("  \techo a\t ") == ["echo", "a"]
    assert tokenize("   ") == []


def test_adjacent_quotes_join_into_one_word():
    assert tokenize("'a''b'c''d''e'f") == ["abcdef"]


def test_empty_quotes_do_not_split_words():
    assert tokenize("echo a''\"\"b") == ["echo", "ab"]
    assert tokenize("echo '' x") == ["echo", "x"]


def test_single_quotes_keep_everything_literal():
    assert tokenize("echo 'hello    world'") == ["echo", "hello    world"]
    assert tokenize(r"echo 'a\nb \" c'") == ["echo", r"a\nb \" c"]


def test_double_quote_escapes():
    assert tokenize('echo "A \\\\ escapes itself"') == ["echo", "A \\ escapes itself"]
    assert tokenize('echo "say \\"hi\\""') == ["echo", 'say "hi"']
    assert tokenize('echo "keep \\n as is"') == ["echo", "keep \\n as is"]


def test_single_quote_inside_double_quotes_is_literal():
    assert tokenize("echo \"it's\"") == ["echo", "it's"]


def test_backslash_outside_quotes_escapes_next_char():
    assert tokenize(r"echo a\ b") == ["echo", "a b"]
    assert tokenize(r"echo \'x\'") == ["echo", "'x'"]
    assert tokenize(r"echo \\n") == ["echo", "\\n"]
    assert tokenize(r"echo \n") == ["echo", "n"]


def test_unterminated_quote_consumes_rest_of_line():
    assert tokenize("echo 'abc def") == ["echo", "abc def"]
    assert tokenize('echo "abc') == ["echo", "abc"]


def test_trailing_backslash_is_dropped():
    assert tokenize("echo abc\\") == ["echo", "abc"]


def test_split_pipeline_on_bare_pipes():
    assert split_pipeline("ls -l | tail -n 3 | wc -l") == ["ls -l", "tail -n 3", "wc -l"]


def test_split_pipeline_ignores_quoted_and_escaped_pipes():
    assert split_pipeline("echo 'a|b' | cat") == ["echo 'a|b'", "cat"]
    assert split_pipeline('echo "a|b"') == ['echo "a|b"']
    assert split_pipeline(r"echo a\|b") == [r"echo a\|b"]


def test_parse_pipeline_empty_returns_no_commands():
    pipeline = parse_pipeline("\n")
    assert pipeline.commands == []
    assert not pipeline.is_pipeline


def test_parse_pipeline_keeps_empty_segments():
    pipeline = parse_pipeline("echo hi | | cat")
    assert pipeline.is_pipeline
    assert pipeline.commands[1] is None
    assert pipeline.commands[2].name == "cat"


def test_parse_command_splits_name_and_args():
    command = parse_command("grep -n 'two words' file.txt")
    assert command.name == "grep"
    assert command.args == ["-n", "two words", "file.txt"]
    assert command.argv == ["grep", "-n", "two words", "file.txt"]
    assert parse_command("  ") is None
