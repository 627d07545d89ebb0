import pytest

from pipesh.exceptions import RedirectionIOError
from pipesh.redirection import STDERR, STDOUT, RedirectionSpec, extract_redirection, open_target


@pytest.mark.parametrize(
    ("operator", "stream", "append"),
    [
        (">", STDOUT, False),
        ("1>", STDOUT, False),
        (">>", STDOUT, True),
        ("1>>", STDOUT, True),
        ("2>", STDERR, False),
        ("2>>", STDERR, True),
    ],
)
def test_extract_recognized_operators(operator, stream, append):
    spec, remaining = extract_redirection(["-l", "/tmp", operator, "out.txt"])
    assert spec == RedirectionSpec(stream=stream, path="out.txt", append=append)
    assert remaining == ["-l", "/tmp"]


def test_lone_operator_is_left_alone():
    spec, remaining = extract_redirection([">"])
    assert spec is None
    assert remaining == [">"]


def test_operator_must_be_second_to_last():
    spec, remaining = extract_redirection([">", "out.txt", "extra"])
    assert spec is None
    assert remaining == [">", "out.txt", "extra"]


def test_no_redirection_returns_copy():
    args = ["a", "b"]
    spec, remaining = extract_redirection(args)
    assert spec is None
    assert remaining == args
    assert remaining is not args


def test_open_target_truncates_and_appends(tmp_path):
    target = tmp_path / "out.txt"
    target.write_text("old\n")
    with open_target(RedirectionSpec(STDOUT, str(target))) as handle:
        handle.write(b"new\n")
    assert target.read_text() == "new\n"
    with open_target(RedirectionSpec(STDOUT, str(target), append=True)) as handle:
        handle.write(b"more\n")
    assert target.read_text() == "new\nmore\n"


def test_open_target_missing_directory(tmp_path):
    with pytest.raises(RedirectionIOError):
        open_target(RedirectionSpec(STDOUT, str(tmp_path / "missing" / "out.txt")))
