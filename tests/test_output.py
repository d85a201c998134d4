from io import StringIO

from releaser.core.output import SecretConsole


def _console() -> tuple[SecretConsole, StringIO]:
    buffer = StringIO()
    return SecretConsole(file=buffer, width=200, color_system=None), buffer


def test_registered_secret_is_masked():
    console, buffer = _console()
    console.add_secret("ghp_abc123")

    console.print("pushing to https://ghp_abc123@github.com/o/r.git")

    assert "ghp_abc123" not in buffer.getvalue()
    assert "https://***@github.com/o/r.git" in buffer.getvalue()


def test_log_is_masked_too():
    console, buffer = _console()
    console.add_secret("ghp_abc123")

    console.log("token ghp_abc123")

    assert "ghp_abc123" not in buffer.getvalue()


def test_empty_secret_is_ignored():
    console, buffer = _console()
    console.add_secret("")
    console.add_secret(None)

    console.print("nothing to hide")

    assert "nothing to hide" in buffer.getvalue()


def test_longer_secret_is_masked_whole():
    console, _ = _console()
    console.add_secret("abc")
    console.add_secret("abcdef")

    assert console.redact("x abcdef y") == "x *** y"
