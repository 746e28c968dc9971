"""Selftests for the command-line front end.

Run:
  python -m selftest.test_cli
"""

import contextlib
import io
import json

from tools.command_cli import main as cli_main


def _run(argv):
    out, err = io.StringIO(), io.StringIO()
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        code = cli_main(argv)
    return code, out.getvalue(), err.getvalue()


def test_encode():
    code, out, _ = _run(["encode", "--particle", "heart", "--count", "5"])
    assert code == 0
    assert out.strip() == "/particle heart ~ ~1 ~ 0 0 0 0.1 5 normal"


def test_decode():
    code, out, _ = _run(["decode", "/particle dust 1 0 0 1 ~ ~1 ~ 0 0 0 0.1 10 normal"])
    assert code == 0
    assert json.loads(out)["particle"] == "dust 1 0 0 1"

    code, _, err = _run(["decode", "/particle flame ~"])
    assert code == 2
    assert "error:" in err


def test_validate_exit_codes():
    code, out, _ = _run(["validate", "/particle flame ~ ~1 ~ 0 0 0 0.1 10 normal"])
    assert code == 0
    assert json.loads(out)["ok"] is True

    code, out, _ = _run(["validate", "--lang", "en", "/particle flame ~~ ~1 ~ 0 0 0 0.1 1.5 normal"])
    assert code == 1
    snap = json.loads(out)
    assert snap["ok"] is False
    assert len(snap["errors"]) == 2


def test_preview():
    code, out, _ = _run(["preview", "/particle heart ~ ~1 ~ 0 0 0 0.1 10 normal",
                         "--ticks", "3", "--seed", "2", "--profile", "compact"])
    assert code == 0
    res = json.loads(out)
    assert res["ticks"] == 3
    assert res["profile"] == "compact"
    assert res["seed"] == 2


def main():
    test_encode()
    test_decode()
    test_validate_exit_codes()
    test_preview()
    print("OK: cli selftests passed")


if __name__ == "__main__":
    main()
