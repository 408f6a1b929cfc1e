import os
import sys
import tempfile

import main


def test_streams_untouched_outside_pythonw(monkeypatch):
    monkeypatch.setattr(sys, "executable", "/usr/bin/python3")
    stdout, stderr = sys.stdout, sys.stderr

    main.redirect_pythonw_streams()

    assert (sys.stdout, sys.stderr) == (stdout, stderr)


def test_pythonw_streams_go_to_temp_dir_without_temp_variable(monkeypatch, tmp_path):
    monkeypatch.setattr(sys, "executable", "/opt/python/bin/pythonw.exe")
    monkeypatch.setattr(sys, "argv", ["/opt/app/main.py"])
    monkeypatch.setattr(sys, "stdout", sys.stdout)
    monkeypatch.setattr(sys, "stderr", sys.stderr)
    monkeypatch.delenv("TEMP", raising=False)
    monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))

    main.redirect_pythonw_streams()
    try:
        assert sys.stdout.name == os.devnull
        assert sys.stderr.name == os.path.join(str(tmp_path), "stderr-main.py")
    finally:
        sys.stdout.close()
        sys.stderr.close()
