from hint_app.utils.file_io import atomic_write_text, ensure_directory, tail_lines


def test_tail_lines_basic(tmp_path):
    path = tmp_path / "sample.log"
    path.write_text("a\n b \n\nlast\n", encoding="utf-8")

    assert tail_lines(path, 3) == [" b ", "", "last"]
    assert tail_lines(path, 2) == ["", "last"]
    assert tail_lines(path, 2, drop_blank=True) == [" b ", "last"]


def test_tail_lines_full_file_and_missing(tmp_path):
    path = tmp_path / "full.log"
    path.write_text("one\ntwo\nthree\n", encoding="utf-8")

    assert tail_lines(path, None) == ["one", "two", "three"]
    assert tail_lines(path, 0) == []
    assert tail_lines(tmp_path / "absent.log", 5) == []


def test_tail_lines_strips_windows_newlines(tmp_path):
    path = tmp_path / "windows.log"
    path.write_bytes(b"first\r\nsecond\r\nthird")

    assert tail_lines(path, 2) == ["second", "third"]


def test_atomic_write_creates_parents_and_replaces(tmp_path):
    target_dir = tmp_path / "nested"
    target_file = target_dir / "data.txt"

    ensure_directory(target_dir)
    atomic_write_text(target_file, "payload", encoding="utf-8", fsync=True)
    assert target_file.read_text(encoding="utf-8") == "payload"

    atomic_write_text(tmp_path / "deeper" / "x" / "data.txt", "other")
    assert (tmp_path / "deeper" / "x" / "data.txt").read_text(encoding="utf-8") == "other"

    atomic_write_text(target_file, "second")
    assert target_file.read_text(encoding="utf-8") == "second"
    assert sorted(p.name for p in target_dir.iterdir()) == ["data.txt"]
