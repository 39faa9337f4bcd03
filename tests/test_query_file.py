from adapters.query_file import save_query


def test_save_overwrites(tmp_path):
    path = tmp_path / "final-query.sql"
    path.write_text("old content that is longer than the new one", encoding="utf-8")

    assert save_query("SELECT 1;", path) is True
    assert path.read_text(encoding="utf-8") == "SELECT 1;"


def test_save_failure_is_reported_not_raised(tmp_path, caplog):
    path = tmp_path / "missing-dir" / "final-query.sql"

    assert save_query("SELECT 1;", path) is False
    assert "Could not write final query" in caplog.text


def test_save_to_directory_fails(tmp_path):
    assert save_query("SELECT 1;", tmp_path) is False
