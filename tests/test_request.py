import pickle

import pytest

from projkit.errors import CacheError
from projkit.request import request


def _cache(project, name, value):
    cache = project / "cache"
    cache.mkdir(exist_ok=True)
    (cache / f"{name}.pkl").write_bytes(pickle.dumps(value))


def test_request_finds_object_in_session(session, project, events):
    session.bind("fit", 42)

    assert request(session, "fit") is True

    assert not (project / "cache").exists()
    messages = [e["message"] for e in events() if e.get("event") == "object_in_session"]
    assert messages == ["Object fit from workspace."]


def test_request_thaws_cached_object_once(session, project, events):
    _cache(project, "fit", {"r2": 0.9})

    assert request(session, "fit") is True
    assert session["fit"] == {"r2": 0.9}

    assert request(session, "fit") is True
    recorded = [e.get("event") for e in events()]
    assert recorded.count("object_thawed") == 1
    assert recorded.count("object_in_session") == 1


def test_request_miss_without_fallback_returns_false(session, project, events):
    (project / "cache").mkdir()

    assert request(session, "fit") is False

    assert "fit" not in session
    messages = [e["message"] for e in events() if e.get("event") == "object_missing"]
    assert messages == ["Object is neither defined nor cached."]


def test_request_miss_calls_fallback_exactly_once(session, project):
    (project / "cache").mkdir()
    calls = []

    def fallback():
        calls.append(True)
        return "computed"

    assert request(session, "fit", fallback) is False

    assert calls == [True]
    assert session["fit"] == "computed"


def test_fallback_returning_none_binds_nothing(session, project):
    (project / "cache").mkdir()

    assert request(session, "fit", lambda: None) is False

    assert "fit" not in session


def test_missing_cache_directory_is_created(session, project):
    assert request(session, "fit") is False

    assert (project / "cache").is_dir()


def test_missing_cache_directory_still_runs_fallback(session, project):
    calls = []

    result = request(session, "fit", lambda: calls.append(1))

    assert result is False
    assert calls == [1]
    assert (project / "cache").is_dir()


def test_fallback_errors_propagate(session, project):
    (project / "cache").mkdir()

    def fallback():
        raise ZeroDivisionError("bad")

    with pytest.raises(ZeroDivisionError):
        request(session, "fit", fallback)


def test_sidecar_name_is_requested_directly(session, project):
    _cache(project, "fit_expression_sha1", "abc123")

    assert request(session, "fit_expression_sha1") is True
    assert session["fit_expression_sha1"] == "abc123"


def test_cache_path_that_is_a_file_raises_cache_error(session, project):
    (project / "cache").write_text("not a directory")
    calls = []

    with pytest.raises(CacheError) as excinfo:
        request(session, "fit", lambda: calls.append(1))

    assert isinstance(excinfo.value.__cause__, FileExistsError)
    assert excinfo.value.context["cache_dir"] == str(project / "cache")
    assert calls == []
