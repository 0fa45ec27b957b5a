import pickle

import pytest

from projkit.errors import PatternNotFoundError, ValidationError
from projkit.request import request_all


def _cache(project, name, value):
    cache = project / "cache"
    cache.mkdir(exist_ok=True)
    (cache / f"{name}.pkl").write_bytes(pickle.dumps(value))


def test_unmatched_pattern_raises(session, events):
    with pytest.raises(PatternNotFoundError) as excinfo:
        request_all(session, "^model_")

    assert str(excinfo.value) == "Pattern not matched in workspace or cache."
    assert excinfo.value.context == {"pattern": "^model_"}
    failures = [e for e in events() if e.get("event") == "request_pattern_unmatched"]
    assert failures[0]["error"]["code"] == "lookup"


def test_unmatched_pattern_is_a_lookup_error(session, project):
    (project / "cache").mkdir()

    with pytest.raises(LookupError):
        request_all(session, "anything")


def test_matches_session_and_cache_without_duplicates(session, project):
    session.bind("model_a", "in session")
    session.bind("other", 0)
    _cache(project, "model_a", "stale copy")
    _cache(project, "model_b", "from cache")

    requested = request_all(session, "^model_")

    assert requested == ["model_a", "model_b"]
    assert session["model_a"] == "in session"
    assert session["model_b"] == "from cache"


def test_sidecars_are_not_matched(session, project):
    _cache(project, "fit_expression_sha1", "abc123")

    with pytest.raises(PatternNotFoundError):
        request_all(session, "fit")

    assert "fit_expression_sha1" not in session


def test_sidecar_skipped_but_object_loaded(session, project):
    _cache(project, "fit", 1)
    _cache(project, "fit_expression_sha1", "abc123")

    assert request_all(session, "fit") == ["fit"]
    assert session["fit"] == 1
    assert "fit_expression_sha1" not in session


def test_private_session_names_are_not_matched(session):
    session.bind("_scratch", 1)

    with pytest.raises(PatternNotFoundError):
        request_all(session, "scratch")


def test_invalid_pattern_is_rejected(session):
    with pytest.raises(ValidationError):
        request_all(session, "model_(")
