import logging
from types import SimpleNamespace

import pytest
from sqlalchemy.exc import IntegrityError

from prep_admin.core import errors
from prep_admin.core.errors import db_errors, error_details
from prep_admin.models.tag import Tag
from prep_admin.services import tag_service


@pytest.fixture()
def error_log(caplog):
    # the prep_admin logger does not propagate to the root handler
    logger = logging.getLogger(errors.__name__)
    logger.addHandler(caplog.handler)
    caplog.set_level(logging.ERROR, logger=errors.__name__)
    yield caplog
    logger.removeHandler(caplog.handler)


def test_failed_operation_is_rolled_back_logged_and_reraised(db_session, error_log, monkeypatch):
    seen = []
    log_db_error = errors.log_db_error

    def spy(operation, exc):
        seen.append(exc)
        log_db_error(operation, exc)

    monkeypatch.setattr(errors, "log_db_error", spy)

    with pytest.raises(IntegrityError) as exc_info:
        with db_errors(db_session, "add_tag"):
            db_session.add(Tag(name=None))
            db_session.commit()

    assert seen == [exc_info.value]

    records = [r for r in error_log.records if r.levelno == logging.ERROR]
    assert len(records) == 1
    message = records[0].getMessage()
    assert "add_tag" in message
    for key in ("'message'", "'details'", "'hint'", "'code'"):
        assert key in message

    db_session.add(Tag(name="Nahw"))
    db_session.commit()
    assert [t.name for t in tag_service.list_tags(db_session)] == ["Nahw"]


def test_error_details_reads_server_diagnostics():
    diag = SimpleNamespace(
        message_primary="duplicate key value violates unique constraint",
        message_detail="Key (email)=(a@b.c) already exists.",
        message_hint=None,
    )
    exc = SimpleNamespace(orig=SimpleNamespace(diag=diag, pgcode="23505"))

    assert error_details(exc) == {
        "message": "duplicate key value violates unique constraint",
        "details": "Key (email)=(a@b.c) already exists.",
        "hint": None,
        "code": "23505",
    }


def test_operations_without_errors_pass_through(db_session):
    with db_errors(db_session, "add_tag"):
        db_session.add(Tag(name="Sarf"))
        db_session.commit()

    assert len(tag_service.list_tags(db_session)) == 1
