"""Tests du journal d'audit des requêtes (table `log`)."""

from __future__ import annotations

from unittest.mock import Mock

import pytest
from sqlalchemy.exc import OperationalError

from stargate.domain.entities import CreatePerson
from stargate.services.request_log import SERIALIZATION_ERROR, RequestLog, serialize_request


def test_serialize_request() -> None:
    assert serialize_request(CreatePerson(name="Neil")) == '{"name":"Neil"}'
    assert serialize_request({"a": 1}) == '{"a": 1}'


def test_track_success_writes_three_entries(audit_repo) -> None:
    """Teste la séquence STARTING / PROPS / ENDED sous un même identifiant."""
    audit = RequestLog(audit_repo)
    with audit.track(CreatePerson(name="Neil"), "CreatePersonResult") as identifier:
        pass

    entries = audit_repo.list_for(identifier)
    assert [e["message"] for e in entries] == [
        "[STARTING] CreatePerson",
        '[PROPS] {"name":"Neil"}',
        "[ENDED] CreatePersonResult",
    ]
    assert [e["name"] for e in entries] == ["CreatePerson", "CreatePerson", "CreatePersonResult"]
    assert entries[0]["timestamp"] is not None
    assert entries[-1]["elapsed_ms"] is not None and entries[-1]["elapsed_ms"] >= 0


def test_track_failure_writes_failed_and_reraises(audit_repo) -> None:
    """Teste qu'une exception est journalisée puis propagée."""
    audit = RequestLog(audit_repo)
    identifier = None
    with pytest.raises(RuntimeError):
        with audit.track(CreatePerson(name="Neil"), "CreatePersonResult") as identifier:
            raise RuntimeError("boom")

    messages = [e["message"] for e in audit_repo.list_for(identifier)]
    assert messages[-1] == "[FAILED] CreatePersonResult: boom"
    assert not any(m.startswith("[ENDED]") for m in messages)


def test_track_unserializable_request(audit_repo) -> None:
    audit = RequestLog(audit_repo)
    with audit.track({"when": object()}, "Result") as identifier:
        pass
    messages = [e["message"] for e in audit_repo.list_for(identifier)]
    assert SERIALIZATION_ERROR in messages
    assert messages[-1] == "[ENDED] Result"


def test_write_failure_does_not_interrupt() -> None:
    """Teste qu'une erreur d'écriture du journal n'interrompt pas le traitement."""
    repo = Mock()
    repo.append.side_effect = OperationalError("INSERT", {}, Exception("disk full"))
    audit = RequestLog(repo)
    done = []
    with audit.track(CreatePerson(name="Neil"), "CreatePersonResult"):
        done.append(True)
    assert done == [True]
    assert repo.append.call_count == 3


def test_disabled_log_writes_nothing() -> None:
    repo = Mock()
    audit = RequestLog(repo, enabled=False)
    with audit.track(CreatePerson(name="Neil"), "CreatePersonResult"):
        pass
    repo.append.assert_not_called()
