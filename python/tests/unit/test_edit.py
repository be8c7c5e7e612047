from contextlib import contextmanager

import httpx
import pytest
from conduit_fakes import API_URL, TOKEN, catalog_response, conduit_response, procedure_of

from phabricator.client import PhabricatorClient
from phabricator.config import ClientOptions
from phabricator.errors import ArgumentError, RemoteAPIError, UnknownProcedureError
from phabricator.models import Transaction
from phabricator.search import CancelToken


@contextmanager
def _client(handler):
    with httpx.Client(transport=httpx.MockTransport(handler), timeout=5.0) as http_client:
        with PhabricatorClient(
            ClientOptions(api_url=API_URL, token=TOKEN), http_client=http_client
        ) as client:
            yield client


def test_edit_posts_transactions_and_parses_result():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        if procedure_of(request) == "conduit.query":
            return catalog_response()
        captured["path"] = request.url.path
        captured["body"] = request.content.decode("utf-8")
        captured["content_type"] = request.headers.get("content-type")
        return conduit_response(
            {
                "object": {"id": 42, "phid": "PHID-TASK-42"},
                "transactions": [{"phid": "PHID-XACT-TASK-1"}, {"phid": "PHID-XACT-TASK-2"}],
            }
        )

    with _client(handler) as client:
        result = client.edit(
            "maniphest.edit",
            42,
            [Transaction("name", "Foo"), Transaction("status", "open")],
        )

    assert captured["path"] == "/api/maniphest.edit"
    assert captured["content_type"] == "application/x-www-form-urlencoded"
    assert captured["body"] == (
        f"api.token={TOKEN}&objectIdentifier=42"
        "&transactions[0][type]=name&transactions[0][value]=Foo"
        "&transactions[1][type]=status&transactions[1][value]=open"
    )
    assert result.object_id == 42
    assert result.object_phid == "PHID-TASK-42"
    assert result.transaction_phids == ["PHID-XACT-TASK-1", "PHID-XACT-TASK-2"]


def test_edit_raises_remote_error():
    def handler(request: httpx.Request) -> httpx.Response:
        if procedure_of(request) == "conduit.query":
            return catalog_response()
        return conduit_response(None, "ERR-CONDUIT-CORE", "Transaction type 'nope' is unknown.")

    with _client(handler) as client:
        with pytest.raises(RemoteAPIError) as excinfo:
            client.edit("maniphest.edit", "T1", [Transaction("nope", 1)])

    assert excinfo.value.code == "ERR-CONDUIT-CORE"
    assert "nope" in excinfo.value.info
    assert excinfo.value.procedure == "maniphest.edit"


def test_edit_fails_fast_for_non_edit_procedures():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(procedure_of(request))
        return catalog_response()

    with _client(handler) as client:
        with pytest.raises(UnknownProcedureError):
            client.edit("maniphest.search", 1, [Transaction("title", "x")])
        with pytest.raises(UnknownProcedureError):
            client.edit("differential.revision.edit", 1, [Transaction("title", "x")])
        with pytest.raises(ArgumentError):
            client.edit("maniphest.edit", 1.5, [Transaction("title", "x")])

    assert calls == ["conduit.query"]


def test_edit_skips_request_when_cancelled():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(procedure_of(request))
        return catalog_response()

    cancel = CancelToken()
    cancel.cancel()
    with _client(handler) as client:
        assert client.edit("maniphest.edit", 1, [Transaction("title", "x")], cancel=cancel) is None

    assert calls == ["conduit.query"]
