import httpx
import pytest
from conduit_fakes import API_URL, TOKEN, catalog_response, conduit_response, form_of

from phabricator.catalog import discover
from phabricator.client import PhabricatorClient
from phabricator.config import ClientOptions
from phabricator.errors import DecodeError, RemoteAPIError
from phabricator.fixups import FixupTable
from phabricator.models import ProcedureKind
from phabricator.transport import ConduitTransport


def test_discover_classifies_procedures_and_rewrites_empty_params():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/conduit.query"
        captured["form"] = form_of(request)
        captured["authorization"] = request.headers.get("authorization")
        return catalog_response()

    with httpx.Client(transport=httpx.MockTransport(handler)) as http_client:
        transport = ConduitTransport(API_URL, TOKEN, http_client=http_client)
        catalog = discover(transport)

    assert captured["form"] == {"api.token": TOKEN}
    assert captured["authorization"] is None
    assert catalog.kind_of("maniphest.search") is ProcedureKind.SEARCH
    assert catalog.kind_of("maniphest.edit") is ProcedureKind.EDIT
    assert catalog.kind_of("conduit.ping") is ProcedureKind.UNSUPPORTED
    assert catalog.kind_of("missing.search") is None
    assert catalog["project.search"].params == ()
    assert catalog["maniphest.edit"].param_names == ["transactions", "objectIdentifier"]
    assert catalog.names(ProcedureKind.SEARCH) == [
        "maniphest.search",
        "project.search",
        "user.search",
    ]


def test_discover_without_fixup_cannot_decode_empty_params():
    def handler(request: httpx.Request) -> httpx.Response:
        return catalog_response()

    with httpx.Client(transport=httpx.MockTransport(handler)) as http_client:
        transport = ConduitTransport(API_URL, TOKEN, http_client=http_client)
        with pytest.raises(DecodeError, match="params"):
            discover(transport, fixups=FixupTable({}))


def test_discover_surfaces_remote_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return conduit_response(None, "ERR-INVALID-AUTH", "API token is invalid.")

    with httpx.Client(transport=httpx.MockTransport(handler)) as http_client:
        transport = ConduitTransport(API_URL, TOKEN, http_client=http_client)
        with pytest.raises(RemoteAPIError) as excinfo:
            discover(transport)

    assert excinfo.value.code == "ERR-INVALID-AUTH"
    assert excinfo.value.info == "API token is invalid."


def test_client_init_fails_on_remote_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return conduit_response(None, "ERR-INVALID-AUTH", "API token is invalid.")

    with httpx.Client(transport=httpx.MockTransport(handler)) as http_client:
        with pytest.raises(RemoteAPIError):
            PhabricatorClient(ClientOptions(api_url=API_URL, token=TOKEN), http_client=http_client)


def test_describe_renders_procedure_info():
    with httpx.Client(transport=httpx.MockTransport(lambda r: catalog_response())) as http_client:
        with PhabricatorClient(
            ClientOptions(api_url=API_URL, token=TOKEN), http_client=http_client
        ) as client:
            text = client.describe("maniphest.edit")
            assert client.procedures(ProcedureKind.EDIT) == ["maniphest.edit"]

    assert text.splitlines()[0] == "maniphest.edit:"
    assert "\tDescription: Create or edit a task." in text
    assert "\t\ttransactions: list<map>" in text
