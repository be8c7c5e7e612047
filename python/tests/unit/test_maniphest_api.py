import httpx
import pytest
from conduit_fakes import API_URL, TOKEN, catalog_response, conduit_response, form_of, page_response, procedure_of

from phabricator.api.maniphest import (
    create_ticket_via_conduit,
    edit_ticket_via_conduit,
    iter_tickets_via_conduit,
)
from phabricator.api.projects import iter_projects_via_conduit
from phabricator.client import PhabricatorClient
from phabricator.config import ClientOptions
from phabricator.errors import SerializationError, UnknownProcedureError
from phabricator.gen.conduit_args import TicketSearchArgs
from phabricator.models import new_transaction


def _task(task_id, name, boards=None):
    return {
        "id": task_id,
        "type": "TASK",
        "phid": f"PHID-TASK-{task_id}",
        "fields": {"name": name, "status": {"value": "open", "name": "Open"}},
        "attachments": {"columns": {"boards": boards if boards is not None else []}},
    }


def test_iter_tickets_pagination_and_mapping():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        if procedure_of(request) == "conduit.query":
            return catalog_response()
        assert request.url.path.endswith("/api/maniphest.search")
        form = form_of(request)
        calls.append(form)
        assert form["queryKey"] == "open"
        assert form["constraints[projects][0]"] == "PHID-PROJ-1"
        assert form["attachments[columns]"] == "true"
        if form.get("after") is None:
            return page_response([_task(1, "First"), _task(2, "Second")], after="2")
        return page_response([_task(3, "Third")])

    args = TicketSearchArgs(query_key="open")
    args.attachments.columns = True
    args.constraints.projects = ["PHID-PROJ-1"]

    with httpx.Client(transport=httpx.MockTransport(handler), timeout=5.0) as http_client:
        with PhabricatorClient(
            ClientOptions(api_url=API_URL, token=TOKEN), http_client=http_client
        ) as client:
            tickets = list(iter_tickets_via_conduit(client, args))

    assert [t.id for t in tickets] == [1, 2, 3]
    assert [str(t) for t in tickets] == ["T1: First", "T2: Second", "T3: Third"]
    assert tickets[0].boards == {}
    assert tickets[0].status and tickets[0].status.name == "Open"
    assert len(calls) == 2
    assert calls[1]["after"] == "2"


def test_iter_tickets_raises_on_bad_record():
    def handler(request: httpx.Request) -> httpx.Response:
        if procedure_of(request) == "conduit.query":
            return catalog_response()
        return page_response([_task(1, "First"), {"id": 2, "phid": "PHID-TASK-2"}])

    with httpx.Client(transport=httpx.MockTransport(handler), timeout=5.0) as http_client:
        with PhabricatorClient(
            ClientOptions(api_url=API_URL, token=TOKEN), http_client=http_client
        ) as client:
            with pytest.raises(SerializationError, match="fields"):
                list(iter_tickets_via_conduit(client))
            tickets = list(iter_tickets_via_conduit(client, skip_decode_errors=True))

    assert [t.id for t in tickets] == [1]


def test_iter_projects_unknown_procedure():
    procedures = {"maniphest.search": {"description": "", "params": [], "return": ""}}
    with httpx.Client(
        transport=httpx.MockTransport(lambda r: catalog_response(procedures)), timeout=5.0
    ) as http_client:
        with PhabricatorClient(
            ClientOptions(api_url=API_URL, token=TOKEN), http_client=http_client
        ) as client:
            with pytest.raises(UnknownProcedureError, match="project.search"):
                list(iter_projects_via_conduit(client))


def test_edit_and_create_ticket_helpers():
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        if procedure_of(request) == "conduit.query":
            return catalog_response()
        bodies.append(form_of(request))
        return conduit_response({"object": {"id": 7, "phid": "PHID-TASK-7"}, "transactions": []})

    with httpx.Client(transport=httpx.MockTransport(handler), timeout=5.0) as http_client:
        with PhabricatorClient(
            ClientOptions(api_url=API_URL, token=TOKEN), http_client=http_client
        ) as client:
            edited = edit_ticket_via_conduit(client, "T7", [new_transaction("status", "resolved")])
            created = create_ticket_via_conduit(
                client, title="New task", project_phids=["PHID-PROJ-1"]
            )
            with pytest.raises(ValueError, match="title"):
                create_ticket_via_conduit(client, title="  ")

    assert edited.object_id == 7
    assert bodies[0]["objectIdentifier"] == "7"
    assert bodies[0]["transactions[0][value]"] == "resolved"
    assert "objectIdentifier" not in bodies[1]
    assert bodies[1]["transactions[0][type]"] == "title"
    assert bodies[1]["transactions[1][type]"] == "projects.set"
    assert bodies[1]["transactions[1][value]"] == '["PHID-PROJ-1"]'
    assert created.object_phid == "PHID-TASK-7"
