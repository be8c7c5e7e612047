from dataclasses import dataclass

import pytest

from phabricator.encoding import encode_arguments, encode_edit_arguments, wire
from phabricator.errors import ArgumentError
from phabricator.gen.conduit_args import TicketSearchArgs
from phabricator.models import EditArguments, Transaction, new_transaction


def test_edit_arguments_encode_in_order():
    args = EditArguments(
        object_identifier=42,
        transactions=[Transaction("name", "Foo"), Transaction("status", "open")],
    )
    assert encode_edit_arguments(args) == (
        "objectIdentifier=42"
        "&transactions[0][type]=name&transactions[0][value]=Foo"
        "&transactions[1][type]=status&transactions[1][value]=open"
    )


def test_edit_structured_values_are_json_encoded():
    args = EditArguments(
        object_identifier="PHID-TASK-abc",
        transactions=[
            new_transaction("projects.add", ["PHID-PROJ-1"]),
            new_transaction("points", 3),
            ("subscribers.set", {"a": 1}),
        ],
    )
    encoded = encode_edit_arguments(args)
    assert encoded.startswith("objectIdentifier=PHID-TASK-abc&")
    assert "transactions[0][value]=[%22PHID-PROJ-1%22]" in encoded
    assert "transactions[1][value]=3" in encoded
    assert "transactions[2][type]=subscribers.set" in encoded
    assert "transactions[2][value]=%7B%22a%22%3A1%7D" in encoded


def test_edit_without_identifier_omits_it():
    args = EditArguments(transactions=[Transaction("title", "New task")])
    assert encode_edit_arguments(args) == (
        "transactions[0][type]=title&transactions[0][value]=New+task"
    )


@pytest.mark.parametrize("identifier", [4.2, True, ["T1"]])
def test_edit_rejects_unsupported_identifier(identifier):
    with pytest.raises(ArgumentError, match="objectIdentifier"):
        encode_edit_arguments(EditArguments(object_identifier=identifier))


def test_search_arguments_nest_and_index():
    args = TicketSearchArgs(query_key="authored")
    args.attachments.subscribers = True
    args.constraints.ids = [5, 7]
    args.constraints.author_phids = ["PHID-USER-1"]
    args.constraints.created_start = 0

    assert encode_arguments(args) == (
        "queryKey=authored"
        "&attachments[subscribers]=true"
        "&constraints[ids][0]=5&constraints[ids][1]=7"
        "&constraints[authorPHIDs][0]=PHID-USER-1"
        "&constraints[createdStart]=0"
    )


def test_empty_search_arguments_encode_to_nothing():
    assert encode_arguments(TicketSearchArgs()) == ""
    assert encode_arguments(None) == ""
    assert encode_arguments({"constraints": {"ids": []}}) == ""


def test_mapping_arguments_and_escaping():
    encoded = encode_arguments({"constraints": {"query": "a&b c"}, "limit": 10})
    assert encoded == "constraints[query]=a%26b+c&limit=10"


def test_wire_names_override_camel_case():
    @dataclass
    class Args:
        repository_phids: list = wire("repositoryPHIDs")
        short_name: str = None

    assert encode_arguments(Args(["PHID-REPO-1"], "web")) == (
        "repositoryPHIDs[0]=PHID-REPO-1&shortName=web"
    )


def test_unsupported_argument_types_are_rejected():
    with pytest.raises(ArgumentError):
        encode_arguments("queryKey=all")
    with pytest.raises(ArgumentError):
        encode_arguments({"constraints": {"ids": {1, 2}}})
