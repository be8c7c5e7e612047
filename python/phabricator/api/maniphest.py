from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Union

from ..client import PhabricatorClient
from ..gen.conduit_args import TicketSearchArgs
from ..gen.conduit_types import Ticket
from ..models import EditResult, Transaction, new_transaction
from ..search import CancelToken
from ._env import client_from_env

SEARCH_PROCEDURE = "maniphest.search"
EDIT_PROCEDURE = "maniphest.edit"


def iter_tickets_via_conduit(
    client: PhabricatorClient,
    args: Optional[TicketSearchArgs] = None,
    *,
    cancel: Optional[CancelToken] = None,
    skip_decode_errors: bool = False,
) -> Iterator[Ticket]:
    """Iterate over Maniphest tasks matching ``args``.

    Yields:
        Ticket: one per task, in server order across all pages

    Raises:
        UnknownProcedureError: if the server does not expose maniphest.search
        RemoteAPIError: if Conduit rejects the query
        TransportError: if a page request fails
    """
    stream = client.search(SEARCH_PROCEDURE, args or TicketSearchArgs(), Ticket, cancel=cancel)
    yield from stream.values(skip_decode_errors=skip_decode_errors)


def list_tickets_via_conduit(args: Optional[TicketSearchArgs] = None) -> List[Ticket]:
    with client_from_env() as client:
        return list(iter_tickets_via_conduit(client, args))


def edit_ticket_via_conduit(
    client: PhabricatorClient,
    ticket: Union[int, str, None],
    transactions: Sequence[Transaction],
) -> Optional[EditResult]:
    """Apply transactions to a task; ``ticket=None`` creates a new one."""
    if isinstance(ticket, str) and ticket.strip().upper().startswith("T"):
        suffix = ticket.strip()[1:]
        if suffix.isdigit():
            ticket = int(suffix)
    if not transactions:
        raise ValueError("at least one transaction is required")
    return client.edit(EDIT_PROCEDURE, ticket, transactions)


def create_ticket_via_conduit(
    client: PhabricatorClient,
    *,
    title: str,
    description: Optional[str] = None,
    owner_phid: Optional[str] = None,
    project_phids: Optional[Sequence[str]] = None,
) -> Optional[EditResult]:
    title_clean = (title or "").strip()
    if not title_clean:
        raise ValueError("title is required")
    transactions = [new_transaction("title", title_clean)]
    if description:
        transactions.append(new_transaction("description", description))
    if owner_phid:
        transactions.append(new_transaction("owner", owner_phid))
    if project_phids:
        transactions.append(new_transaction("projects.set", list(project_phids)))
    return client.edit(EDIT_PROCEDURE, None, transactions)
