from .api.differential import iter_diffs_via_conduit, iter_revisions_via_conduit
from .api.diffusion import iter_repositories_via_conduit
from .api.maniphest import (
    create_ticket_via_conduit,
    edit_ticket_via_conduit,
    iter_tickets_via_conduit,
    list_tickets_via_conduit,
)
from .api.projects import iter_projects_via_conduit, list_projects_via_conduit
from .api.users import iter_users_via_conduit, list_users_via_conduit
from .catalog import ProcedureCatalog, discover
from .client import PhabricatorClient
from .config import ClientOptions, options_from_env
from .encoding import encode_arguments, encode_edit_arguments, wire
from .errors import (
    ArgumentError,
    ConfigError,
    DecodeError,
    PhabricatorError,
    RemoteAPIError,
    SerializationError,
    TransportError,
    UnknownProcedureError,
)
from .fixups import FixupTable, ResponseFixup, empty_map_fixup
from .gen.conduit_args import (
    DiffSearchArgs,
    ProjectSearchArgs,
    RepositorySearchArgs,
    RevisionSearchArgs,
    TicketSearchArgs,
    UserSearchArgs,
)
from .gen.conduit_types import Diff, Project, Repository, Revision, Ticket, User
from .models import (
    EditArguments,
    EditResult,
    Err,
    Ok,
    Page,
    ProcedureInfo,
    ProcedureKind,
    Transaction,
    WhoAmI,
    new_transaction,
)
from .search import CancelToken, ResultStream, search
from .transport import ConduitTransport

__all__ = [
    "PhabricatorClient",
    "ClientOptions",
    "options_from_env",
    "ConduitTransport",
    "ProcedureCatalog",
    "ProcedureInfo",
    "ProcedureKind",
    "discover",
    "search",
    "CancelToken",
    "ResultStream",
    "Ok",
    "Err",
    "Page",
    "EditArguments",
    "EditResult",
    "Transaction",
    "new_transaction",
    "WhoAmI",
    "encode_arguments",
    "encode_edit_arguments",
    "wire",
    "FixupTable",
    "ResponseFixup",
    "empty_map_fixup",
    "PhabricatorError",
    "TransportError",
    "DecodeError",
    "SerializationError",
    "RemoteAPIError",
    "ConfigError",
    "UnknownProcedureError",
    "ArgumentError",
    "Ticket",
    "Project",
    "User",
    "Revision",
    "Diff",
    "Repository",
    "TicketSearchArgs",
    "ProjectSearchArgs",
    "UserSearchArgs",
    "RevisionSearchArgs",
    "DiffSearchArgs",
    "RepositorySearchArgs",
    "iter_tickets_via_conduit",
    "list_tickets_via_conduit",
    "edit_ticket_via_conduit",
    "create_ticket_via_conduit",
    "iter_projects_via_conduit",
    "list_projects_via_conduit",
    "iter_users_via_conduit",
    "list_users_via_conduit",
    "iter_revisions_via_conduit",
    "iter_diffs_via_conduit",
    "iter_repositories_via_conduit",
]
