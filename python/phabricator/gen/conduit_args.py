# Argument shapes for the *.search procedures.
# Field names are camelCased on the wire; wire() covers the irregular ones
# (PHID suffixes). Everything defaults to None so unset fields are omitted.
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from phabricator.encoding import wire


@dataclass
class TicketAttachments:
    columns: Optional[bool] = None
    subscribers: Optional[bool] = None
    projects: Optional[bool] = None


@dataclass
class TicketConstraints:
    ids: Optional[List[int]] = None
    phids: Optional[List[str]] = None
    assigned: Optional[List[str]] = None
    author_phids: Optional[List[str]] = wire("authorPHIDs")
    statuses: Optional[List[str]] = None
    priorities: Optional[List[int]] = None
    subtypes: Optional[List[str]] = None
    column_phids: Optional[List[str]] = wire("columnPHIDs")
    has_parents: Optional[bool] = None
    has_subtasks: Optional[bool] = None
    parent_ids: Optional[List[int]] = wire("parentIDs")
    subtask_ids: Optional[List[int]] = wire("subtaskIDs")
    created_start: Optional[int] = None
    created_end: Optional[int] = None
    modified_start: Optional[int] = None
    modified_end: Optional[int] = None
    closed_start: Optional[int] = None
    closed_end: Optional[int] = None
    closer_phids: Optional[List[str]] = wire("closerPHIDs")
    query: Optional[str] = None
    subscribers: Optional[List[str]] = None
    projects: Optional[List[str]] = None
    spaces: Optional[List[str]] = None


@dataclass
class TicketSearchArgs:
    query_key: Optional[str] = None
    attachments: TicketAttachments = field(default_factory=TicketAttachments)
    constraints: TicketConstraints = field(default_factory=TicketConstraints)
    order: Optional[str] = None
    limit: Optional[int] = None


@dataclass
class ProjectAttachments:
    members: Optional[bool] = None
    watchers: Optional[bool] = None
    ancestors: Optional[bool] = None


@dataclass
class ProjectConstraints:
    ids: Optional[List[int]] = None
    phids: Optional[List[str]] = None
    slugs: Optional[List[str]] = None
    name: Optional[str] = None
    members: Optional[List[str]] = None
    watchers: Optional[List[str]] = None
    is_milestone: Optional[bool] = None
    is_root: Optional[bool] = None
    min_depth: Optional[int] = None
    max_depth: Optional[int] = None
    parents: Optional[List[str]] = None
    ancestors: Optional[List[str]] = None
    icons: Optional[List[str]] = None
    colors: Optional[List[str]] = None
    query: Optional[str] = None
    spaces: Optional[List[str]] = None


@dataclass
class ProjectSearchArgs:
    query_key: Optional[str] = None
    attachments: ProjectAttachments = field(default_factory=ProjectAttachments)
    constraints: ProjectConstraints = field(default_factory=ProjectConstraints)
    order: Optional[str] = None
    limit: Optional[int] = None


@dataclass
class UserAttachments:
    availability: Optional[bool] = None


@dataclass
class UserConstraints:
    ids: Optional[List[int]] = None
    phids: Optional[List[str]] = None
    usernames: Optional[List[str]] = None
    name_like: Optional[str] = None
    is_admin: Optional[bool] = None
    is_disabled: Optional[bool] = None
    is_bot: Optional[bool] = None
    is_mailing_list: Optional[bool] = None
    needs_approval: Optional[bool] = None
    created_start: Optional[int] = None
    created_end: Optional[int] = None
    query: Optional[str] = None


@dataclass
class UserSearchArgs:
    query_key: Optional[str] = None
    attachments: UserAttachments = field(default_factory=UserAttachments)
    constraints: UserConstraints = field(default_factory=UserConstraints)
    order: Optional[str] = None
    limit: Optional[int] = None


@dataclass
class RevisionAttachments:
    reviewers: Optional[bool] = None
    subscribers: Optional[bool] = None
    projects: Optional[bool] = None


@dataclass
class RevisionConstraints:
    ids: Optional[List[int]] = None
    phids: Optional[List[str]] = None
    responsible_phids: Optional[List[str]] = wire("responsiblePHIDs")
    author_phids: Optional[List[str]] = wire("authorPHIDs")
    reviewer_phids: Optional[List[str]] = wire("reviewerPHIDs")
    repository_phids: Optional[List[str]] = wire("repositoryPHIDs")
    statuses: Optional[List[str]] = None
    created_start: Optional[int] = None
    created_end: Optional[int] = None
    modified_start: Optional[int] = None
    modified_end: Optional[int] = None
    query: Optional[str] = None
    subscribers: Optional[List[str]] = None
    projects: Optional[List[str]] = None


@dataclass
class RevisionSearchArgs:
    query_key: Optional[str] = None
    attachments: RevisionAttachments = field(default_factory=RevisionAttachments)
    constraints: RevisionConstraints = field(default_factory=RevisionConstraints)
    order: Optional[str] = None
    limit: Optional[int] = None


@dataclass
class DiffAttachments:
    commits: Optional[bool] = None


@dataclass
class DiffConstraints:
    ids: Optional[List[int]] = None
    phids: Optional[List[str]] = None
    revision_phids: Optional[List[str]] = wire("revisionPHIDs")


@dataclass
class DiffSearchArgs:
    query_key: Optional[str] = None
    attachments: DiffAttachments = field(default_factory=DiffAttachments)
    constraints: DiffConstraints = field(default_factory=DiffConstraints)
    order: Optional[str] = None
    limit: Optional[int] = None


@dataclass
class RepositoryAttachments:
    uris: Optional[bool] = None
    projects: Optional[bool] = None


@dataclass
class RepositoryConstraints:
    ids: Optional[List[int]] = None
    phids: Optional[List[str]] = None
    callsigns: Optional[List[str]] = None
    short_names: Optional[List[str]] = None
    types: Optional[List[str]] = None
    uris: Optional[List[str]] = None
    query: Optional[str] = None
    projects: Optional[List[str]] = None
    spaces: Optional[List[str]] = None


@dataclass
class RepositorySearchArgs:
    query_key: Optional[str] = None
    attachments: RepositoryAttachments = field(default_factory=RepositoryAttachments)
    constraints: RepositoryConstraints = field(default_factory=RepositoryConstraints)
    order: Optional[str] = None
    limit: Optional[int] = None
