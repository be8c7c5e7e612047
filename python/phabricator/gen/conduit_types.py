# Conduit record shapes for the *.search procedures.
# Maintained by hand against the Phabricator Conduit API console; every
# shape exposes from_dict(obj, path) so it can be handed to a search call
# as the destination shape.
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from phabricator.errors import SerializationError
from phabricator.models import _expect_dict, _expect_list
from phabricator.models import _optional_int as _opt_int
from phabricator.models import _optional_str as _opt_str


def _expect_int(obj: Any, path: str) -> int:
    if isinstance(obj, bool) or not isinstance(obj, int):
        raise SerializationError(f"Expected integer at {path}")
    return obj


def _opt_dict(obj: Any, path: str) -> Dict[str, Any]:
    # Conduit sends [] for empty maps.
    if obj is None or obj == []:
        return {}
    return _expect_dict(obj, path)


def _opt_text(obj: Any, path: str) -> Optional[str]:
    if obj is None:
        return None
    if isinstance(obj, bool):
        raise SerializationError(f"Expected string at {path}")
    if isinstance(obj, (int, float)):
        return str(obj)
    return _opt_str(obj, path)


def _opt_float(obj: Any, path: str) -> Optional[float]:
    if obj is None:
        return None
    if isinstance(obj, bool) or not isinstance(obj, (int, float)):
        raise SerializationError(f"Expected number at {path}")
    return float(obj)


def _opt_bool(obj: Any, path: str) -> Optional[bool]:
    if obj is None:
        return None
    if not isinstance(obj, bool):
        raise SerializationError(f"Expected boolean at {path}")
    return obj


def _str_list(obj: Any, path: str) -> List[str]:
    if obj is None:
        return []
    out: List[str] = []
    for idx, item in enumerate(_expect_list(obj, path)):
        value = _opt_str(item, f"{path}[{idx}]")
        if value is not None:
            out.append(value)
    return out


def _policy(obj: Any, path: str) -> Dict[str, str]:
    raw = _opt_dict(obj, path)
    return {k: v for k, v in raw.items() if isinstance(v, str)}


def _header(raw: Dict[str, Any], path: str) -> Dict[str, Any]:
    record_id = _expect_int(raw.get("id"), f"{path}.id")
    phid = _opt_str(raw.get("phid"), f"{path}.phid")
    if not phid:
        raise SerializationError(f"Missing {path}.phid")
    return {
        "id": record_id,
        "phid": phid,
        "type": _opt_str(raw.get("type"), f"{path}.type"),
    }


@dataclass(frozen=True)
class SubscribersAttachment:
    subscriber_phids: List[str] = field(default_factory=list)
    subscriber_count: Optional[int] = None
    viewer_is_subscribed: Optional[bool] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "SubscribersAttachment":
        raw = _opt_dict(obj, path)
        return SubscribersAttachment(
            subscriber_phids=_str_list(raw.get("subscriberPHIDs"), f"{path}.subscriberPHIDs"),
            subscriber_count=_opt_int(raw.get("subscriberCount"), f"{path}.subscriberCount"),
            viewer_is_subscribed=_opt_bool(
                raw.get("viewerIsSubscribed"), f"{path}.viewerIsSubscribed"
            ),
        )


def _project_phids(attachments: Dict[str, Any], path: str) -> List[str]:
    projects = _opt_dict(attachments.get("projects"), f"{path}.projects")
    return _str_list(projects.get("projectPHIDs"), f"{path}.projects.projectPHIDs")


@dataclass(frozen=True)
class TicketStatus:
    value: Optional[str]
    name: Optional[str] = None
    color: Optional[str] = None


@dataclass(frozen=True)
class TicketPriority:
    value: Optional[int]
    subpriority: Optional[float] = None
    name: Optional[str] = None
    color: Optional[str] = None


@dataclass(frozen=True)
class BoardColumn:
    id: Optional[int]
    phid: Optional[str]
    name: Optional[str] = None


@dataclass(frozen=True)
class Ticket:
    """maniphest.search result."""

    id: int
    phid: str
    name: str
    type: Optional[str] = None
    description: Optional[str] = None
    author_phid: Optional[str] = None
    owner_phid: Optional[str] = None
    status: Optional[TicketStatus] = None
    priority: Optional[TicketPriority] = None
    points: Optional[str] = None
    subtype: Optional[str] = None
    closer_phid: Optional[str] = None
    date_closed: Optional[int] = None
    space_phid: Optional[str] = None
    date_created: Optional[int] = None
    date_modified: Optional[int] = None
    policy: Dict[str, str] = field(default_factory=dict)
    custom_fields: Dict[str, Any] = field(default_factory=dict)
    boards: Dict[str, List[BoardColumn]] = field(default_factory=dict)
    subscribers: Optional[SubscribersAttachment] = None
    project_phids: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        return f"T{self.id}: {self.name}"

    @staticmethod
    def from_dict(obj: Any, path: str) -> "Ticket":
        raw = _expect_dict(obj, path)
        header = _header(raw, path)
        fields_path = f"{path}.fields"
        fields = _expect_dict(raw.get("fields"), fields_path)
        name = _opt_str(fields.get("name"), f"{fields_path}.name")
        if name is None:
            raise SerializationError(f"Missing {fields_path}.name")

        description = None
        if fields.get("description") is not None:
            desc_raw = _expect_dict(fields.get("description"), f"{fields_path}.description")
            description = _opt_str(desc_raw.get("raw"), f"{fields_path}.description.raw")

        status = None
        if fields.get("status") is not None:
            st = _expect_dict(fields.get("status"), f"{fields_path}.status")
            status = TicketStatus(
                value=_opt_str(st.get("value"), f"{fields_path}.status.value"),
                name=_opt_str(st.get("name"), f"{fields_path}.status.name"),
                color=_opt_str(st.get("color"), f"{fields_path}.status.color"),
            )

        priority = None
        if fields.get("priority") is not None:
            pr = _expect_dict(fields.get("priority"), f"{fields_path}.priority")
            priority = TicketPriority(
                value=_opt_int(pr.get("value"), f"{fields_path}.priority.value"),
                subpriority=_opt_float(pr.get("subpriority"), f"{fields_path}.priority.subpriority"),
                name=_opt_str(pr.get("name"), f"{fields_path}.priority.name"),
                color=_opt_str(pr.get("color"), f"{fields_path}.priority.color"),
            )

        custom_fields = {k: v for k, v in fields.items() if k.startswith("custom.")}

        attachments_path = f"{path}.attachments"
        attachments = _opt_dict(raw.get("attachments"), attachments_path)
        boards: Dict[str, List[BoardColumn]] = {}
        columns = _opt_dict(attachments.get("columns"), f"{attachments_path}.columns")
        boards_raw = _opt_dict(columns.get("boards"), f"{attachments_path}.columns.boards")
        for board_phid, board in boards_raw.items():
            board_path = f"{attachments_path}.columns.boards[{board_phid}]"
            board_dict = _opt_dict(board, board_path)
            cols: List[BoardColumn] = []
            for idx, col in enumerate(
                _expect_list(board_dict.get("columns") or [], f"{board_path}.columns")
            ):
                col_raw = _expect_dict(col, f"{board_path}.columns[{idx}]")
                cols.append(
                    BoardColumn(
                        id=_opt_int(col_raw.get("id"), f"{board_path}.columns[{idx}].id"),
                        phid=_opt_str(col_raw.get("phid"), f"{board_path}.columns[{idx}].phid"),
                        name=_opt_str(col_raw.get("name"), f"{board_path}.columns[{idx}].name"),
                    )
                )
            boards[board_phid] = cols

        subscribers = None
        if attachments.get("subscribers") is not None:
            subscribers = SubscribersAttachment.from_dict(
                attachments.get("subscribers"), f"{attachments_path}.subscribers"
            )

        return Ticket(
            name=name,
            description=description,
            author_phid=_opt_str(fields.get("authorPHID"), f"{fields_path}.authorPHID"),
            owner_phid=_opt_str(fields.get("ownerPHID"), f"{fields_path}.ownerPHID"),
            status=status,
            priority=priority,
            points=_opt_text(fields.get("points"), f"{fields_path}.points"),
            subtype=_opt_str(fields.get("subtype"), f"{fields_path}.subtype"),
            closer_phid=_opt_str(fields.get("closerPHID"), f"{fields_path}.closerPHID"),
            date_closed=_opt_int(fields.get("dateClosed"), f"{fields_path}.dateClosed"),
            space_phid=_opt_str(fields.get("spacePHID"), f"{fields_path}.spacePHID"),
            date_created=_opt_int(fields.get("dateCreated"), f"{fields_path}.dateCreated"),
            date_modified=_opt_int(fields.get("dateModified"), f"{fields_path}.dateModified"),
            policy=_policy(fields.get("policy"), f"{fields_path}.policy"),
            custom_fields=custom_fields,
            boards=boards,
            subscribers=subscribers,
            project_phids=_project_phids(attachments, attachments_path),
            **header,
        )


@dataclass(frozen=True)
class ProjectRef:
    id: Optional[int]
    phid: Optional[str]
    name: Optional[str] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "ProjectRef":
        raw = _expect_dict(obj, path)
        return ProjectRef(
            id=_opt_int(raw.get("id"), f"{path}.id"),
            phid=_opt_str(raw.get("phid"), f"{path}.phid"),
            name=_opt_str(raw.get("name"), f"{path}.name"),
        )


def _phid_refs(obj: Any, path: str) -> List[str]:
    out: List[str] = []
    for idx, item in enumerate(_expect_list(obj or [], path)):
        ref = _expect_dict(item, f"{path}[{idx}]")
        phid = _opt_str(ref.get("phid"), f"{path}[{idx}].phid")
        if phid:
            out.append(phid)
    return out


@dataclass(frozen=True)
class Project:
    """project.search result."""

    id: int
    phid: str
    name: str
    type: Optional[str] = None
    slug: Optional[str] = None
    milestone: Optional[int] = None
    depth: Optional[int] = None
    parent: Optional[ProjectRef] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    space_phid: Optional[str] = None
    date_created: Optional[int] = None
    date_modified: Optional[int] = None
    policy: Dict[str, str] = field(default_factory=dict)
    description: Optional[str] = None
    member_phids: List[str] = field(default_factory=list)
    watcher_phids: List[str] = field(default_factory=list)
    ancestors: List[ProjectRef] = field(default_factory=list)

    @staticmethod
    def from_dict(obj: Any, path: str) -> "Project":
        raw = _expect_dict(obj, path)
        header = _header(raw, path)
        fields_path = f"{path}.fields"
        fields = _expect_dict(raw.get("fields"), fields_path)
        name = _opt_str(fields.get("name"), f"{fields_path}.name")
        if name is None:
            raise SerializationError(f"Missing {fields_path}.name")

        parent = None
        if fields.get("parent") is not None:
            parent = ProjectRef.from_dict(fields.get("parent"), f"{fields_path}.parent")
        icon = None
        if fields.get("icon") is not None:
            icon_raw = _expect_dict(fields.get("icon"), f"{fields_path}.icon")
            icon = _opt_str(icon_raw.get("key"), f"{fields_path}.icon.key")
        color = None
        if fields.get("color") is not None:
            color_raw = _expect_dict(fields.get("color"), f"{fields_path}.color")
            color = _opt_str(color_raw.get("key"), f"{fields_path}.color.key")

        attachments_path = f"{path}.attachments"
        attachments = _opt_dict(raw.get("attachments"), attachments_path)
        members = _opt_dict(attachments.get("members"), f"{attachments_path}.members")
        watchers = _opt_dict(attachments.get("watchers"), f"{attachments_path}.watchers")
        ancestors_raw = _opt_dict(attachments.get("ancestors"), f"{attachments_path}.ancestors")
        ancestors = [
            ProjectRef.from_dict(item, f"{attachments_path}.ancestors.ancestors[{idx}]")
            for idx, item in enumerate(
                _expect_list(
                    ancestors_raw.get("ancestors") or [], f"{attachments_path}.ancestors.ancestors"
                )
            )
        ]

        return Project(
            name=name,
            slug=_opt_str(fields.get("slug"), f"{fields_path}.slug"),
            milestone=_opt_int(fields.get("milestone"), f"{fields_path}.milestone"),
            depth=_opt_int(fields.get("depth"), f"{fields_path}.depth"),
            parent=parent,
            icon=icon,
            color=color,
            space_phid=_opt_str(fields.get("spacePHID"), f"{fields_path}.spacePHID"),
            date_created=_opt_int(fields.get("dateCreated"), f"{fields_path}.dateCreated"),
            date_modified=_opt_int(fields.get("dateModified"), f"{fields_path}.dateModified"),
            policy=_policy(fields.get("policy"), f"{fields_path}.policy"),
            description=_opt_str(fields.get("description"), f"{fields_path}.description"),
            member_phids=_phid_refs(members.get("members"), f"{attachments_path}.members.members"),
            watcher_phids=_phid_refs(
                watchers.get("watchers"), f"{attachments_path}.watchers.watchers"
            ),
            ancestors=ancestors,
            **header,
        )


@dataclass(frozen=True)
class Availability:
    value: Optional[str]
    until: Optional[int] = None
    name: Optional[str] = None
    color: Optional[str] = None


@dataclass(frozen=True)
class User:
    """user.search result."""

    id: int
    phid: str
    username: str
    type: Optional[str] = None
    real_name: Optional[str] = None
    roles: List[str] = field(default_factory=list)
    date_created: Optional[int] = None
    date_modified: Optional[int] = None
    policy: Dict[str, str] = field(default_factory=dict)
    availability: Optional[Availability] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "User":
        raw = _expect_dict(obj, path)
        header = _header(raw, path)
        fields_path = f"{path}.fields"
        fields = _expect_dict(raw.get("fields"), fields_path)
        username = _opt_str(fields.get("username"), f"{fields_path}.username")
        if not username:
            raise SerializationError(f"Missing {fields_path}.username")

        attachments = _opt_dict(raw.get("attachments"), f"{path}.attachments")
        availability = None
        if attachments.get("availability") is not None:
            av_path = f"{path}.attachments.availability"
            av = _expect_dict(attachments.get("availability"), av_path)
            availability = Availability(
                value=_opt_str(av.get("value"), f"{av_path}.value"),
                until=_opt_int(av.get("until"), f"{av_path}.until"),
                name=_opt_str(av.get("name"), f"{av_path}.name"),
                color=_opt_str(av.get("color"), f"{av_path}.color"),
            )

        return User(
            username=username,
            real_name=_opt_str(fields.get("realName"), f"{fields_path}.realName"),
            roles=_str_list(fields.get("roles"), f"{fields_path}.roles"),
            date_created=_opt_int(fields.get("dateCreated"), f"{fields_path}.dateCreated"),
            date_modified=_opt_int(fields.get("dateModified"), f"{fields_path}.dateModified"),
            policy=_policy(fields.get("policy"), f"{fields_path}.policy"),
            availability=availability,
            **header,
        )


@dataclass(frozen=True)
class RevisionStatus:
    value: Optional[str]
    name: Optional[str] = None
    closed: Optional[bool] = None
    color_ansi: Optional[str] = None


@dataclass(frozen=True)
class RevisionReviewer:
    reviewer_phid: str
    status: Optional[str] = None
    is_blocking: Optional[bool] = None
    actor_phid: Optional[str] = None


@dataclass(frozen=True)
class Revision:
    """differential.revision.search result."""

    id: int
    phid: str
    title: str
    type: Optional[str] = None
    author_phid: Optional[str] = None
    status: Optional[RevisionStatus] = None
    repository_phid: Optional[str] = None
    diff_phid: Optional[str] = None
    summary: Optional[str] = None
    test_plan: Optional[str] = None
    is_draft: Optional[bool] = None
    hold_as_draft: Optional[bool] = None
    date_created: Optional[int] = None
    date_modified: Optional[int] = None
    policy: Dict[str, str] = field(default_factory=dict)
    reviewers: List[RevisionReviewer] = field(default_factory=list)
    subscribers: Optional[SubscribersAttachment] = None
    project_phids: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        return f"D{self.id}: {self.title}"

    @staticmethod
    def from_dict(obj: Any, path: str) -> "Revision":
        raw = _expect_dict(obj, path)
        header = _header(raw, path)
        fields_path = f"{path}.fields"
        fields = _expect_dict(raw.get("fields"), fields_path)
        title = _opt_str(fields.get("title"), f"{fields_path}.title")
        if title is None:
            raise SerializationError(f"Missing {fields_path}.title")

        status = None
        if fields.get("status") is not None:
            st = _expect_dict(fields.get("status"), f"{fields_path}.status")
            status = RevisionStatus(
                value=_opt_str(st.get("value"), f"{fields_path}.status.value"),
                name=_opt_str(st.get("name"), f"{fields_path}.status.name"),
                closed=_opt_bool(st.get("closed"), f"{fields_path}.status.closed"),
                color_ansi=_opt_str(st.get("color.ansi"), f"{fields_path}.status.color.ansi"),
            )

        attachments_path = f"{path}.attachments"
        attachments = _opt_dict(raw.get("attachments"), attachments_path)
        reviewers: List[RevisionReviewer] = []
        reviewers_raw = _opt_dict(attachments.get("reviewers"), f"{attachments_path}.reviewers")
        for idx, item in enumerate(
            _expect_list(reviewers_raw.get("reviewers") or [], f"{attachments_path}.reviewers.reviewers")
        ):
            rv_path = f"{attachments_path}.reviewers.reviewers[{idx}]"
            rv = _expect_dict(item, rv_path)
            reviewer_phid = _opt_str(rv.get("reviewerPHID"), f"{rv_path}.reviewerPHID")
            if not reviewer_phid:
                raise SerializationError(f"Missing {rv_path}.reviewerPHID")
            reviewers.append(
                RevisionReviewer(
                    reviewer_phid=reviewer_phid,
                    status=_opt_str(rv.get("status"), f"{rv_path}.status"),
                    is_blocking=_opt_bool(rv.get("isBlocking"), f"{rv_path}.isBlocking"),
                    actor_phid=_opt_str(rv.get("actorPHID"), f"{rv_path}.actorPHID"),
                )
            )

        subscribers = None
        if attachments.get("subscribers") is not None:
            subscribers = SubscribersAttachment.from_dict(
                attachments.get("subscribers"), f"{attachments_path}.subscribers"
            )

        return Revision(
            title=title,
            author_phid=_opt_str(fields.get("authorPHID"), f"{fields_path}.authorPHID"),
            status=status,
            repository_phid=_opt_str(fields.get("repositoryPHID"), f"{fields_path}.repositoryPHID"),
            diff_phid=_opt_str(fields.get("diffPHID"), f"{fields_path}.diffPHID"),
            summary=_opt_str(fields.get("summary"), f"{fields_path}.summary"),
            test_plan=_opt_str(fields.get("testPlan"), f"{fields_path}.testPlan"),
            is_draft=_opt_bool(fields.get("isDraft"), f"{fields_path}.isDraft"),
            hold_as_draft=_opt_bool(fields.get("holdAsDraft"), f"{fields_path}.holdAsDraft"),
            date_created=_opt_int(fields.get("dateCreated"), f"{fields_path}.dateCreated"),
            date_modified=_opt_int(fields.get("dateModified"), f"{fields_path}.dateModified"),
            policy=_policy(fields.get("policy"), f"{fields_path}.policy"),
            reviewers=reviewers,
            subscribers=subscribers,
            project_phids=_project_phids(attachments, attachments_path),
            **header,
        )


@dataclass(frozen=True)
class DiffRef:
    type: Optional[str]
    name: Optional[str] = None


@dataclass(frozen=True)
class DiffCommit:
    identifier: Optional[str]
    tree: Optional[str] = None
    parents: List[str] = field(default_factory=list)
    author_name: Optional[str] = None
    author_email: Optional[str] = None
    author_epoch: Optional[int] = None
    message: Optional[str] = None


@dataclass(frozen=True)
class Diff:
    """differential.diff.search result."""

    id: int
    phid: str
    type: Optional[str] = None
    revision_phid: Optional[str] = None
    author_phid: Optional[str] = None
    repository_phid: Optional[str] = None
    refs: List[DiffRef] = field(default_factory=list)
    date_created: Optional[int] = None
    date_modified: Optional[int] = None
    policy: Dict[str, str] = field(default_factory=dict)
    commits: List[DiffCommit] = field(default_factory=list)

    @staticmethod
    def from_dict(obj: Any, path: str) -> "Diff":
        raw = _expect_dict(obj, path)
        header = _header(raw, path)
        fields_path = f"{path}.fields"
        fields = _expect_dict(raw.get("fields"), fields_path)

        refs: List[DiffRef] = []
        for idx, item in enumerate(_expect_list(fields.get("refs") or [], f"{fields_path}.refs")):
            ref = _expect_dict(item, f"{fields_path}.refs[{idx}]")
            refs.append(
                DiffRef(
                    type=_opt_str(ref.get("type"), f"{fields_path}.refs[{idx}].type"),
                    name=_opt_str(ref.get("name"), f"{fields_path}.refs[{idx}].name"),
                )
            )

        attachments_path = f"{path}.attachments"
        attachments = _opt_dict(raw.get("attachments"), attachments_path)
        commits_raw = _opt_dict(attachments.get("commits"), f"{attachments_path}.commits")
        commits: List[DiffCommit] = []
        for idx, item in enumerate(
            _expect_list(commits_raw.get("commits") or [], f"{attachments_path}.commits.commits")
        ):
            c_path = f"{attachments_path}.commits.commits[{idx}]"
            commit = _expect_dict(item, c_path)
            author = _opt_dict(commit.get("author"), f"{c_path}.author")
            commits.append(
                DiffCommit(
                    identifier=_opt_str(commit.get("identifier"), f"{c_path}.identifier"),
                    tree=_opt_str(commit.get("tree"), f"{c_path}.tree"),
                    parents=_str_list(commit.get("parents"), f"{c_path}.parents"),
                    author_name=_opt_str(author.get("name"), f"{c_path}.author.name"),
                    author_email=_opt_str(author.get("email"), f"{c_path}.author.email"),
                    author_epoch=_opt_int(author.get("epoch"), f"{c_path}.author.epoch"),
                    message=_opt_str(commit.get("message"), f"{c_path}.message"),
                )
            )

        return Diff(
            revision_phid=_opt_str(fields.get("revisionPHID"), f"{fields_path}.revisionPHID"),
            author_phid=_opt_str(fields.get("authorPHID"), f"{fields_path}.authorPHID"),
            repository_phid=_opt_str(fields.get("repositoryPHID"), f"{fields_path}.repositoryPHID"),
            refs=refs,
            date_created=_opt_int(fields.get("dateCreated"), f"{fields_path}.dateCreated"),
            date_modified=_opt_int(fields.get("dateModified"), f"{fields_path}.dateModified"),
            policy=_policy(fields.get("policy"), f"{fields_path}.policy"),
            commits=commits,
            **header,
        )


@dataclass(frozen=True)
class RepositoryURI:
    id: Optional[int]
    phid: Optional[str]
    raw: Optional[str] = None
    display: Optional[str] = None
    effective: Optional[str] = None
    normalized: Optional[str] = None
    credential_phid: Optional[str] = None
    disabled: Optional[bool] = None
    builtin_protocol: Optional[str] = None
    builtin_identifier: Optional[str] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "RepositoryURI":
        raw = _expect_dict(obj, path)
        fields = _opt_dict(raw.get("fields"), f"{path}.fields")
        uri = _opt_dict(fields.get("uri"), f"{path}.fields.uri")
        builtin = _opt_dict(fields.get("builtin"), f"{path}.fields.builtin")
        return RepositoryURI(
            id=_opt_int(raw.get("id"), f"{path}.id"),
            phid=_opt_str(raw.get("phid"), f"{path}.phid"),
            raw=_opt_str(uri.get("raw"), f"{path}.fields.uri.raw"),
            display=_opt_str(uri.get("display"), f"{path}.fields.uri.display"),
            effective=_opt_str(uri.get("effective"), f"{path}.fields.uri.effective"),
            normalized=_opt_str(uri.get("normalized"), f"{path}.fields.uri.normalized"),
            credential_phid=_opt_str(fields.get("credentialPHID"), f"{path}.fields.credentialPHID"),
            disabled=_opt_bool(fields.get("disabled"), f"{path}.fields.disabled"),
            builtin_protocol=_opt_str(builtin.get("protocol"), f"{path}.fields.builtin.protocol"),
            builtin_identifier=_opt_str(
                builtin.get("identifier"), f"{path}.fields.builtin.identifier"
            ),
        )


@dataclass(frozen=True)
class Repository:
    """diffusion.repository.search result."""

    id: int
    phid: str
    name: str
    type: Optional[str] = None
    vcs: Optional[str] = None
    callsign: Optional[str] = None
    short_name: Optional[str] = None
    status: Optional[str] = None
    is_importing: Optional[bool] = None
    almanac_service_phid: Optional[str] = None
    space_phid: Optional[str] = None
    date_created: Optional[int] = None
    date_modified: Optional[int] = None
    policy: Dict[str, str] = field(default_factory=dict)
    uris: List[RepositoryURI] = field(default_factory=list)
    project_phids: List[str] = field(default_factory=list)

    @staticmethod
    def from_dict(obj: Any, path: str) -> "Repository":
        raw = _expect_dict(obj, path)
        header = _header(raw, path)
        fields_path = f"{path}.fields"
        fields = _expect_dict(raw.get("fields"), fields_path)
        name = _opt_str(fields.get("name"), f"{fields_path}.name")
        if name is None:
            raise SerializationError(f"Missing {fields_path}.name")

        attachments_path = f"{path}.attachments"
        attachments = _opt_dict(raw.get("attachments"), attachments_path)
        uris_raw = _opt_dict(attachments.get("uris"), f"{attachments_path}.uris")
        uris = [
            RepositoryURI.from_dict(item, f"{attachments_path}.uris.uris[{idx}]")
            for idx, item in enumerate(
                _expect_list(uris_raw.get("uris") or [], f"{attachments_path}.uris.uris")
            )
        ]

        return Repository(
            name=name,
            vcs=_opt_str(fields.get("vcs"), f"{fields_path}.vcs"),
            callsign=_opt_str(fields.get("callsign"), f"{fields_path}.callsign"),
            short_name=_opt_str(fields.get("shortName"), f"{fields_path}.shortName"),
            status=_opt_str(fields.get("status"), f"{fields_path}.status"),
            is_importing=_opt_bool(fields.get("isImporting"), f"{fields_path}.isImporting"),
            almanac_service_phid=_opt_str(
                fields.get("almanacServicePHID"), f"{fields_path}.almanacServicePHID"
            ),
            space_phid=_opt_str(fields.get("spacePHID"), f"{fields_path}.spacePHID"),
            date_created=_opt_int(fields.get("dateCreated"), f"{fields_path}.dateCreated"),
            date_modified=_opt_int(fields.get("dateModified"), f"{fields_path}.dateModified"),
            policy=_policy(fields.get("policy"), f"{fields_path}.policy"),
            uris=uris,
            project_phids=_project_phids(attachments, attachments_path),
            **header,
        )
