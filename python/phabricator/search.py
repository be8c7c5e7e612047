"""Paginated query engine for ``*.search`` procedures.

A search runs on two worker threads that share one cancel token:

* the pager issues page requests strictly one after another, following the
  ``after`` cursor, and forwards every raw record of a page into a bounded
  queue before it asks for the next page;
* the decoder drains that queue, turns each raw record into the caller's
  shape and hands ``Ok``/``Err`` elements to the consumer through a second
  bounded queue.

While the consumer works through page N the pager is already waiting on
page N+1. Both queues hold at most ``buffer_size`` items, so a slow
consumer stalls production instead of growing memory. Every blocking queue
operation polls the cancel token, so cancelling never leaves a worker stuck
on a full or empty queue.
"""
from __future__ import annotations

import logging
import queue
import threading
import weakref
from dataclasses import dataclass
from typing import Any, Generic, Iterator, List, Optional, TypeVar
from urllib.parse import quote_plus

from .catalog import ProcedureCatalog
from .decoding import RecordDecoder, RecordShape, decode_record, resolve_decoder
from .encoding import encode_arguments
from .envelope import parse_envelope
from .errors import DecodeError
from .fixups import FixupTable
from .logging import get_logger
from .models import Err, Ok, Page, ProcedureKind, SearchResult
from .transport import ConduitTransport

T = TypeVar("T")

# Conduit pages hold 100 results.
DEFAULT_BUFFER_SIZE = 100

_POLL_INTERVAL_SECONDS = 0.05

_DONE = object()
_CANCELLED = object()


class CancelToken:
    """Cooperative cancellation flag, optionally chained to a parent token."""

    def __init__(self, parent: Optional["CancelToken"] = None):
        self._event = threading.Event()
        self._parent = parent

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._parent is not None and self._parent.cancelled

    def cancel(self) -> None:
        self._event.set()

    def child(self) -> "CancelToken":
        return CancelToken(parent=self)


def _put(q: "queue.Queue[Any]", item: Any, token: CancelToken) -> bool:
    while not token.cancelled:
        try:
            q.put(item, timeout=_POLL_INTERVAL_SECONDS)
            return True
        except queue.Full:
            continue
    return False


def _get(q: "queue.Queue[Any]", token: CancelToken) -> Any:
    while not token.cancelled:
        try:
            return q.get(timeout=_POLL_INTERVAL_SECONDS)
        except queue.Empty:
            continue
    return _CANCELLED


@dataclass(frozen=True)
class _RawRecord:
    path: str
    raw: Any


@dataclass(frozen=True)
class _Failure:
    error: Exception


class _SearchRun:
    """Worker state for one search; the stream owns it, the threads use it."""

    def __init__(
        self,
        *,
        transport: ConduitTransport,
        procedure: str,
        base_body: str,
        decoder: RecordDecoder,
        fixups: FixupTable,
        token: CancelToken,
        buffer_size: int,
        logger: logging.Logger,
    ):
        self.transport = transport
        self.procedure = procedure
        self.url = transport.url_for(procedure)
        self.base_body = base_body
        self.decoder = decoder
        self.fixups = fixups
        self.token = token
        self.logger = logger
        self.raw: "queue.Queue[Any]" = queue.Queue(maxsize=buffer_size)
        self.out: "queue.Queue[Any]" = queue.Queue(maxsize=buffer_size)
        self.requests_issued = 0
        self.threads: List[threading.Thread] = [
            threading.Thread(
                target=self.paginate, name=f"phabricator-pager[{procedure}]", daemon=True
            ),
            threading.Thread(
                target=self.decode, name=f"phabricator-decoder[{procedure}]", daemon=True
            ),
        ]

    def start(self) -> None:
        for thread in self.threads:
            thread.start()

    def cancel(self) -> None:
        self.token.cancel()

    def join(self) -> None:
        current = threading.current_thread()
        for thread in self.threads:
            if thread is not current and thread.is_alive():
                thread.join()

    def page_body(self, after: Optional[str]) -> str:
        if not after:
            return self.base_body
        cursor = f"after={quote_plus(after)}"
        return f"{self.base_body}&{cursor}" if self.base_body else cursor

    def fetch_page(self, after: Optional[str], page_number: int) -> Page:
        self.requests_issued += 1
        body = self.transport.post(self.url, self.page_body(after))
        body = self.fixups.apply(self.procedure, body)
        result = parse_envelope(body, self.procedure)
        return Page.from_result(result, f"{self.procedure}.page[{page_number}].result")

    def emit_page(self, page: Page, page_number: int) -> bool:
        for index, raw in enumerate(page.data):
            record = _RawRecord(f"{self.procedure}.page[{page_number}].data[{index}]", raw)
            if not _put(self.raw, record, self.token):
                self.logger.debug(
                    "Cancelled while forwarding page %d of %s", page_number, self.procedure
                )
                return False
            self.logger.debug("Forwarded record %s for decoding", record.path)
        return True

    def paginate(self) -> None:
        after: Optional[str] = None
        page_number = 0
        try:
            while True:
                if self.token.cancelled:
                    self.logger.debug("Search %s cancelled before page %d", self.procedure, page_number)
                    return
                try:
                    page = self.fetch_page(after, page_number)
                except Exception as exc:
                    # Terminal: forwarded to the consumer, no resumption.
                    self.logger.error(
                        "Search %s failed on page %d: %s", self.procedure, page_number, exc
                    )
                    _put(self.raw, _Failure(exc), self.token)
                    return
                if not self.emit_page(page, page_number):
                    return
                if page.is_last:
                    self.logger.debug(
                        "Search %s drained after %d pages", self.procedure, page_number + 1
                    )
                    return
                after = page.after
                page_number += 1
        finally:
            _put(self.raw, _DONE, self.token)

    def decode(self) -> None:
        try:
            while True:
                item = _get(self.raw, self.token)
                if item is _DONE or item is _CANCELLED:
                    return
                if isinstance(item, _Failure):
                    _put(self.out, Err(item.error, terminal=True), self.token)
                    return
                try:
                    value = decode_record(self.decoder, item.raw, item.path)
                except DecodeError as exc:
                    self.logger.error("Failed to convert record to the requested shape: %s", exc)
                    if not _put(self.out, Err(exc, terminal=False), self.token):
                        return
                    continue
                if not _put(self.out, Ok(value), self.token):
                    return
        finally:
            _put(self.out, _DONE, self.token)


class ResultStream(Generic[T]):
    """Lazy, single-pass stream of ``Ok(record)`` / ``Err(error)`` elements.

    The stream closes when the last page is consumed, after a terminal error,
    or on cancellation; once closed it yields nothing more. ``close()``
    cancels and joins both workers, so use the stream as a context manager
    when iteration may stop early::

        with client.search("maniphest.search", args, Ticket) as results:
            for item in results:
                ...
    """

    def __init__(self, run: _SearchRun):
        self._run = run
        self._closed = False
        self._finalizer = weakref.finalize(self, run.cancel)

    @property
    def procedure(self) -> str:
        return self._run.procedure

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def requests_issued(self) -> int:
        return self._run.requests_issued

    def cancel(self) -> None:
        self._run.cancel()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._run.cancel()
        self._run.join()
        self._finalizer.detach()

    def __iter__(self) -> Iterator[SearchResult[T]]:
        return self

    def __next__(self) -> SearchResult[T]:
        if self._closed:
            raise StopIteration
        item = _get(self._run.out, self._run.token)
        if item is _DONE or item is _CANCELLED:
            self.close()
            raise StopIteration
        return item

    def values(self, *, skip_decode_errors: bool = False) -> Iterator[T]:
        """Yield bare records, raising the first error encountered.

        With ``skip_decode_errors`` records that failed to decode are logged
        and skipped; terminal errors still raise.
        """
        try:
            for item in self:
                if isinstance(item, Ok):
                    yield item.value
                elif skip_decode_errors and not item.terminal:
                    continue
                else:
                    raise item.error
        finally:
            self.close()

    def __enter__(self) -> "ResultStream[T]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def search(
    transport: ConduitTransport,
    catalog: ProcedureCatalog,
    procedure: str,
    arguments: Any,
    shape: RecordShape,
    *,
    cancel: Optional[CancelToken] = None,
    fixups: Optional[FixupTable] = None,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    logger: logging.Logger | None = None,
) -> ResultStream[Any]:
    """Start a paginated search and return its result stream.

    Unknown procedures, bad arguments and bad shapes raise here, before any
    request is made or any thread is started.
    """
    catalog.require(procedure, ProcedureKind.SEARCH)
    if buffer_size <= 0:
        raise ValueError("buffer_size must be > 0")
    base_body = encode_arguments(arguments)
    decoder = resolve_decoder(shape)
    token = cancel.child() if cancel is not None else CancelToken()
    run = _SearchRun(
        transport=transport,
        procedure=procedure,
        base_body=base_body,
        decoder=decoder,
        fixups=fixups if fixups is not None else FixupTable(),
        token=token,
        buffer_size=buffer_size,
        logger=get_logger(logger),
    )
    stream: ResultStream[Any] = ResultStream(run)
    run.start()
    return stream
