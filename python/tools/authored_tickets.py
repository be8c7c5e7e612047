from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional


def _add_project_to_syspath() -> None:
    project_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(project_root))


_add_project_to_syspath()

from phabricator import (  # noqa: E402
    CancelToken,
    ClientOptions,
    Ok,
    PhabricatorClient,
    Ticket,
    TicketSearchArgs,
)
from phabricator.config import options_from_env  # noqa: E402
from phabricator.errors import PhabricatorError  # noqa: E402


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Print the tasks you created in the last N days."
    )
    parser.add_argument("--api", help="Conduit root, e.g. https://phab.example.com/api/")
    parser.add_argument("--days", type=int, default=30)
    parser.add_argument("--max", type=int, default=0, help="Stop after this many tasks")
    parser.add_argument("--log-level", default="ERROR")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    if args.days <= 0:
        print("--days must be > 0", file=sys.stderr)
        return 2
    logging.basicConfig(stream=sys.stderr)

    try:
        client = PhabricatorClient(
            options_from_env(ClientOptions(api_url=args.api, log_level=args.log_level))
        )
    except PhabricatorError as exc:
        print(f"Initialization failed: {exc}", file=sys.stderr)
        return 2

    search_args = TicketSearchArgs(query_key="authored")
    search_args.attachments.subscribers = True
    search_args.constraints.created_start = int(time.time()) - args.days * 86400

    cancel = CancelToken()
    printed = 0
    with client, client.search("maniphest.search", search_args, Ticket, cancel=cancel) as results:
        for item in results:
            if not isinstance(item, Ok):
                print(item.error, file=sys.stderr)
                if item.terminal:
                    return 1
                continue
            print(item.value)
            printed += 1
            if args.max and printed >= args.max:
                cancel.cancel()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
