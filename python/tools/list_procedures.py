from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional


def _add_project_to_syspath() -> None:
    project_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(project_root))


_add_project_to_syspath()

from phabricator import ClientOptions, PhabricatorClient, ProcedureKind  # noqa: E402
from phabricator.config import options_from_env  # noqa: E402
from phabricator.errors import PhabricatorError  # noqa: E402

_KINDS = {"search": ProcedureKind.SEARCH, "edit": ProcedureKind.EDIT, "unsupported": ProcedureKind.UNSUPPORTED}


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="List the Conduit procedures a Phabricator install exposes."
    )
    parser.add_argument("--api", help="Conduit root, e.g. https://phab.example.com/api/")
    parser.add_argument("--token", help="API token (defaults to ~/.arcrc)")
    parser.add_argument("--kind", choices=sorted(_KINDS), help="Only list this kind")
    parser.add_argument("--describe", action="store_true", help="Print parameters too")
    parser.add_argument("--log-level", default="WARNING")
    parser.add_argument("--timeout-seconds", type=float, default=10.0)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(stream=sys.stderr)
    options = options_from_env(
        ClientOptions(
            api_url=args.api,
            token=args.token,
            log_level=args.log_level,
            timeout_seconds=args.timeout_seconds,
        )
    )
    try:
        client = PhabricatorClient(options)
    except PhabricatorError as exc:
        print(f"Initialization failed: {exc}", file=sys.stderr)
        return 2

    with client:
        kind = _KINDS.get(args.kind) if args.kind else None
        for name in client.procedures(kind):
            if args.describe:
                print(client.describe(name))
            else:
                print(name)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
