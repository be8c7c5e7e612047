import logging

import httpx
from conduit_fakes import API_URL, TOKEN, catalog_response, page_response, procedure_of

from phabricator.client import PhabricatorClient
from phabricator.config import ClientOptions
from phabricator.logging import get_logger, parse_log_level, sanitize_form


def test_get_logger_prefers_supplied_logger():
    custom = logging.getLogger("phabricator.tests.custom")
    assert get_logger(custom) is custom
    assert get_logger().name == "phabricator"


def test_parse_log_level_accepts_aliases():
    assert parse_log_level("warn") == logging.WARNING
    assert parse_log_level(" Debug ") == logging.DEBUG


def test_sanitize_form_redacts_token():
    sanitized = sanitize_form(f"api.token={TOKEN}&constraints[ids][0]=5")
    assert TOKEN not in sanitized
    assert "api.token=%3Credacted%3E" in sanitized
    assert "constraints[ids][0]=5" in sanitized


def test_client_logs_to_supplied_sink_without_token(caplog):
    def handler(request: httpx.Request) -> httpx.Response:
        if procedure_of(request) == "conduit.query":
            return catalog_response()
        return page_response([{"id": 1}])

    sink = logging.getLogger("phabricator.tests.sink")
    with caplog.at_level(logging.DEBUG, logger="phabricator.tests.sink"):
        with httpx.Client(transport=httpx.MockTransport(handler)) as http_client:
            with PhabricatorClient(
                ClientOptions(api_url=API_URL, token=TOKEN, log_level="DEBUG"),
                http_client=http_client,
                logger=sink,
            ) as client:
                list(client.search("maniphest.search", None))

    records = [r for r in caplog.records if r.name == "phabricator.tests.sink"]
    assert any(r.getMessage() == "HTTP Request" for r in records)
    assert any("Procedure not supported yet" in r.getMessage() for r in records)
    assert all(TOKEN not in r.getMessage() for r in records)


def test_client_leaves_package_logger_level_alone():
    def handler(request: httpx.Request) -> httpx.Response:
        return catalog_response()

    package_logger = logging.getLogger("phabricator")
    previous = package_logger.level
    package_logger.setLevel(logging.ERROR)
    try:
        with httpx.Client(transport=httpx.MockTransport(handler)) as http_client:
            with PhabricatorClient(ClientOptions(api_url=API_URL, token=TOKEN), http_client=http_client):
                pass
        assert package_logger.level == logging.ERROR
    finally:
        package_logger.setLevel(previous)


def test_explicit_log_level_applies_to_supplied_logger():
    def handler(request: httpx.Request) -> httpx.Response:
        return catalog_response()

    sink = logging.getLogger("phabricator.tests.level")
    package_level = logging.getLogger("phabricator").level
    with httpx.Client(transport=httpx.MockTransport(handler)) as http_client:
        with PhabricatorClient(
            ClientOptions(api_url=API_URL, token=TOKEN, log_level="warn"),
            http_client=http_client,
            logger=sink,
        ):
            pass

    assert sink.level == logging.WARNING
    assert logging.getLogger("phabricator").level == package_level
