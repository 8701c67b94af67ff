from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pytest
import yaml
from fastapi import FastAPI
from fastapi.routing import APIRoute

from tablebook.infrastructure.config import Settings
from tablebook.main import create_app


def openapi_path() -> Path:
    from tablebook.infrastructure.config import settings
    return settings.openapi_path


@pytest.fixture()
def app() -> FastAPI:
    app = create_app(Settings(database_url="sqlite+pysqlite:///:memory:", seed_tables=False))
    yield app
    app.state.database.dispose()


def _load_openapi_yaml() -> dict[str, Any]:
    path = openapi_path()
    with path.open("r", encoding="utf-8") as f:
        doc = yaml.safe_load(f)
    assert isinstance(doc, dict)
    return doc


def _normalize_http_methods(methods: Iterable[str]) -> set[str]:
    return {m.lower() for m in methods}


def _is_public_api_route(route: APIRoute) -> bool:
    # Exclude docs/openapi endpoints if they exist
    return not route.path.startswith(("/docs", "/redoc", "/openapi"))


def test_openapi_is_exactly_the_yaml_contract(app: FastAPI) -> None:
    """
    Contract test: the app's OpenAPI must match the committed YAML contract.
    """
    expected = _load_openapi_yaml()
    actual = app.openapi()

    assert actual == expected


def test_all_fastapi_routes_are_declared_in_openapi_paths(app: FastAPI) -> None:
    """
    Contract test: every public APIRoute must exist in the OpenAPI `paths` with its HTTP methods.
    """
    paths: dict[str, Any] = app.openapi().get("paths", {})
    assert isinstance(paths, dict)

    api_routes = [r for r in app.routes if isinstance(r, APIRoute) and _is_public_api_route(r)]
    assert api_routes, "No API routes found; is the router included in the app?"

    missing: list[str] = []
    for route in api_routes:
        declared = paths.get(route.path)
        if declared is None:
            missing.append(route.path)
            continue
        for method in _normalize_http_methods(route.methods or ()) - {"head", "options"}:
            if method not in declared:
                missing.append(f"{method.upper()} {route.path}")

    assert not missing, f"Routes missing from the OpenAPI contract: {missing}"


def test_declared_status_codes_match_route_defaults(app: FastAPI) -> None:
    """
    The success code a route returns must be the one the contract documents.
    """
    paths = _load_openapi_yaml()["paths"]

    for route in app.routes:
        if not isinstance(route, APIRoute) or not _is_public_api_route(route):
            continue
        for method in _normalize_http_methods(route.methods or ()) - {"head", "options"}:
            responses = paths[route.path][method]["responses"]
            expected = str(route.status_code or 200)
            assert expected in responses, f"{method.upper()} {route.path} does not document {expected}"


def test_every_operation_id_is_unique() -> None:
    doc = _load_openapi_yaml()
    operation_ids = [op["operationId"] for item in doc["paths"].values() for op in item.values()]

    assert len(operation_ids) == len(set(operation_ids))
