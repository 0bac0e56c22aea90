"""Minimal deterministic OpenAPI document.

Paths are read from the application's URL map, so every registered route
appears with its declared roles (``x-required-roles``). Conditional GETs
document ETag / Cache-Control and their 304 response.
"""
import re
from typing import Any, Dict

from flask import current_app

from .openapi_parts.constants import (
    CACHEABLE,
    CONFLICTS,
    CREATED,
    QUERY_PARAMS,
    REQUEST_BODIES,
    RESPONSE_BODIES,
    SCHEMAS,
)
from .openapi_parts.helpers import caching_headers, json_content, ref

__all__ = ["build_openapi_spec"]

_RULE_ARG = re.compile(r"<(?:(?P<conv>[^:<>]+):)?(?P<name>[^<>]+)>")
_SKIP = {"static", "openapi_spec", "docs_index"}


def _path(rule: str) -> str:
    return _RULE_ARG.sub(lambda m: "{" + m.group("name") + "}", rule)


def _operation(endpoint: str, rule, view) -> Dict[str, Any]:
    roles = sorted(getattr(view, "required_roles", ()), key=int)
    summary = (view.__doc__ or endpoint.split(".")[-1].replace("_", " ").capitalize()).strip().splitlines()[0]
    op: Dict[str, Any] = {
        "summary": summary,
        "operationId": endpoint.replace(".", "_"),
        "tags": [endpoint.split(".")[0] if "." in endpoint else "service"],
        "x-required-roles": [r.name for r in roles],
        "parameters": [],
        "responses": {},
    }
    for m in _RULE_ARG.finditer(rule.rule):
        kind = "integer" if m.group("conv") == "int" else "string"
        op["parameters"].append({"name": m.group("name"), "in": "path", "required": True, "schema": {"type": kind}})
    for name in QUERY_PARAMS.get(endpoint, []):
        op["parameters"].append({"name": name, "in": "query", "required": False, "schema": {"type": "string"}})
    if endpoint in REQUEST_BODIES:
        op["requestBody"] = {"required": True, "content": json_content(ref(REQUEST_BODIES[endpoint]))}

    responses = op["responses"]
    ok = "201" if endpoint in CREATED else "200"
    responses[ok] = {"description": "Created" if ok == "201" else "OK"}
    if endpoint in CACHEABLE:
        schema_name, many, scope = CACHEABLE[endpoint]
        schema = {"type": "array", "items": ref(schema_name)} if many else ref(schema_name)
        responses[ok]["headers"] = caching_headers(scope)
        responses[ok]["content"] = json_content(schema)
        op["parameters"].append({"name": "If-None-Match", "in": "header", "required": False, "schema": {"type": "string"}})
        op["x-cache-scope"] = scope
        responses["304"] = {"description": "Not Modified", "headers": caching_headers(scope)}
    elif endpoint in RESPONSE_BODIES:
        responses[ok]["content"] = json_content(ref(RESPONSE_BODIES[endpoint]))
    if endpoint in REQUEST_BODIES:
        responses["400"] = {"description": "Validation error", "content": json_content(ref("Error"))}
    if roles or endpoint == "auth.login":
        responses["401"] = {"description": "Not authenticated", "content": json_content(ref("Error"))}
    if roles:
        responses["403"] = {"description": "Insufficient role", "content": json_content(ref("Error"))}
    if "<" in rule.rule:
        responses["404"] = {"description": "Not Found", "content": json_content(ref("Error"))}
    if endpoint in CONFLICTS:
        responses["409"] = {"description": "Conflict", "content": json_content(ref("Error"))}
    return op


def build_openapi_spec() -> Dict[str, Any]:
    paths: Dict[str, Any] = {}
    for rule in sorted(current_app.url_map.iter_rules(), key=lambda r: (r.rule, r.endpoint)):
        if rule.endpoint in _SKIP:
            continue
        view = current_app.view_functions[rule.endpoint]
        for method in sorted((rule.methods or set()) - {"HEAD", "OPTIONS"}):
            paths.setdefault(_path(rule.rule), {})[method.lower()] = _operation(rule.endpoint, rule, view)

    return {
        "openapi": "3.0.3",
        "info": {"title": "Stockroom API", "version": "0.1.0"},
        "paths": paths,
        "components": {
            "schemas": dict(SCHEMAS),
            "securitySchemes": {"SessionCookie": {"type": "apiKey", "in": "cookie", "name": "session"}},
        },
        "security": [{"SessionCookie": []}],
    }
