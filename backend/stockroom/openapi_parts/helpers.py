from typing import Any, Dict

from stockroom.utils.listing import cache_control


def ref(name: str) -> Dict[str, Any]:
    return {"$ref": f"#/components/schemas/{name}"}


def json_content(schema: Dict[str, Any]) -> Dict[str, Any]:
    return {"application/json": {"schema": schema}}


def caching_headers(scope: str) -> Dict[str, Any]:
    return {
        "ETag": {"description": "Weak entity tag to support cache revalidation", "schema": {"type": "string"}},
        "Cache-Control": {
            "description": "Cache policy directives for this response",
            "schema": {"type": "string", "example": cache_control(scope)},
        },
    }


__all__ = ["ref", "json_content", "caching_headers"]
