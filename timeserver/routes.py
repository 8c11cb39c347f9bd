"""
Declarative route tree and its compilation into a flat path table.

The tree names handlers by tag; the app factory maps tags to endpoints.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from fastapi import APIRouter

logger = logging.getLogger(__name__)

NOT_FOUND = "not_found"


@dataclass(frozen=True)
class RouteNode:
    name: str
    handler: Optional[str] = None
    children: Tuple["RouteNode", ...] = ()


API_TREE = RouteNode(
    name="",
    handler="doc_page",
    children=(
        RouteNode(
            name="now",
            handler=NOT_FOUND,
            children=(
                RouteNode(name="iso", handler="iso_datetime"),
                RouteNode(name="unix", handler="unix_timestamp"),
                RouteNode(name="parsed", handler="datetime_parsed"),
            ),
        ),
        RouteNode(
            name="convert",
            handler=NOT_FOUND,
            children=(
                RouteNode(name="timezone", handler="convert_timezone"),
                RouteNode(name="listtimezones", handler="list_timezones"),
            ),
        ),
    ),
)


def compile_routes(node: RouteNode, prefix: str = "") -> Dict[str, str]:
    """
    Flatten a route tree into {path: handler tag}.

    The root (empty name) is "/", every other node appends "name/" to its
    parent's path. Nodes without a handler are skipped but their children
    are still registered. On a duplicate path the first binding wins.
    """
    table: Dict[str, str] = {}
    _collect(node, prefix, table)
    return table


def _collect(node: RouteNode, prefix: str, table: Dict[str, str]) -> None:
    path = prefix + ("/" if node.name == "" else f"{node.name}/")
    if node.handler is not None:
        if path in table:
            logger.warning(f"Duplicate route {path} for {node.handler}, keeping {table[path]}")
        else:
            table[path] = node.handler
    for child in node.children:
        _collect(child, path, table)


Handler = Tuple[Callable, List[str]]


def build_router(table: Mapping[str, str], handlers: Mapping[str, Handler]) -> APIRouter:
    """Bind each compiled path to its endpoint. Unknown tags raise KeyError."""
    router = APIRouter()
    for path, tag in table.items():
        endpoint, methods = handlers[tag]
        router.add_api_route(
            path, endpoint, methods=methods, name=f"{tag}:{path}", response_model=None
        )
        logger.debug(f"Registered {','.join(methods)} {path} -> {tag}")
    return router
