from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import FastAPI
from fastapi.routing import APIRoute

from apidoc.extracting.route_docs import route_methods, route_uri
from apidoc.extracting.strategies.base import Strategy

log = logging.getLogger("apidoc.generator")


def generate_examples(app: FastAPI, strategy: Strategy) -> List[Dict[str, Any]]:
    """
    Run the strategy over every API route of the app.

    Routes the strategy has nothing for are left out. Strategies are
    expected to swallow their own failures; anything that still escapes is
    logged and the route skipped.
    """
    out: List[Dict[str, Any]] = []
    for route in app.routes:
        if not isinstance(route, APIRoute):
            continue
        try:
            responses = strategy(route)
        except Exception as e:
            log.error("Strategy %s failed for %s: %s", getattr(strategy, "name", type(strategy).__name__), route_uri(route), e)
            continue
        if not responses:
            continue
        out.append({
            "methods": route_methods(route),
            "path": route_uri(route),
            "responses": responses,
        })

    log.info("Generated example responses for %d of %d routes", len(out), len(app.routes))
    return out
