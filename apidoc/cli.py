from __future__ import annotations

import argparse
import importlib
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from fastapi import FastAPI

from apidoc.config import ExtractionConfig
from apidoc.core.fixtures.factory import FactoryRegistry
from apidoc.core.typeref import TypeRegistry
from apidoc.extracting.generator import generate_examples
from apidoc.extracting.strategies.use_api_resource_tags import UseApiResourceTags


def load_symbol(target: str, default_attr: Optional[str] = None) -> Any:
    """'pkg.module:attr' -> attr. Without ':' the default_attr is used."""
    module_name, _, attr = target.partition(":")
    attr = attr or default_attr or ""
    if not attr:
        raise ValueError(f"Target '{target}' must look like 'module:attribute'")
    module = importlib.import_module(module_name)
    try:
        return getattr(module, attr)
    except AttributeError as e:
        raise ValueError(f"Module '{module_name}' has no attribute '{attr}'") from e


def build_strategy(config: ExtractionConfig, factories_target: Optional[str]) -> UseApiResourceTags:
    factories = None
    types = None
    if factories_target:
        # a factories module exposes FACTORIES and optionally TYPES
        module = importlib.import_module(factories_target)
        factories = getattr(module, "FACTORIES", None)
        types = getattr(module, "TYPES", None)
        if not isinstance(factories, FactoryRegistry):
            raise ValueError(f"{factories_target} must define FACTORIES = FactoryRegistry(...)")
        if types is not None and not isinstance(types, TypeRegistry):
            raise ValueError(f"{factories_target}.TYPES must be a TypeRegistry")
    return UseApiResourceTags(config, factories=factories, types=types)


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(
        prog="apidoc-examples",
        description="Generate example responses for a FastAPI app from @apiResource docstring tags",
    )
    ap.add_argument("app", help="FastAPI app as 'module:attribute' (default attribute: app)")
    ap.add_argument("--factories", default=None, help="Module defining FACTORIES (and optionally TYPES)")
    ap.add_argument("--out", default=None, help="Write JSON here instead of stdout")
    ap.add_argument("--verbose", action="store_true", help="Show full exceptions for failing routes")
    args = ap.parse_args(argv)

    config = ExtractionConfig.from_env(verbose=True if args.verbose else None)
    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        app = load_symbol(args.app, default_attr="app")
        strategy = build_strategy(config, args.factories)
    except (ImportError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    if not isinstance(app, FastAPI):
        print(f"ERROR: {args.app} is not a FastAPI app", file=sys.stderr)
        return 2

    examples = generate_examples(app, strategy)
    text = json.dumps(examples, indent=2, sort_keys=True)

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text + "\n", encoding="utf-8")
        print(f"Wrote {len(examples)} example(s): {out_path}")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
