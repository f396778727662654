from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from apidoc.config import ExtractionConfig
from apidoc.core.annotations.directives import (
    extract_resource_directive,
    model_directive_from_tags,
    to_resource_directive,
)
from apidoc.core.annotations.models import AnnotationTag
from apidoc.core.fixtures.factory import FactoryRegistry
from apidoc.core.responses.model_resolver import ModelResolver
from apidoc.core.responses.models import SyntheticResponse
from apidoc.core.responses.synthesizer import ResponseSynthesizer
from apidoc.core.typeref import TypeRegistry
from apidoc.extracting.route_docs import get_route_tags, route_methods, route_uri

from .base import Strategy

log = logging.getLogger("apidoc.strategies")


class UseApiResourceTags(Strategy):
    """
    Example response from @apiResource / @apiResourceCollection plus
    @apiResourceModel in the endpoint docstring:

        @apiResourceCollection 200 myapp.resources.UserResource
        @apiResourceModel myapp.models.User states=admin,verified

    Never raises. A broken annotation costs one warning and this route's
    example, nothing more.
    """

    name = "use_api_resource_tags"

    def __init__(
        self,
        config: Optional[ExtractionConfig] = None,
        *,
        factories: Optional[FactoryRegistry] = None,
        types: Optional[TypeRegistry] = None,
        synthesizer: Optional[ResponseSynthesizer] = None,
    ):
        super().__init__(config)
        self.types = types or TypeRegistry()
        for name, target in self.config.type_aliases.items():
            self.types.alias(name, target)
        self.factories = factories or FactoryRegistry()
        self.resolver = ModelResolver(self.factories, self.types, verbose=self.config.verbose)
        self.synthesizer = synthesizer or ResponseSynthesizer(self.types)

    def __call__(
        self,
        route: Any,
        tags: Optional[Sequence[AnnotationTag]] = None,
    ) -> Optional[List[Dict[str, Any]]]:
        try:
            if tags is None:
                tags = get_route_tags(route)
            response = self.get_api_resource_response(tags)
            return [response.to_dict()] if response is not None else None
        except Exception:
            message = "Exception thrown when fetching API resource response for [%s] %s."
            if self.config.verbose:
                log.warning(message, ",".join(route_methods(route)), route_uri(route), exc_info=True)
            else:
                log.warning(
                    message + " Run this again with the --verbose flag to see the exception.",
                    ",".join(route_methods(route)),
                    route_uri(route),
                )
            return None

    def get_api_resource_response(self, tags: Sequence[AnnotationTag]) -> Optional[SyntheticResponse]:
        tag = extract_resource_directive(tags)
        if tag is None:
            return None

        directive = to_resource_directive(tag)
        model = model_directive_from_tags(tags)

        primary = self.resolver.resolve(model.model_type, model.states)
        secondary = None
        if directive.is_collection:
            secondary = self.resolver.resolve(model.model_type, model.states)

        return self.synthesizer.synthesize(
            directive.resource_class,
            directive.kind,
            primary.instance,
            secondary.instance if secondary is not None else None,
            status_code=directive.status_code,
        )
