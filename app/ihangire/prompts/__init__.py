"""Facade exposing every prompt builder behind one DefaultPromptFactory."""

from __future__ import annotations

from ..models import BusinessIdea
from . import advisor as _advisor
from . import ideas as _ideas
from . import naming as _naming
from . import visual as _visual


class DefaultPromptFactory:
    # IDEAS
    def discovery_instruction(self, *, location_query: str) -> str:
        return _ideas.discovery_instruction(location_query=location_query)

    def analysis_instruction(self, *, idea: BusinessIdea) -> str:
        return _ideas.analysis_instruction(idea=idea)

    # NAMING
    def naming_instruction(self, *, concept: str) -> str:
        return _naming.naming_instruction(concept=concept)

    # ADVISOR
    def advisor_system(self) -> str:
        return _advisor.advisor_system()

    # VISUALIZE
    def logo_prompt(self, *, concept: str) -> str:
        return _visual.logo_prompt(concept=concept)
