"""BaseService: foundation for services that read a finished Design.

Services never mutate the Design they are given. Graph-shaped analysis goes
through a lazily built :class:`GraphEngine` projection.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from neoarch.infrastructure.graph.engine import GraphEngine

if TYPE_CHECKING:
    from neoarch.domain.design import Design


class BaseService:
    """Base for design-backed services (export, check).

    Usage::

        class ExportService(BaseService):
            def export_dsl(self) -> ServiceResult:
                content = to_structurizr_dsl(self._design)
                ...
    """

    def __init__(self, design: Design) -> None:
        self._design = design
        self._engine = GraphEngine(design)

    @property
    def design(self) -> Design:
        return self._design

    @property
    def engine(self) -> GraphEngine:
        return self._engine
