"""BaseService: foundation for all cdnctl services.

Every service receives a :class:`Depot` at construction time. The Depot
provides the registry, blob store, and binding store.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cdnctl.services.result import ServiceResult

if TYPE_CHECKING:
    from cdnctl.domain.errors import CdnError
    from cdnctl.infrastructure.depot import Depot

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class CatalogService(BaseService):
            def add_domain(self, ...) -> ServiceResult:
                try:
                    self._depot.registry.add_domain(...)
                except CdnError as exc:
                    return self._error("add_domain", exc)
    """

    def __init__(self, depot: Depot) -> None:
        self._depot = depot

    _fail = staticmethod(ServiceResult.fail)

    @classmethod
    def _error(cls, op: str, exc: CdnError) -> ServiceResult:
        """Translate a domain exception into a failed result."""
        logger.debug("%s failed: %s", op, exc)
        return cls._fail(op, exc.code, str(exc))
