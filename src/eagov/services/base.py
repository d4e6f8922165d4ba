"""BaseService — shared foundation for eagov services.

Every service receives the resolved :class:`EagovSettings` at
construction time and reads governance and access configuration from it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from eagov.config.settings import EagovSettings


class BaseService:
    """Base for service-layer classes.

    Usage::

        class GovernanceService(BaseService):
            def check(self, graph) -> ServiceResult:
                config = self._settings.governance
                ...
    """

    def __init__(self, settings: EagovSettings | None = None) -> None:
        if settings is None:
            from eagov.config.settings import EagovSettings

            settings = EagovSettings()
        self._settings = settings

    @property
    def settings(self) -> EagovSettings:
        return self._settings
