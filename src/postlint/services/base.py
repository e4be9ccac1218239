"""BaseService — foundation for all postlint services."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from postlint.infrastructure.site import Site


class BaseService:
    """Base for service-layer classes.

    Every service receives a :class:`Site` at construction time and uses it
    for all file access.

    Usage::

        class CheckService(BaseService):
            def check(self) -> ServiceResult:
                for path in self._site.find_posts():
                    ...
    """

    def __init__(self, site: Site) -> None:
        self._site = site
