"""Prepare submitted findings for storage and announce stored updates."""

from __future__ import annotations

import dataclasses
import logging

from ..domain.errors import InternalError, InvalidInputError
from ..domain.models import GLOBAL_DISTINGUISHER, Finding, FindingUpdate
from .finding_events import FindingUpdateSink
from .finding_store import FindingPersistence
from .locator_implication import implied_locators

_LOG = logging.getLogger(__name__)


class FindingNormalizer:
    """Application logic sitting between the host and its collaborators."""

    __slots__ = ("persistence", "updates", "default_distinguisher")

    def __init__(
        self,
        persistence: FindingPersistence,
        updates: FindingUpdateSink,
        default_distinguisher: str = GLOBAL_DISTINGUISHER,
    ) -> None:
        self.persistence = persistence
        self.updates = updates
        self.default_distinguisher = default_distinguisher

    def read_finding(self, identifier: str, organization_id: int) -> Finding | None:
        try:
            return self.persistence.get_finding(identifier, organization_id)
        except Exception as exc:
            _LOG.exception("Unable to read finding %s", identifier)
            raise InternalError("unable to read finding") from exc

    def read_findings(self, organization_id: int) -> list[Finding]:
        try:
            return self.persistence.get_findings(organization_id)
        except Exception as exc:
            _LOG.exception("Unable to list findings for organization %s", organization_id)
            raise InternalError("unable to list findings") from exc

    def normalize(self, finding: Finding) -> Finding:
        """Return the finding as it will be stored, without side effects.

        The caller identifier is dropped, the locator distinguisher defaults to
        the reserved global value and the implied locator closure is attached.

        Raises:
            InvalidInputError: a required field is missing or a locator value
                does not parse.
            SemanticConflictError: the locator or a locator it implies names a
                disallowed target.
        """

        if not finding.report_distinguisher.type:
            raise InvalidInputError("must set report distinguisher type")
        if not finding.report_distinguisher.value:
            raise InvalidInputError("must set report distinguisher value")
        if not finding.report_locator.type:
            raise InvalidInputError("must set report locator type")
        if not finding.report_locator.value:
            raise InvalidInputError("must set report locator value")

        locator = finding.report_locator
        if not locator.distinguisher:
            locator = dataclasses.replace(
                locator, distinguisher=self.default_distinguisher
            )
        return dataclasses.replace(
            finding,
            identifier="",
            report_locator=locator,
            implied_report_locators=implied_locators(locator),
        )

    def post_finding(self, finding: Finding, organization_id: int) -> Finding:
        """Validate, store and announce a submitted finding.

        Nothing is stored or announced unless the finding and its whole locator
        closure are valid. A failed announcement is logged and does not undo
        the stored finding.

        Raises:
            InvalidInputError, SemanticConflictError: see :meth:`normalize`.
            InternalError: the persistence collaborator failed.
        """

        normalized = self.normalize(finding)
        try:
            stored = self.persistence.update_finding(normalized, organization_id)
        except Exception as exc:
            _LOG.exception(
                "Unable to store finding for organization %s", organization_id
            )
            raise InternalError("unable to store finding") from exc

        update = FindingUpdate.from_finding(stored)
        try:
            self.updates.emit(update)
        except Exception as exc:
            _LOG.warning("Unable to publish finding update %s: %s", update.id, exc)
        return stored
