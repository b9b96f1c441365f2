"""
Configuration Controller — Facade the presentation layer drives.

Owns the wizard session, the loading/saving flags and the user-facing
error map, and is the only component that talks to the gateway.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from ..safety.guardian import InvariantViolation
from .gateway import CriteriaGateway, CriteriaGatewayError
from .models import STEP_DOMAINS, AssessmentCriteria, Domain, WizardDraft
from .validator import FieldError, validate_step
from .wizard import CriteriaWizard, DraftMessage

logger = logging.getLogger("criteria_engine.controller")

EVENT_SAVED = "saved"
EVENT_DELETED = "deleted"


class CriteriaController:
    """
    Imperative operations over one framework's assessment criteria.

    Concurrency: save and delete share the `is_saving` gate; calling either
    while one is pending is a no-op returning False. Closing the wizard does
    not cancel an in-flight save; its outcome is simply not shown.
    """

    def __init__(self, framework_id: str, gateway: CriteriaGateway):
        self.framework_id = framework_id
        self.gateway = gateway

        self.wizard: Optional[CriteriaWizard] = None
        self.criteria: Optional[AssessmentCriteria] = None
        self.domains: list[Domain] = []
        self.errors: dict[str, FieldError] = {}

        self.is_open = False
        self.is_loading = False
        self.is_saving = False
        self.is_delete_modal_open = False
        self.has_criteria = False

        self._subscribers: list[Callable[[str], None]] = []
        self._session = 0     # Bumped on open/close; stale async results are dropped

    # --- Read-only views ---

    @property
    def current_step(self) -> Optional[str]:
        return self.wizard.current_step if self.wizard else None

    @property
    def draft(self) -> Optional[WizardDraft]:
        return self.wizard.draft if self.wizard else None

    # --- Loading ---

    async def refresh(self) -> Optional[AssessmentCriteria]:
        """Reload the saved criteria and live domains for summary views."""
        try:
            self.criteria, self.domains = await asyncio.gather(
                self.gateway.load(self.framework_id),
                self.gateway.load_domains(self.framework_id),
            )
        except CriteriaGatewayError as e:
            logger.error(f"[{self.framework_id}] Refresh failed: {e}")
            self.errors = {"general": FieldError(e.tag)}
            return None
        self.errors = {}
        self.has_criteria = self.criteria is not None
        return self.criteria

    async def open_wizard(self) -> bool:
        """
        Open a wizard session, loading saved criteria and live domains
        concurrently. Returns False if loading failed; the wizard then
        stays open without a draft so nothing can overwrite saved data.
        """
        if self.is_loading:
            return False

        self._session += 1
        session = self._session
        self.is_open = True
        self.wizard = None
        self.errors = {}
        self.is_loading = True
        try:
            existing, domains = await asyncio.gather(
                self.gateway.load(self.framework_id),
                self.gateway.load_domains(self.framework_id),
            )
        except CriteriaGatewayError as e:
            logger.error(f"[{self.framework_id}] Could not open wizard: {e}")
            if session == self._session:
                self.errors = {"general": FieldError(e.tag)}
            return False
        finally:
            if session == self._session:
                self.is_loading = False

        if session != self._session:
            logger.debug(f"[{self.framework_id}] Wizard closed while loading; result dropped")
            return False

        self.criteria = existing
        self.domains = domains
        self.has_criteria = existing is not None
        self.wizard = CriteriaWizard.start(existing, domains)
        logger.info(
            f"[{self.framework_id}] Wizard opened "
            f"({'existing' if existing else 'new'} criteria, {len(domains)} domains)"
        )
        return True

    def close_wizard(self):
        """Discard the draft and tear down subscriptions. Persisted data is untouched."""
        self._session += 1
        self.is_open = False
        self.is_loading = False
        self.wizard = None
        self.errors = {}
        self._subscribers.clear()

    # --- Navigation and editing ---

    def next_step(self) -> bool:
        """Advance the wizard; True means the preview was confirmed."""
        wizard = self._require_wizard()
        ready = wizard.go_to_next_step()
        self.errors = dict(wizard.errors)
        return ready

    def prev_step(self):
        wizard = self._require_wizard()
        wizard.go_to_prev_step()
        self.errors = {}

    def update_draft(self, **changes) -> WizardDraft:
        return self._require_wizard().update_draft(**changes)

    def dispatch(self, message: DraftMessage) -> WizardDraft:
        return self._require_wizard().apply(message)

    # --- Writes ---

    async def save_criteria(self) -> bool:
        """
        Validate weights, then persist the draft.
        On success the wizard closes; on failure it stays open with a
        `general` error and the draft intact.
        """
        if self.is_saving:
            logger.debug(f"[{self.framework_id}] Save already in progress; ignored")
            return False

        wizard = self._require_wizard()
        criteria = wizard.commit(self.framework_id)

        domain_ids = [d.id for d in self.domains] if self.domains else None
        result = validate_step(STEP_DOMAINS, wizard.draft, domain_ids)
        if not result.is_valid:
            wizard.errors = result.summary()
            self.errors = dict(wizard.errors)
            return False

        session = self._session
        self.is_saving = True
        try:
            saved = await self.gateway.save(
                self.framework_id,
                criteria.type,
                criteria.domain_weights,
                criteria.levels,
            )
        except CriteriaGatewayError as e:
            logger.error(f"[{self.framework_id}] Save failed: {e}")
            if session == self._session:
                self.errors = {"general": FieldError(e.tag)}
            return False
        finally:
            self.is_saving = False

        self.criteria = saved
        self.has_criteria = True
        self._notify(EVENT_SAVED)
        if session == self._session:
            wizard.reset()
            self.close_wizard()
        return True

    async def delete_criteria(self) -> bool:
        """Remove the framework's criteria and close the confirmation dialog."""
        if self.is_saving:
            logger.debug(f"[{self.framework_id}] Write already in progress; delete ignored")
            return False

        self.is_saving = True
        try:
            await self.gateway.remove(self.framework_id)
        except CriteriaGatewayError as e:
            logger.error(f"[{self.framework_id}] Delete failed: {e}")
            self.errors = {"general": FieldError(e.tag)}
            return False
        finally:
            self.is_saving = False

        self.criteria = None
        self.has_criteria = False
        self.is_delete_modal_open = False
        self._notify(EVENT_DELETED)
        return True

    def open_delete_confirmation(self):
        self.is_delete_modal_open = True

    def close_delete_confirmation(self):
        self.is_delete_modal_open = False

    # --- Refresh subscribers ---

    def subscribe(self, callback: Callable[[str], None]) -> Callable[[], None]:
        """Register a callback for "saved"/"deleted" events; returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, event: str):
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                logger.exception(f"[{self.framework_id}] Subscriber failed on '{event}'")

    def _require_wizard(self) -> CriteriaWizard:
        if self.wizard is None:
            raise InvariantViolation("No wizard session is open")
        return self.wizard
