"""
In-process registry of open quotations.

Each QuotationSession pairs a QuotationAggregator with the UI view-state
(which panel is expanded). Sessions live as long as the process; nothing is
written to disk.
"""

import logging
import uuid

from .quotation import QuotationAggregator

logger = logging.getLogger(__name__)


class QuotationSession:
    """A quotation plus the id of the currently expanded panel (or None)."""

    def __init__(self, session_id: str):
        self.id = session_id
        self.quotation = QuotationAggregator()
        self.active_panel_id = None

    def add_panel(self) -> int:
        """Add a panel and expand it."""
        panel_id = self.quotation.add_panel()
        self.active_panel_id = panel_id
        return panel_id

    def remove_panel(self, panel_id: int) -> bool:
        """Remove a panel; if it was expanded, expand the first remaining one (or none)."""
        removed = self.quotation.remove_panel(panel_id)
        if removed and self.active_panel_id == panel_id:
            remaining = self.quotation.panel_ids
            self.active_panel_id = remaining[0] if remaining else None
        return removed

    def set_active(self, panel_id) -> None:
        """Expand `panel_id`, or collapse everything with None. Unknown ids collapse."""
        if panel_id is not None and self.quotation.get_panel(panel_id) is None:
            panel_id = None
        self.active_panel_id = panel_id


class SessionRegistry:
    def __init__(self):
        self._sessions: dict[str, QuotationSession] = {}

    def create(self) -> QuotationSession:
        """Open a quotation holding one empty, expanded panel."""
        session = QuotationSession(str(uuid.uuid4()))
        session.add_panel()
        self._sessions[session.id] = session
        logger.info("Opened quotation %s", session.id)
        return session

    def get(self, session_id: str):
        return self._sessions.get(session_id)

    def clear(self) -> None:
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)


registry = SessionRegistry()


def get_registry() -> SessionRegistry:
    """FastAPI dependency."""
    return registry
