import logging

from sqlalchemy import event
from sqlalchemy.orm.attributes import NO_VALUE

from .. import models

logger = logging.getLogger(__name__)

# Models whose ``status`` column drives a lifecycle
TRACKED_MODELS = (models.Booking, models.HelperListing)

_registered = False


def _label(value) -> str:  # noqa: ANN001
    return getattr(value, "value", str(value))


def _on_status_set(target, value, oldvalue, initiator):  # noqa: ANN001
    if oldvalue is NO_VALUE or oldvalue is None or oldvalue == value:
        return
    logger.info(
        "status.change model=%s id=%s from=%s to=%s",
        type(target).__name__,
        getattr(target, "id", "unknown"),
        _label(oldvalue),
        _label(value),
    )


def register_status_listeners() -> None:
    """Log every Booking and HelperListing status transition. Safe to call twice."""
    global _registered
    if _registered:
        return
    for model in TRACKED_MODELS:
        # active_history loads the previous value even when the row was expired
        event.listen(model.status, "set", _on_status_set, active_history=True)
    _registered = True
