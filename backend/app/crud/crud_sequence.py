import logging
from typing import Callable, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models

logger = logging.getLogger(__name__)


def _seed(db: Session, name: str, start: int) -> None:
    try:
        with db.begin_nested():
            db.add(models.Sequence(name=name, current_value=start))
    except IntegrityError:
        # Another transaction created the counter first; use its row.
        logger.info("sequence.seed lost race name=%s", name)


def next_value(db: Session, name: str, seed: Optional[Callable[[], int]] = None) -> int:
    """Reserve and return the next number of the ``name`` counter.

    The increment is a single UPDATE, so concurrent callers are serialized by
    the row lock and never receive the same number. ``seed`` supplies the
    starting value the first time a counter is used.
    """
    if db.get(models.Sequence, name) is None:
        _seed(db, name, int(seed() if seed else 0))
    db.execute(
        update(models.Sequence)
        .where(models.Sequence.name == name)
        .values(current_value=models.Sequence.current_value + 1)
        .execution_options(synchronize_session=False)
    )
    return int(
        db.execute(select(models.Sequence.current_value).where(models.Sequence.name == name)).scalar_one()
    )
