# core/repository.py
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from core.errors import NotFoundFailure
from core.query import PageWindow

logger = logging.getLogger(__name__)


class Repository:
    """
    Generic lookups and writes for one model.

    `populate` is a list of loader options (selectinload(...)) naming the
    relations to expand. Relations are always loaded explicitly through these
    options; callers pass the set they want to serialize.
    """

    def __init__(self, model, name: str, populate: Sequence[Any] = ()):
        self.model = model
        self.name = name
        self.populate = list(populate)

    def _options(self, populate: Optional[Sequence[Any]]) -> List[Any]:
        return self.populate if populate is None else list(populate)

    def find(self, db: Session, item_id: int, populate: Optional[Sequence[Any]] = None):
        return (
            db.query(self.model)
            .options(*self._options(populate))
            .populate_existing()
            .filter(self.model.id == item_id)
            .first()
        )

    def get(self, db: Session, item_id: int, populate: Optional[Sequence[Any]] = None):
        item = self.find(db, item_id, populate)
        if item is None:
            raise NotFoundFailure(self.name)
        return item

    def list(
        self,
        db: Session,
        filters: Sequence[Any],
        window: PageWindow,
        order_by: Sequence[Any],
        populate: Optional[Sequence[Any]] = None,
    ) -> Tuple[list, int]:
        base = db.query(self.model).filter(*filters)
        total = base.count()
        items = (
            base.options(*self._options(populate))
            .order_by(*order_by, self.model.id.desc())
            .offset(window.offset)
            .limit(window.limit)
            .all()
        )
        return items, total

    def list_by(self, db: Session, *criteria, order_by: Sequence[Any] = (), populate=None) -> list:
        return (
            db.query(self.model)
            .options(*self._options(populate))
            .filter(*criteria)
            .order_by(*order_by, self.model.id.desc())
            .all()
        )

    def create(self, db: Session, fields: Dict[str, Any]):
        item = self.model(**fields)
        db.add(item)
        db.commit()
        db.refresh(item)
        logger.info("%s %s created", self.name, item.id)
        return self.get(db, item.id)

    def update(self, db: Session, item, fields: Dict[str, Any]):
        for key, value in fields.items():
            setattr(item, key, value)
        return self.save(db, item)

    def save(self, db: Session, item):
        db.add(item)
        db.commit()
        return self.get(db, item.id)

    def delete(self, db: Session, item) -> None:
        item_id = item.id
        db.delete(item)
        db.commit()
        logger.info("%s %s deleted", self.name, item_id)
