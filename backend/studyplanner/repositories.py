"""Repository classes encapsulating database operations.

There is one repository per table. They share the same four operations,
each of which issues exactly one statement:

- `list`: select every row, left-joined to the parent table so the
  parent's display columns come back in the same round trip
- `create`: insert one row and return its new id
- `update`: `SET col = COALESCE(:value, col)` for every column, so a null
  input leaves the stored value in place; returns the affected-row count
- `delete`: delete by id; dependent rows are cascaded (or nulled) by the
  store's foreign-key actions; returns the affected-row count
"""

from typing import Dict, List, Tuple, Type

from pydantic import BaseModel
from sqlalchemy import delete, func, update
from sqlmodel import Session, SQLModel, select

from . import models


class ResourceRepository:
    """Generic CRUD for a single table.

    Subclasses name the `model`, its `parent` table, the foreign-key
    column joining the two, and which parent columns to expose in listings.
    """
    model: Type[SQLModel]
    parent: Type[SQLModel]
    parent_key: str
    parent_columns: Dict[str, str] = {}
    foreign_keys: Tuple[str, ...] = ()

    def __init__(self, session: Session):
        self.session = session

    def list(self) -> List[dict]:
        """Return all rows as dicts with the parent display columns added."""
        labels = [getattr(self.parent, column).label(label) for label, column in self.parent_columns.items()]
        stmt = select(self.model, *labels).outerjoin(
            self.parent, getattr(self.model, self.parent_key) == self.parent.id
        )
        out = []
        for row in self.session.exec(stmt).all():
            item = row[0].model_dump()
            for label in self.parent_columns:
                item[label] = row._mapping[label]
            out.append(item)
        return out

    def create(self, payload: BaseModel) -> int:
        """Insert a row from `payload` and return its id.

        Foreign keys that are missing or falsy are stored as NULL.
        """
        data = payload.model_dump()
        for key in self.foreign_keys:
            data[key] = data.get(key) or None
        obj = self.model(**data)
        self.session.add(obj)
        self.session.commit()
        self.session.refresh(obj)
        return obj.id

    def update(self, row_id: int, payload: BaseModel) -> int:
        """Coalesce-update row `row_id` and return the number of rows changed."""
        values = {
            name: func.coalesce(value, getattr(self.model, name))
            for name, value in payload.model_dump().items()
        }
        stmt = (
            update(self.model)
            .where(self.model.id == row_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = self.session.exec(stmt)
        changes = result.rowcount
        self.session.commit()
        return changes

    def delete(self, row_id: int) -> int:
        """Delete row `row_id` and return the number of rows removed."""
        stmt = (
            delete(self.model)
            .where(self.model.id == row_id)
            .execution_options(synchronize_session=False)
        )
        result = self.session.exec(stmt)
        changes = result.rowcount
        self.session.commit()
        return changes


class UserRepository(ResourceRepository):
    """Users, listed with the name of their course."""
    model = models.User
    parent = models.Course
    parent_key = "course_id"
    parent_columns = {"course_name": "name"}
    foreign_keys = ("course_id",)


class CourseRepository(ResourceRepository):
    """Courses, listed with their creator's email."""
    model = models.Course
    parent = models.User
    parent_key = "user_id"
    parent_columns = {"user_email": "email"}
    foreign_keys = ("user_id",)


class ModuleRepository(ResourceRepository):
    model = models.Module
    parent = models.Course
    parent_key = "course_id"
    parent_columns = {"course_name": "name"}
    foreign_keys = ("course_id",)


class ClassScheduleRepository(ResourceRepository):
    model = models.ClassSchedule
    parent = models.Module
    parent_key = "module_id"
    parent_columns = {"module_name": "name", "module_code": "code"}
    foreign_keys = ("module_id",)


class AssessmentRepository(ResourceRepository):
    model = models.Assessment
    parent = models.Module
    parent_key = "module_id"
    parent_columns = {"module_name": "name", "module_code": "code"}
    foreign_keys = ("module_id",)
