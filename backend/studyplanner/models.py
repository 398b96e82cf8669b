"""SQLModel table definitions.

Each class maps to one table. Table names double as the resource names of
the HTTP API. Foreign keys carry their delete actions so the store itself
propagates deletes:

- `users.course_id` -> `courses.id`: SET NULL
- `courses.user_id` -> `users.id`: CASCADE
- `modules.course_id` -> `courses.id`: CASCADE
- `class_schedules.module_id` -> `modules.id`: CASCADE
- `assessments.module_id` -> `modules.id`: CASCADE
"""

from typing import Optional

from sqlmodel import Field, SQLModel

# AUTOINCREMENT keeps SQLite from handing out the id of a deleted row again.
_TABLE_ARGS = {"sqlite_autoincrement": True}


class User(SQLModel, table=True):
    """A registered student.

    `password_hash` is stored as given; nothing in the API verifies it.
    """
    __tablename__ = "users"
    __table_args__ = _TABLE_ARGS

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(nullable=False, unique=True)
    password_hash: str = Field(nullable=False)
    first_name: str = Field(nullable=False)
    middle_names: Optional[str] = None
    last_name: str = Field(nullable=False)
    date_of_birth: str = Field(nullable=False)
    address: Optional[str] = None
    course_id: Optional[int] = Field(default=None, foreign_key="courses.id", ondelete="SET NULL")


class Course(SQLModel, table=True):
    """A course of study, optionally linked to the user who created it."""
    __tablename__ = "courses"
    __table_args__ = _TABLE_ARGS

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    type: str = Field(nullable=False)
    user_id: Optional[int] = Field(default=None, foreign_key="users.id", ondelete="CASCADE")


class Module(SQLModel, table=True):
    __tablename__ = "modules"
    __table_args__ = _TABLE_ARGS

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    code: str = Field(nullable=False)
    credits: Optional[int] = None
    course_id: Optional[int] = Field(default=None, foreign_key="courses.id", ondelete="CASCADE")


class ClassSchedule(SQLModel, table=True):
    """A weekly class slot for a module.

    Day and times are free text (e.g. `Monday`, `09:00`); no timezone.
    """
    __tablename__ = "class_schedules"
    __table_args__ = _TABLE_ARGS

    id: Optional[int] = Field(default=None, primary_key=True)
    day_of_week: str = Field(nullable=False)
    start_time: str = Field(nullable=False)
    end_time: str = Field(nullable=False)
    location: Optional[str] = None
    module_id: Optional[int] = Field(default=None, foreign_key="modules.id", ondelete="CASCADE")


class Assessment(SQLModel, table=True):
    """An assessment (exam, coursework, ...) due for a module."""
    __tablename__ = "assessments"
    __table_args__ = _TABLE_ARGS

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(nullable=False)
    type: str = Field(nullable=False)
    due_date: str = Field(nullable=False)
    module_id: Optional[int] = Field(default=None, foreign_key="modules.id", ondelete="CASCADE")
