"""Pydantic request/response schemas used by the API.

Request bodies declare every attribute as optional. On create, required
columns are enforced by the store's NOT NULL constraints rather than here;
on update, a missing (or null) field means "keep the stored value".
"""

from typing import Optional

from pydantic import BaseModel


class CreatedOut(BaseModel):
    """Identifier assigned to a newly inserted row."""
    id: int


class ChangesOut(BaseModel):
    """Number of rows touched by an update or delete (0 or 1)."""
    changes: int


class MessageOut(BaseModel):
    message: str


class ErrorOut(BaseModel):
    error: str


class UserBase(BaseModel):
    email: Optional[str] = None
    password_hash: Optional[str] = None
    first_name: Optional[str] = None
    middle_names: Optional[str] = None
    last_name: Optional[str] = None
    date_of_birth: Optional[str] = None
    address: Optional[str] = None
    course_id: Optional[int] = None


class UserCreate(UserBase):
    """Payload for `POST /api/users`."""


class UserUpdate(UserBase):
    """Payload for `PUT /api/users/{id}`."""


class UserRow(UserBase):
    """A listed user with the name of the course they are enrolled on."""
    id: int
    course_name: Optional[str] = None


class CourseBase(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    user_id: Optional[int] = None


class CourseCreate(CourseBase):
    """Payload for `POST /api/courses`."""


class CourseUpdate(CourseBase):
    """Payload for `PUT /api/courses/{id}`."""


class CourseRow(CourseBase):
    """A listed course with the email of the user who created it."""
    id: int
    user_email: Optional[str] = None


class ModuleBase(BaseModel):
    name: Optional[str] = None
    code: Optional[str] = None
    credits: Optional[int] = None
    course_id: Optional[int] = None


class ModuleCreate(ModuleBase):
    """Payload for `POST /api/modules`."""


class ModuleUpdate(ModuleBase):
    """Payload for `PUT /api/modules/{id}`."""


class ModuleRow(ModuleBase):
    id: int
    course_name: Optional[str] = None


class ClassScheduleBase(BaseModel):
    day_of_week: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    location: Optional[str] = None
    module_id: Optional[int] = None


class ClassScheduleCreate(ClassScheduleBase):
    """Payload for `POST /api/class_schedules`."""


class ClassScheduleUpdate(ClassScheduleBase):
    """Payload for `PUT /api/class_schedules/{id}`."""


class ClassScheduleRow(ClassScheduleBase):
    id: int
    module_name: Optional[str] = None
    module_code: Optional[str] = None


class AssessmentBase(BaseModel):
    title: Optional[str] = None
    type: Optional[str] = None
    due_date: Optional[str] = None
    module_id: Optional[int] = None


class AssessmentCreate(AssessmentBase):
    """Payload for `POST /api/assessments`."""


class AssessmentUpdate(AssessmentBase):
    """Payload for `PUT /api/assessments/{id}`."""


class AssessmentRow(AssessmentBase):
    id: int
    module_name: Optional[str] = None
    module_code: Optional[str] = None
