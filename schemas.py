# schemas.py
from pydantic import BaseModel, Field, constr
from pydantic.alias_generators import to_camel
from datetime import date, datetime
from typing import List, Literal, Optional

NotificationType = Literal["add", "edit", "delete"]


class CamelModel(BaseModel):
    """Base for every payload exchanged with the frontend (camelCase keys)."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# Auth


class UserCreate(CamelModel):
    first_name: constr(strip_whitespace=True, min_length=1)
    last_name: constr(strip_whitespace=True, min_length=1)
    email: constr(min_length=1)
    password: constr(min_length=1)
    budget_limit: float = Field(..., ge=0, allow_inf_nan=False)


class UserLogin(CamelModel):
    email: str
    password: str


class AuthResponse(CamelModel):
    message: str
    token: str
    redirect: str = "/dashboard"


# Profile


class Profile(CamelModel):
    id: int = Field(..., serialization_alias="_id")
    first_name: str
    last_name: str
    email: str
    budget_limit: float
    role: str
    profile_image_url: Optional[str] = None
    job_title: Optional[str] = None
    phone_number: Optional[str] = None
    street_address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    complete_address: Optional[str] = None
    date_of_birth: Optional[str] = None
    education: Optional[str] = None
    gender: Optional[str] = None


class ProfileUpdate(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    budget_limit: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    profile_image_url: Optional[str] = None
    job_title: Optional[str] = None
    phone_number: Optional[str] = None
    street_address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    complete_address: Optional[str] = None
    date_of_birth: Optional[str] = None
    education: Optional[str] = None
    gender: Optional[str] = None


# Entries


class EntryIn(CamelModel):
    title: constr(strip_whitespace=True, min_length=1)
    price: float = Field(..., ge=0, allow_inf_nan=False)
    date: date


class EntryOut(CamelModel):
    id: int
    title: str
    price: float
    date: date
    user: str


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_entries: int
    has_next_page: bool
    has_prev_page: bool
    limit: int


class EntryPage(CamelModel):
    entries: List[EntryOut]
    pagination: Pagination


class Message(CamelModel):
    message: str


# Budget analysis


class MonthBucket(CamelModel):
    year: int
    month: int
    month_name: str
    total_expenses: float
    budget_limit: float
    exceeded: bool
    remaining: float


class DayBucket(CamelModel):
    year: int
    month: int
    day: int
    date: str
    total_expenses: float
    budget_limit: float
    exceeded: bool
    remaining: float


class BudgetAnalysis(CamelModel):
    range: str
    months: List[MonthBucket]
    days: Optional[List[DayBucket]] = None
    total_expenses: float
    total_budget: float
    overall_exceeded: bool


class AnalysisUser(CamelModel):
    id: int
    first_name: str
    last_name: str
    budget_limit: float


class AnalysisResponse(CamelModel):
    user: AnalysisUser
    analysis: BudgetAnalysis


# Notifications


class NotificationCreate(CamelModel):
    message: Optional[str] = None
    type: Optional[NotificationType] = None


class NotificationOut(CamelModel):
    id: int
    user_id: int
    message: str
    type: NotificationType
    is_read: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class NotificationUpdated(CamelModel):
    message: str
    notification: NotificationOut


class MarkAllRead(CamelModel):
    message: str
    updated_count: int


class UnreadCount(CamelModel):
    unread_count: int
