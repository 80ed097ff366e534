import logging
import math
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from analysis import DEFAULT_RANGE, build_analysis, date_window, normalize_range
from auth import get_current_user
from database import get_db, Entry, User
from notifications import notify
from schemas import AnalysisResponse, EntryIn, EntryOut, EntryPage, Message

logger = logging.getLogger(__name__)

router = APIRouter()

SORT_OPTIONS = {
    "price-high-low": Entry.price.desc(),
    "price-low-high": Entry.price.asc(),
    "date-new-old": Entry.date.desc(),
    "date-old-new": Entry.date.asc(),
}


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def total_spent(db: Session, user_id: int, exclude_id: Optional[int] = None) -> float:
    query = db.query(func.sum(Entry.price)).filter(Entry.user_id == user_id)
    if exclude_id is not None:
        query = query.filter(Entry.id != exclude_id)
    return query.scalar() or 0.0


def check_budget(
    db: Session, user: User, price: float, exclude_id: Optional[int] = None
):
    """
    Reject ``price`` when it would push the user's summed entries past their
    budget limit. Not atomic: two concurrent writes can both pass.
    """
    current_total = total_spent(db, user.id, exclude_id)
    if current_total + price > user.budget_limit:
        logger.info(
            "Rejected %.2f for user %s: %.2f already spent of %.2f",
            price,
            user.id,
            current_total,
            user.budget_limit,
        )
        raise HTTPException(
            status_code=400,
            detail={
                "message": "Budget limit exceeded",
                "currentTotal": current_total,
                "budgetLimit": user.budget_limit,
                "attemptedAmount": price,
            },
        )


def get_owned_entry(db: Session, entry_id: int, user: User) -> Entry:
    entry = (
        db.query(Entry)
        .filter(Entry.id == entry_id, Entry.user_id == user.id)
        .first()
    )
    if not entry:
        raise HTTPException(status_code=404, detail="Entry not found")
    return entry


@router.get("", response_model=EntryPage)
async def get_entries(
    page: int = Query(1, ge=1),
    limit: int = Query(8, ge=1, le=100),
    search: str = "",
    date_filter: Optional[date] = Query(None, alias="dateFilter"),
    sort_by: str = Query("all", alias="sortBy"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    query = db.query(Entry).filter(Entry.user_id == current_user.id)

    if search:
        pattern = f"%{_escape_like(search)}%"
        query = query.filter(Entry.title.ilike(pattern, escape="\\"))
    if date_filter:
        query = query.filter(Entry.date == date_filter)

    total_entries = query.count()

    # "all" and unknown values keep insertion order
    order = SORT_OPTIONS.get(sort_by)
    if order is not None:
        query = query.order_by(order, Entry.id)
    else:
        query = query.order_by(Entry.id)

    entries = query.offset((page - 1) * limit).limit(limit).all()

    total_pages = math.ceil(total_entries / limit)
    return {
        "entries": entries,
        "pagination": {
            "current_page": page,
            "total_pages": total_pages,
            "total_entries": total_entries,
            "has_next_page": page < total_pages,
            "has_prev_page": page > 1,
            "limit": limit,
        },
    }


@router.get(
    "/analysis", response_model=AnalysisResponse, response_model_exclude_none=True
)
async def get_budget_analysis(
    range_key: str = Query(DEFAULT_RANGE, alias="range"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    range_key = normalize_range(range_key)
    today = date.today()
    start, end = date_window(range_key, today)
    logger.info(
        "Budget analysis for user %s, %s (%s to %s)",
        current_user.id,
        range_key,
        start,
        end,
    )

    rows = (
        db.query(Entry.date, Entry.price)
        .filter(
            Entry.user_id == current_user.id,
            Entry.date >= start,
            Entry.date <= end,
        )
        .order_by(Entry.date)
        .all()
    )

    analysis = build_analysis(
        [(row.date, row.price) for row in rows],
        current_user.budget_limit,
        range_key,
        today=today,
    )
    return {"user": current_user, "analysis": analysis}


@router.post("", response_model=EntryOut, status_code=status.HTTP_201_CREATED)
async def create_entry(
    entry: EntryIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    check_budget(db, current_user, entry.price)

    db_entry = Entry(
        user_id=current_user.id,
        title=entry.title,
        price=entry.price,
        date=entry.date,
        user=current_user.slug,
    )
    db.add(db_entry)
    notify(db, current_user.id, f"{entry.title} added successfully.", "add")
    db.commit()
    db.refresh(db_entry)
    return db_entry


@router.put("/{entry_id}", response_model=EntryOut)
async def update_entry(
    entry_id: int,
    entry: EntryIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    db_entry = get_owned_entry(db, entry_id, current_user)
    check_budget(db, current_user, entry.price, exclude_id=db_entry.id)

    db_entry.title = entry.title
    db_entry.price = entry.price
    db_entry.date = entry.date
    db_entry.user = current_user.slug
    notify(db, current_user.id, f"{entry.title} updated successfully.", "edit")
    db.commit()
    db.refresh(db_entry)
    return db_entry


@router.delete("/{entry_id}", response_model=Message)
async def delete_entry(
    entry_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    db_entry = get_owned_entry(db, entry_id, current_user)
    notify(db, current_user.id, f"{db_entry.title} removed successfully.", "delete")
    db.delete(db_entry)
    db.commit()
    return {"message": "Entry deleted successfully"}
