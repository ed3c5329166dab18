"""Read-only table API in the PostgREST query dialect.

    GET /rest/v1/chat_sessions?select=id&user_id=eq.u1&order=updated_at.desc&limit=1
"""

from datetime import datetime
from typing import Any, List, Optional, Tuple

from fastapi import APIRouter, Depends, Request
from sqlalchemy import Boolean, DateTime, Integer
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import InvalidQueryError, UnknownTableError
from .auth import require_api_key
from .database import TABLES, get_session, row_to_dict
from .repositories import BaseRepository

router = APIRouter(prefix="/rest/v1", tags=["rest"], dependencies=[Depends(require_api_key)])

RESERVED_PARAMS = {"select", "order", "limit"}


def parse_filter(raw: str) -> str:
    """Operand of an ``eq.<value>`` filter. Other operators are not supported."""
    operator, dot, operand = raw.partition(".")
    if operator != "eq" or not dot:
        raise InvalidQueryError(f"unsupported filter '{raw}', expected eq.<value>")
    return operand


def coerce_value(column_type: Any, operand: str) -> Any:
    """Convert a filter operand to the column's Python type."""
    if isinstance(column_type, Boolean):
        if operand not in ("true", "false"):
            raise InvalidQueryError(f"expected true or false, got '{operand}'")
        return operand == "true"
    if isinstance(column_type, Integer):
        try:
            return int(operand)
        except ValueError:
            raise InvalidQueryError(f"expected an integer, got '{operand}'")
    if isinstance(column_type, DateTime):
        try:
            return datetime.fromisoformat(operand)
        except ValueError:
            raise InvalidQueryError(f"expected an ISO timestamp, got '{operand}'")
    return operand


def parse_order(raw: Optional[str]) -> List[Tuple[str, bool]]:
    """``col.desc,other.asc`` into (column, descending) pairs."""
    if not raw:
        return []
    order_by = []
    for item in raw.split(","):
        name, _, direction = item.strip().partition(".")
        direction = direction or "asc"
        if direction not in ("asc", "desc"):
            raise InvalidQueryError(f"bad order direction '{direction}'")
        order_by.append((name, direction == "desc"))
    return order_by


def parse_limit(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        limit = int(raw)
    except ValueError:
        raise InvalidQueryError(f"limit must be an integer, got '{raw}'")
    if limit < 0:
        raise InvalidQueryError("limit must not be negative")
    return limit


def parse_select(raw: Optional[str], columns) -> Optional[List[str]]:
    """Requested columns, or None for all of them."""
    if raw is None or raw.strip() == "*":
        return None
    names = [name.strip() for name in raw.split(",") if name.strip()]
    for name in names:
        if name not in columns:
            raise InvalidQueryError(f"unknown column '{name}'")
    return names


@router.get("/{table}")
async def read_table(
    table: str,
    request: Request,
    session: AsyncSession = Depends(get_session),
) -> List[dict]:
    """Rows of ``table`` matching the query's filters."""
    model = TABLES.get(table)
    if model is None:
        raise UnknownTableError(table)

    repo = BaseRepository(model, session)
    columns = model.__table__.columns
    params = request.query_params

    filters = {}
    for key, raw in params.multi_items():
        if key in RESERVED_PARAMS:
            continue
        repo.column(key)
        filters[key] = coerce_value(columns[key].type, parse_filter(raw))

    selected = parse_select(params.get("select"), columns)
    rows = await repo.query(
        filters=filters,
        order_by=parse_order(params.get("order")),
        limit=parse_limit(params.get("limit")),
    )

    result = [row_to_dict(row) for row in rows]
    if selected is not None:
        result = [{name: row[name] for name in selected} for row in result]
    return result
