"""
Error handling utilities for common database and API operations.
"""

from functools import wraps
from typing import Any, Callable, Dict, TypeVar
from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError, SamdCareException

logger = structlog.get_logger()

ModelT = TypeVar("ModelT")


async def get_owned_or_404(
    db: AsyncSession,
    model: type[ModelT],
    resource_id: UUID,
    owner_id: UUID,
    resource_type: str,
    owner_column: str = "parent_id",
) -> ModelT:
    """
    Load a row that belongs to the specified owner.

    A row that exists but belongs to someone else is reported exactly like a
    row that does not exist.

    Args:
        db: Database session
        model: ORM model class
        resource_id: Primary key of the row
        owner_id: ID of the authenticated owner
        resource_type: Type of resource for error messages
        owner_column: Name of the owner column on the model

    Raises:
        NotFoundError: If resource doesn't exist or doesn't belong to owner
    """
    query = select(model).where(
        model.id == resource_id,
        getattr(model, owner_column) == owner_id,
    )
    row = (await db.execute(query)).scalars().first()
    if row is None:
        raise NotFoundError(
            f"{resource_type.title()} not found", resource_type=resource_type
        )
    return row


def handle_database_errors(operation_name: str):
    """
    Decorator to handle common database errors and provide consistent error messages.

    Application exceptions pass through untouched; anything else is logged
    and re-raised as a DatabaseError.

    Args:
        operation_name: Name of the operation for error logging
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except SamdCareException:
                raise
            except Exception as e:
                logger.exception(
                    f"Unexpected error in {operation_name}",
                    **format_database_error(e, operation_name),
                )
                raise DatabaseError(
                    f"Failed to {operation_name.replace('_', ' ')}",
                    operation=operation_name,
                ) from e

        return wrapper

    return decorator


def format_database_error(error: Exception, operation: str) -> Dict[str, Any]:
    """
    Format database errors into a consistent structure for logging.

    Args:
        error: The exception that occurred
        operation: The operation that was being performed

    Returns:
        Dictionary with formatted error information
    """
    return {
        "error_type": type(error).__name__,
        "error_message": str(error),
        "operation": operation,
        "details": getattr(error, "details", {}),
    }
