"""
Dependency utilities for FastAPI endpoints.
"""

from typing import Annotated, Any, Dict

from fastapi import Depends

from app.services.auth import get_current_user

# Create a type annotation for the authenticated caller
CurrentUser = Annotated[Dict[str, Any], Depends(get_current_user)]
