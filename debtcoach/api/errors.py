"""
Shared error responses for API endpoints.
"""

import math
from typing import List, Optional, Union

from fastapi import HTTPException, status


def raise_validation_error(message: str, errors: List[str]) -> None:
    """Reject a request with every validation problem listed."""
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"message": message, "errors": errors},
    )


def months_or_none(months: Union[int, float]) -> Optional[int]:
    """JSON cannot carry infinity; report never-pays-off estimates as null."""
    if math.isinf(months):
        return None
    return int(months)
