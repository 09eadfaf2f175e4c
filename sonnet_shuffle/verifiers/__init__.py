"""Order verification for sonnet-shuffle."""

from .verify import check_order, is_complete, can_check, can_start_new_puzzle
from .models import CheckResult

__all__ = [
    # Main verification
    "check_order",
    "is_complete",
    # Derived predicates
    "can_check",
    "can_start_new_puzzle",
    # Models
    "CheckResult",
]
