"""Trip claiming and truck compatibility."""

from .compatibility import CompatibilityResult, TruckCategory, check_truck_compatibility, is_compatible
from .coordinator import (
    ApprovalReport,
    AssignmentCoordinator,
    AvailableTrip,
    ClaimOutcome,
    ClaimResult,
    CompatibilityReport,
)
