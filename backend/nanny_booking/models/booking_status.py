import enum

class BookingStatus(str, enum.Enum):
    """Lifecycle of a nanny booking."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
