# massage_booking/schemas/__init__.py
from .appointment import (
    AppointmentCreate,
    AppointmentUpdate,
    BookingRequest
)

from .availability import (
    BlockedDateCreate,
    BusinessHoursUpdate,
    BookingSettingsUpdate
)

from .catalog import (
    PackageCreate,
    PackageUpdate,
    AddOnCreate,
    AddOnUpdate
)

from .business import (
    BusinessSettingsUpdate,
    SettingUpdate
)
