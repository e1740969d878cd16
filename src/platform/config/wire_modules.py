"""
Modules carrying `Provide[...]` markers.

main.py wires these into the container at startup; anything that resolves a
provider through `Depends(Provide[...])` must be listed here or it gets the
raw marker instead of the dependency.
"""

from types import ModuleType

from src.platform.database import unit_of_work
from src.service.cinema.app.command import (
    create_booking_use_case,
    create_payment_use_case,
    update_payment_use_case,
)
from src.service.cinema.app.query import (
    get_booking_use_case,
    list_booking_history_use_case,
    list_seats_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    unit_of_work,
    create_booking_use_case,
    create_payment_use_case,
    update_payment_use_case,
    get_booking_use_case,
    list_booking_history_use_case,
    list_seats_use_case,
]
