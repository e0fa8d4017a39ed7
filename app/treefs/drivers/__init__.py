"""Storage drivers for treefs.

Only the local driver ships with treefs. Other backends subclass
:class:`Driver` and can be passed to the facade as a class or instance.
"""

from treefs.drivers.base import Driver
from treefs.drivers.local import LocalDriver
from treefs.errors import InvalidDriverError

DRIVERS: dict[str, type[Driver]] = {
    LocalDriver.name: LocalDriver,
}


def get_driver_class(driver: str | type[Driver]) -> type[Driver]:
    """Resolve a driver name or class to a Driver subclass.

    Args:
        driver: Registered name (case-insensitive) or a Driver subclass.

    Returns:
        The Driver subclass.

    Raises:
        InvalidDriverError: If the driver is unknown.
    """
    if isinstance(driver, type) and issubclass(driver, Driver):
        return driver
    if isinstance(driver, str):
        driver_class = DRIVERS.get(driver.lower())
        if driver_class is not None:
            return driver_class
    msg = f'Filesystem driver "{driver}" not available'
    raise InvalidDriverError(msg)


__all__ = ["DRIVERS", "Driver", "LocalDriver", "get_driver_class"]
