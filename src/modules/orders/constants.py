"""Order domain constants.

An order is ``open`` while positions may change and ``closed`` once its
stock has been deducted.  Closing is terminal.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    OPEN = "open", "Open"
    CLOSED = "closed", "Closed"


# Keyed by the raw column value: rows read through SQL carry plain strings.
VALID_TRANSITIONS: dict[str, set[str]] = {
    OrderStatus.OPEN.value: {OrderStatus.CLOSED.value},
    OrderStatus.CLOSED.value: set(),
}
