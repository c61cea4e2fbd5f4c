"""Shared click parameter types."""

import click

from ims.domain.model.value_objects import MAX_QUANTITY

# Numeric ids as stored in 64-bit INTEGER columns.
RECORD_ID = click.IntRange(1, MAX_QUANTITY)
