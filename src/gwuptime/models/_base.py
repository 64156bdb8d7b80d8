"""Base model and shared field types.

Every persisted gwuptime model inherits from :class:`UptimeBaseModel` which
provides:

* ``alias_generator=to_camel`` so camelCase keys in stored JSON map to
  snake_case fields (``periodStart`` → ``period_start``).
* ``populate_by_name`` so code can construct models with field names.
* Frozen instances: persisted records are immutable once written.

:data:`GatewayState` is the annotated ``int`` used for every state field; it
folds legacy representations into ``{0, 1}`` before validation.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

from gwuptime.ingestion.normalize import normalize_state

GatewayState = Annotated[int, BeforeValidator(normalize_state)]
"""Annotated type that coerces any stored state representation to ``0``/``1``."""


class UptimeBaseModel(BaseModel):
    """Base for persisted gwuptime records."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )
