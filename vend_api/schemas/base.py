"""
schemas/base.py
----------------

Common base for the records returned by the Vend API.

Every field of a record is optional: a missing key means the store
simply has no value for it, not that the payload is broken.  Keys the
models do not know about are ignored so that API additions do not
break decoding, and decoded records are immutable.
"""

from __future__ import annotations

from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict


def _to_float(v: Any) -> Any:
    # Vend sends some quantities as strings ("12.00000"), others as numbers.
    if isinstance(v, str):
        v = v.strip()
        return float(v) if v else None
    return v


Quantity = Annotated[Optional[float], BeforeValidator(_to_float)]


class VendModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class VendRecord(VendModel):
    """A top-level record, identified by its ``id``."""

    id: Optional[str] = None
