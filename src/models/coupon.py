# src/models/coupon.py

"""Applied coupon model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Coupon:
    """A coupon code resolved against the rule table.

    Codes missing from the table still produce a Coupon (unverified,
    zero amount) so the UI can report "not found".
    """

    code: str
    amount: float
    verified: bool
    message: str = ""
