"""Payout bank details — stored for the admin, unrelated to earnings math."""

from __future__ import annotations

import logging
import re
from dataclasses import asdict
from typing import TYPE_CHECKING

from src.core.errors import ValidationError
from src.data.models import KEY_BANK_DETAILS, BankDetails

if TYPE_CHECKING:
    from src.ports.storage_port import KeyValueStore

logger = logging.getLogger(__name__)

_ACCOUNT_RE = re.compile(r"^\d{6,18}$")
_IFSC_RE = re.compile(r"^[A-Z]{4}0[A-Z0-9]{6}$", re.IGNORECASE)
_UPI_RE = re.compile(r"^[\w.-]+@[\w.-]+$")


def validate_bank_details(details: BankDetails) -> str | None:
    """Return the first problem found, or None if the details are valid."""
    if not details.account_holder_name.strip():
        return "Account holder name is required"
    if not details.bank_name.strip():
        return "Bank name is required"
    if not details.account_number.strip():
        return "Account number is required"
    if not _ACCOUNT_RE.match(details.account_number.strip()):
        return "Account number should be 6-18 digits"
    if not details.ifsc.strip():
        return "IFSC is required"
    if not _IFSC_RE.match(details.ifsc.strip()):
        return "Invalid IFSC format"
    if details.upi_id and not _UPI_RE.match(details.upi_id.strip()):
        return "Invalid UPI ID"
    return None


class BankDetailsStore:
    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def load(self) -> BankDetails | None:
        raw = self._store.get(KEY_BANK_DETAILS)
        if not isinstance(raw, dict):
            return None
        try:
            return BankDetails(**raw)
        except TypeError:
            logger.warning("Stored bank details are malformed, ignoring")
            return None

    def save(self, details: BankDetails) -> BankDetails:
        """Validate and store. Raises ValidationError with the first problem."""
        problem = validate_bank_details(details)
        if problem:
            raise ValidationError(problem)
        cleaned = BankDetails(
            account_holder_name=details.account_holder_name.strip(),
            bank_name=details.bank_name.strip(),
            account_number=details.account_number.strip(),
            ifsc=details.ifsc.strip().upper(),
            upi_id=details.upi_id.strip(),
        )
        self._store.set(KEY_BANK_DETAILS, asdict(cleaned))
        logger.info("Bank details saved")
        return cleaned

    def clear(self) -> None:
        self._store.delete(KEY_BANK_DETAILS)
