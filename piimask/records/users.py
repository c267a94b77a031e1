"""Anonymization of user records and their profile metadata."""

import logging
from typing import Any, Dict, Hashable, Iterable, Optional, Sequence

from piimask.core.detection import any_masked
from piimask.masking import email, personal, web
from piimask.masking.routing import FieldRouter

from .store import RecordStore

logger = logging.getLogger(__name__)

DEFAULT_USER_FIELDS = (
    "user_email",
    "user_nicename",
    "user_url",
    "display_name",
    "first_name",
    "last_name",
)

DEFAULT_META_KEYS = (
    "billing_first_name",
    "billing_last_name",
    "billing_email",
    "billing_phone",
    "billing_address_1",
    "billing_address_2",
    "billing_postcode",
    "shipping_first_name",
    "shipping_last_name",
    "shipping_address_1",
    "shipping_address_2",
    "shipping_postcode",
)

_NAME_FIELDS = frozenset({"user_nicename", "display_name", "first_name", "last_name"})

# Metadata keys are classified by substring, first match wins.
META_ROUTER = FieldRouter(
    contains=(
        ("email", "email"),
        ("phone", "phone"),
        ("address", "address"),
        ("postcode", "zipcode"),
        ("zip", "zipcode"),
        ("name", "name"),
    ),
    default="text",
    handlers={
        "email": email.placeholder,
        "phone": personal.mask_phone,
        "address": personal.mask_address,
        "zipcode": personal.mask_zipcode,
        "name": personal.mask_name,
        "text": personal.mask_text,
    },
)


class UserAnonymizer:
    """Anonymizes user records held in a ``RecordStore``.

    Core account fields are replaced in place: the email with the fixed
    placeholder, names with masked names and the website with a masked URL.
    Missing users are reported as ``False`` rather than raised.
    """

    def __init__(self, store: RecordStore):
        self.store = store

    def _mask_field(self, field: str, value: Any) -> Optional[str]:
        value = value or ""
        if field == "user_email":
            return email.placeholder(value)
        if field in _NAME_FIELDS:
            return personal.mask_name(value)
        if field == "user_url":
            return web.mask_url(value) or ""
        return None

    def anonymize_data(self, user_id: Hashable, fields: Optional[Sequence[str]] = None) -> bool:
        """Anonymize the account fields of one user.

        Args:
            user_id: Identifier of the user record
            fields: Fields to anonymize; defaults to ``DEFAULT_USER_FIELDS``.
                Unsupported field names are ignored.

        Returns:
            True if the store accepted the update.
        """
        user = self.store.get_record(user_id)
        if user is None:
            logger.warning("User %s not found, nothing anonymized", user_id)
            return False

        updates: Dict[str, Any] = {}
        for field in fields or DEFAULT_USER_FIELDS:
            masked = self._mask_field(field, user.get(field))
            if masked is not None:
                updates[field] = masked

        if not updates:
            logger.debug("No supported fields to anonymize for user %s", user_id)
            return False

        updated = self.store.update_record(user_id, updates)
        if not updated:
            logger.warning("Store rejected anonymized fields for user %s", user_id)
        return updated

    def anonymize_meta(self, user_id: Hashable, meta_keys: Optional[Sequence[str]] = None) -> bool:
        """Anonymize profile metadata such as billing and shipping details.

        Each key is masked according to what its name suggests (email,
        phone, address, postcode, name), falling back to text masking.
        Empty values are left alone.
        """
        user = self.store.get_record(user_id)
        if user is None:
            logger.warning("User %s not found, metadata not anonymized", user_id)
            return False

        current = {key: user.get(key) for key in meta_keys or DEFAULT_META_KEYS}
        updates = {
            key: value
            for key, value in META_ROUTER.apply(current).items()
            if current[key]
        }

        if not updates:
            return True

        updated = self.store.update_record(user_id, updates)
        if not updated:
            logger.warning("Store rejected anonymized metadata for user %s", user_id)
        return updated

    def is_anonymized(self, user_id: Hashable) -> bool:
        """Check whether a user's email or display name looks masked."""
        user = self.store.get_record(user_id)
        if user is None:
            return False
        return any_masked(user.get("user_email"), user.get("display_name"))

    def bulk_anonymize(
        self, user_ids: Iterable[Hashable], fields: Optional[Sequence[str]] = None
    ) -> Dict[Hashable, bool]:
        """Anonymize several users; returns the outcome per user id."""
        return {user_id: self.anonymize_data(user_id, fields) for user_id in user_ids}

    def anonymized_export(self, user_id: Hashable) -> Dict[str, Any]:
        """Build a masked copy of a user's account data for export.

        Unlike ``anonymize_data`` the email is masked rather than replaced,
        so the export stays recognisable to its owner. The URL is None when
        it cannot be masked. Missing users yield an empty dict.
        """
        user = self.store.get_record(user_id)
        if user is None:
            return {}

        return {
            "ID": user_id,
            "user_email": email.mask_email(user.get("user_email") or ""),
            "display_name": personal.mask_name(user.get("display_name") or ""),
            "first_name": personal.mask_name(user.get("first_name") or ""),
            "last_name": personal.mask_name(user.get("last_name") or ""),
            "user_url": web.mask_url(user.get("user_url") or ""),
        }
