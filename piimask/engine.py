"""MaskingEngine - configured entry point over the category maskers."""

import logging
from functools import partial
from typing import Any, Callable, Dict, Mapping, Optional

from piimask.core.config import MaskingConfig, get_config
from piimask.core.detection import is_masked
from piimask.core.exceptions import MaskingParameterError
from piimask.masking import email, financial, network, personal, web
from piimask.masking.routing import FieldRouter

logger = logging.getLogger(__name__)


class MaskingEngine:
    """Applies the category maskers with defaults taken from a ``MaskingConfig``.

    The module-level functions in ``piimask.masking`` use fixed defaults
    (keep the last 4 phone digits, and so on). The engine binds the
    configured values instead, so an application can tune masking in one
    place.

    Examples:
        engine = MaskingEngine()
        engine.mask_value("phone", "555-123-4567")
        engine.mask_fields("personal", {"name": "John Smith", "zip": "90210"})

        engine = MaskingEngine(MaskingConfig(phone_keep_last=2))
    """

    CATEGORIES = ("personal", "financial", "web")

    def __init__(self, config: Optional[MaskingConfig] = None):
        self.config = config or get_config()
        self._maskers = self._build_maskers(self.config)
        self._routers = self._build_routers()

    @staticmethod
    def _build_maskers(config: MaskingConfig) -> Dict[str, Callable[[Any], Any]]:
        return {
            "email": email.mask_email,
            "email_display": partial(
                email.display_mask,
                show_first=config.email_show_first,
                show_last=config.email_show_last,
            ),
            "email_placeholder": email.placeholder,
            "name": personal.mask_name,
            "phone": partial(personal.mask_phone, keep_last=config.phone_keep_last),
            "address": personal.mask_address,
            "date": personal.mask_date,
            "zipcode": partial(personal.mask_zipcode, keep_last=config.zipcode_keep_last),
            "text": partial(personal.mask_text, preserve_chars=config.preserve_chars),
            "ip": network.anonymize,
            "ip_mask": network.mask_last_segment,
            "credit_card": partial(financial.credit_card, keep_last=config.financial_keep_last),
            "bank_account": partial(financial.bank_account, keep_last=config.financial_keep_last),
            "tax_id": partial(financial.tax_id, keep_last=config.financial_keep_last),
            "url": partial(web.mask_url, validate=config.validate_urls),
            "user_agent": web.mask_user_agent,
        }

    def _build_routers(self) -> Dict[str, FieldRouter]:
        m = self._maskers
        return {
            "personal": personal.FIELD_ROUTER.with_handlers(
                phone=m["phone"], zipcode=m["zipcode"], text=m["text"]
            ),
            "financial": financial.FIELD_ROUTER.with_handlers(
                credit_card=m["credit_card"],
                bank_account=m["bank_account"],
                tax_id=m["tax_id"],
            ),
            "web": web.FIELD_ROUTER.with_handlers(url=m["url"]),
        }

    @property
    def kinds(self) -> tuple:
        """Names accepted by ``mask_value``."""
        return tuple(self._maskers)

    def mask_value(self, kind: str, value: Any) -> Any:
        """Mask a single value with the masker registered under ``kind``.

        Raises:
            MaskingParameterError: If ``kind`` is not a known masker.
        """
        masker = self._maskers.get(kind)
        if masker is None:
            raise MaskingParameterError(
                f"Unknown masking kind {kind!r}; expected one of {sorted(self._maskers)}",
                parameter="kind",
                actual_value=kind,
            )
        return masker(value)

    def mask_fields(
        self,
        category: str,
        data: Mapping[str, Any],
        explicit_types: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        """Mask a field mapping with the dispatcher of ``category``.

        Args:
            category: ``"personal"``, ``"financial"`` or ``"web"``
            data: Field name to raw value
            explicit_types: Field name to masking kind, overriding the
                name-based routing (used for financial identifiers)

        Raises:
            MaskingParameterError: If ``category`` is not known.
        """
        router = self._routers.get(category)
        if router is None:
            raise MaskingParameterError(
                f"Unknown field category {category!r}; expected one of {list(self.CATEGORIES)}",
                parameter="category",
                actual_value=category,
            )

        logger.debug("Masking %d %s fields", len(data), category)
        return router.apply(data, overrides=explicit_types)

    def is_masked(self, value: Any) -> bool:
        return is_masked(value)
