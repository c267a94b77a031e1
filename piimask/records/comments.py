"""Anonymization of comment author details."""

import logging
from typing import Any, Dict, Hashable, Iterable

from piimask.core.detection import any_masked
from piimask.masking import email, network, personal, web

from .store import RecordStore

logger = logging.getLogger(__name__)

APPROVED = "approve"


class CommentAnonymizer:
    """Anonymizes the author fields of comment records.

    The comment body and date are never touched; only the author name,
    email, website and IP address are masked.
    """

    def __init__(self, store: RecordStore):
        self.store = store

    def anonymize_data(self, comment_id: Hashable) -> bool:
        """Anonymize the author details of one comment.

        Returns:
            True if the store accepted the update, False if the comment does
            not exist or the update failed.
        """
        comment = self.store.get_record(comment_id)
        if comment is None:
            logger.warning("Comment %s not found, nothing anonymized", comment_id)
            return False

        updates = {
            "comment_author": personal.mask_name(comment.get("comment_author") or ""),
            "comment_author_email": email.placeholder(comment.get("comment_author_email") or ""),
            "comment_author_url": web.mask_url(comment.get("comment_author_url") or "") or "",
            "comment_author_IP": network.anonymize(comment.get("comment_author_IP") or "") or "",
        }

        updated = self.store.update_record(comment_id, updates)
        if not updated:
            logger.warning("Store rejected anonymized fields for comment %s", comment_id)
        return updated

    def is_anonymized(self, comment_id: Hashable) -> bool:
        """Check whether a comment's author email, name or IP looks masked."""
        comment = self.store.get_record(comment_id)
        if comment is None:
            return False

        return any_masked(
            comment.get("comment_author_email"),
            comment.get("comment_author"),
            comment.get("comment_author_IP"),
        )

    def anonymize_by_post(self, post_id: Hashable) -> Dict[Hashable, bool]:
        """Anonymize every approved comment on a post."""
        comments = self.store.list_records({"post_id": post_id, "status": APPROVED})
        logger.debug("Anonymizing %d approved comments on post %s", len(comments), post_id)

        return {
            comment["comment_ID"]: self.anonymize_data(comment["comment_ID"])
            for comment in comments
        }

    def anonymized_export(self, comment_id: Hashable) -> Dict[str, Any]:
        """Build a masked copy of a comment for export; ``{}`` if missing."""
        comment = self.store.get_record(comment_id)
        if comment is None:
            return {}

        return {
            "comment_ID": comment_id,
            "comment_author": personal.mask_name(comment.get("comment_author") or ""),
            "comment_author_email": email.mask_email(comment.get("comment_author_email") or ""),
            "comment_author_url": web.mask_url(comment.get("comment_author_url") or ""),
            "comment_author_IP": network.anonymize(comment.get("comment_author_IP") or ""),
            "comment_content": comment.get("comment_content"),
            "comment_date": comment.get("comment_date"),
        }

    def bulk_anonymize(self, comment_ids: Iterable[Hashable]) -> Dict[Hashable, bool]:
        """Anonymize several comments; returns the outcome per comment id."""
        return {comment_id: self.anonymize_data(comment_id) for comment_id in comment_ids}
