"""Shared fixtures for piimask tests."""

import logging

import pytest
import structlog

from piimask.core.config import set_config
from piimask.records import InMemoryRecordStore


@pytest.fixture(autouse=True)
def reset_global_config(monkeypatch: pytest.MonkeyPatch):
    """Isolate tests from PIIMASK_* variables and the cached global config."""
    for name in (
        "PIIMASK_LOG_LEVEL",
        "PIIMASK_LOG_FORMAT",
        "PIIMASK_PHONE_KEEP_LAST",
        "PIIMASK_ZIPCODE_KEEP_LAST",
        "PIIMASK_FINANCIAL_KEEP_LAST",
        "PIIMASK_VALIDATE_URLS",
    ):
        monkeypatch.delenv(name, raising=False)
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def restore_logging():
    """Drop handlers installed by configure_logging and reset structlog."""
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def chrome_user_agent() -> str:
    return (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )


@pytest.fixture
def user_store() -> InMemoryRecordStore:
    """Store holding one fully populated user and one sparse user."""
    return InMemoryRecordStore(
        {
            1: {
                "ID": 1,
                "user_email": "john.doe@example.com",
                "user_nicename": "johndoe",
                "user_url": "https://johndoe.example.com/about",
                "display_name": "John Doe",
                "first_name": "John",
                "last_name": "Doe",
                "billing_first_name": "John",
                "billing_email": "john@example.com",
                "billing_phone": "555-123-4567",
                "billing_address_1": "123 Main St",
                "billing_postcode": "90210",
                "billing_company": "Acme Inc.",
            },
            2: {
                "ID": 2,
                "user_email": "",
                "display_name": "",
            },
        }
    )


@pytest.fixture
def comment_store() -> InMemoryRecordStore:
    """Store holding approved and held comments on two posts."""

    def comment(comment_id: int, post_id: int, status: str, author: str, ip: str) -> dict:
        return {
            "comment_ID": comment_id,
            "post_id": post_id,
            "status": status,
            "comment_author": author,
            "comment_author_email": "jane@example.org",
            "comment_author_url": "https://jane.example.org/blog",
            "comment_author_IP": ip,
            "comment_content": "Great post!",
            "comment_date": "2024-01-02 10:00:00",
        }

    return InMemoryRecordStore(
        {
            10: comment(10, 5, "approve", "Jane Roe", "203.0.113.42"),
            11: comment(11, 5, "hold", "Held Back", "198.51.100.7"),
            12: comment(12, 6, "approve", "Other Post", "2001:db8::1"),
            13: comment(13, 5, "approve", "No Address", "unknown"),
        }
    )
